"""Persisted user preferences.

The only preference today is the saved OpenAI API key.  It is read through
an injected :class:`PreferenceStore` rather than global state, so the API
layer decides where it lives and tests can swap in memory storage.  Core
functions never touch a store.

Saving an empty or whitespace-only value removes the stored preference.
Storage failures are logged and swallowed: a broken preferences file must
not stop the user from typing a key in again.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEY_PREFERENCE = "invite_card_api_key"


class PreferenceStore(ABC):
    """A single optional string preference."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored value, or ``None`` when nothing is stored."""

    @abstractmethod
    def save(self, value: str) -> None:
        """Store *value*; an empty value clears the preference."""

    def clear(self) -> None:
        self.save("")


class MemoryPreferenceStore(PreferenceStore):
    """In-process store, mostly for tests."""

    def __init__(self, value: str | None = None):
        self._value = value.strip() if value and value.strip() else None

    def load(self) -> str | None:
        return self._value

    def save(self, value: str) -> None:
        value = (value or "").strip()
        self._value = value or None


class JsonFilePreferenceStore(PreferenceStore):
    """Store one preference under *key* in a small JSON document.

    Other keys in the same file are preserved on write.
    """

    def __init__(self, path: Path, key: str = API_KEY_PREFERENCE):
        self.path = Path(path)
        self.key = key

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as handle:
            data = json.load(handle)
        return data if isinstance(data, dict) else {}

    def load(self) -> str | None:
        try:
            value = self._read().get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Unable to read preference '{self.key}' from {self.path}: {e}")
            return None

        if isinstance(value, str) and value.strip():
            return value
        return None

    def save(self, value: str) -> None:
        value = (value or "").strip()
        try:
            data = self._read()
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable preferences file {self.path}: {e}")
            data = {}

        if value:
            data[self.key] = value
        else:
            data.pop(self.key, None)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
        except OSError as e:
            logger.warning(f"Unable to persist preference '{self.key}' to {self.path}: {e}")
