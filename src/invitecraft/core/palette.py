"""Keyword-driven palette selection.

A palette is an ordered ``(soft, mid, deep)`` triple of hex colours:

- **soft**: light background tone, start of the fallback gradient
- **mid**: accent colour and the default overlay tint
- **deep**: dark tone used for strong overlays

The design prompt is matched against a fixed keyword table.  The table is
scanned in declaration order and the first keyword found anywhere in the
lower-cased prompt wins, so ``"navy and gold"`` resolves to the gold
palette.  Prompts with no keyword get :data:`DEFAULT_PALETTE`.
"""

from __future__ import annotations

from types import MappingProxyType

Palette = tuple[str, str, str]

# Declaration order is the match precedence.
PRESET_PALETTES: MappingProxyType[str, Palette] = MappingProxyType(
    {
        "gold": ("#f5e6b3", "#d4af37", "#8c6a03"),
        "blush": ("#fdecef", "#f4c6d7", "#b15a72"),
        "emerald": ("#e6f5ed", "#38a169", "#064e3b"),
        "teal": ("#e0f2f1", "#2c7a7b", "#134e4a"),
        "lavender": ("#f5f3ff", "#c4b5fd", "#6b21a8"),
        "navy": ("#e2e8f0", "#1e3a8a", "#0b1f52"),
        "coral": ("#fff1eb", "#fb7185", "#9f1239"),
        "rustic": ("#f7f2eb", "#d97706", "#4b3419"),
        "minimalist": ("#f9fafb", "#e2e8f0", "#94a3b8"),
        "classic": ("#fff7ed", "#fbbf24", "#7c2d12"),
    }
)

DEFAULT_PALETTE: Palette = ("#f8f5f0", "#d6c3a5", "#8b6f47")


def keyword_palette(prompt: str) -> Palette:
    """Pick the palette for the first preset keyword contained in *prompt*.

    Args:
        prompt: Free-text design prompt.  ``None`` and empty strings are
            accepted and resolve to the default palette.

    Returns:
        A three-colour palette.  Never fails.
    """
    lower = (prompt or "").lower()
    for keyword, palette in PRESET_PALETTES.items():
        if keyword in lower:
            return palette
    return DEFAULT_PALETTE


def matched_keyword(prompt: str) -> str | None:
    """Return the keyword that :func:`keyword_palette` would match, if any."""
    lower = (prompt or "").lower()
    return next((keyword for keyword in PRESET_PALETTES if keyword in lower), None)
