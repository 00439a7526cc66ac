"""Thin OpenAI collaborator for wording and background artwork.

Requests go either straight to OpenAI or through a proxy prefix such as the
one served at ``/api/openai-proxy?path=`` by :mod:`invitecraft.api.main`.
There is no retry or backoff: a failed call raises and the caller decides
what to tell the user.

Error Hierarchy
---------------
- :class:`OpenAIError`: base class
- :class:`OpenAIConfigError`: neither an API key nor a proxy is available
- :class:`OpenAIRequestError`: the HTTP call failed or returned non-2xx
- :class:`OpenAIResponseError`: the response carried no usable output
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

import httpx

from invitecraft.core.config import InviteCraftConfig
from invitecraft.core.prompt_builder import build_image_prompt, build_wording_messages

logger = logging.getLogger(__name__)

RESPONSES_PATH = "/v1/responses"
IMAGES_PATH = "/v1/images/generations"

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


class OpenAIError(Exception):
    """Base class for collaborator failures.

    The message is intended to be displayed directly to the user.
    """


class OpenAIConfigError(OpenAIError):
    pass


class OpenAIRequestError(OpenAIError):
    """The OpenAI request failed.

    Attributes:
        status_code: Upstream HTTP status, or ``None`` for transport errors.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class OpenAIResponseError(OpenAIError):
    pass


def extract_output_text(data: dict) -> str:
    """Pull the generated text out of a ``/v1/responses`` payload.

    Prefers ``output_text``; otherwise concatenates the text chunks of the
    first output item.
    """
    output_text = data.get("output_text")
    if isinstance(output_text, str):
        return output_text

    output = data.get("output")
    if not isinstance(output, list) or not output or not isinstance(output[0], dict):
        return ""
    chunks = output[0].get("content")
    if not isinstance(chunks, list):
        return ""
    return "".join(chunk.get("text") or "" for chunk in chunks if isinstance(chunk, dict))


def clean_wording(text: str) -> str:
    """Collapse runs of three or more newlines to one blank line and strip."""
    return _EXCESS_BLANK_LINES.sub("\n\n", text).strip()


class OpenAIClient:
    """Async client for the two OpenAI calls the app makes.

    Args:
        api_key: Bearer token.  Optional when a proxy injects its own.
        proxy_base: Prefix used instead of *base_url* when non-empty.  The
            request path is appended verbatim.
        config: Source of model names, sizes and timeouts.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: str | None,
        proxy_base: str,
        config: InviteCraftConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = (api_key or "").strip()
        self.proxy_base = (proxy_base or "").strip()
        self.config = config
        self._transport = transport

    def build_url(self, path: str) -> str:
        if self.proxy_base:
            return f"{self.proxy_base}{path}"
        return f"{self.config.openai_base_url.rstrip('/')}{path}"

    def build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def post(self, path: str, payload: dict) -> dict:
        """POST *payload* as JSON and return the decoded JSON response.

        Raises:
            OpenAIConfigError: If neither an API key nor a proxy is set.
            OpenAIRequestError: On transport errors or non-2xx responses.
        """
        if not self.proxy_base and not self.api_key:
            raise OpenAIConfigError("Provide an OpenAI API key or a proxy endpoint.")

        url = self.build_url(path)
        logger.debug(f"POST {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, headers=self.build_headers(), json=payload)
        except httpx.HTTPError as e:
            raise OpenAIRequestError(f"OpenAI request failed: {e}") from e

        if not response.is_success:
            message = response.text or response.reason_phrase
            raise OpenAIRequestError(
                f"OpenAI request failed ({response.status_code}): {message}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise OpenAIResponseError("OpenAI returned a non-JSON response.") from e

        if not isinstance(data, dict):
            raise OpenAIResponseError("OpenAI returned an unexpected response shape.")
        return data

    async def generate_wording(self, wording: str, style_prompt: str) -> str:
        """Ask the text model to rewrite *wording* in the requested style.

        Returns:
            Cleaned wording with at most one blank line between paragraphs.

        Raises:
            OpenAIResponseError: If the model returned no text.
        """
        payload = {
            "model": self.config.text_model,
            "input": build_wording_messages(wording, style_prompt),
            "temperature": self.config.text_temperature,
        }
        data = await self.post(RESPONSES_PATH, payload)

        cleaned = clean_wording(extract_output_text(data))
        if not cleaned:
            raise OpenAIResponseError("OpenAI returned an empty response.")

        logger.info(f"Generated wording ({len(cleaned)} characters)")
        return cleaned

    async def generate_background(self, design_prompt: str, palette: Sequence[str]) -> str:
        """Request background artwork and return it as a PNG data URL.

        Raises:
            OpenAIResponseError: If the response held no image data.
        """
        payload = {
            "model": self.config.image_model,
            "prompt": build_image_prompt(design_prompt, palette),
            "size": self.config.image_size,
            "response_format": "b64_json",
        }
        data = await self.post(IMAGES_PATH, payload)

        items = data.get("data")
        if not isinstance(items, list):
            items = []
        b64 = items[0].get("b64_json") if items and isinstance(items[0], dict) else None
        if not b64:
            raise OpenAIResponseError("OpenAI returned no image data.")

        logger.info("Generated background artwork")
        return f"data:image/png;base64,{b64}"
