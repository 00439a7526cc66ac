"""Pydantic request and response models for the InviteCraft API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.

Models
------
PaletteRequest
    Payload for ``POST /api/palette``.
LayoutRequest
    Payload for ``POST /api/layout``.
TextFormatRequest
    Payload for ``POST /api/text/format``.
PromptCompileRequest
    Payload for ``POST /api/prompt/compile``.
PreviewRequest
    Payload for ``POST /api/preview``.
ApiKeyRequest
    Payload for ``PUT /api/preferences/api-key``.
WordingRequest / BackgroundRequest
    Payloads for the generation routes.
LayoutPlanResponse
    Serialised :class:`~invitecraft.core.layout.LayoutPlan`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from invitecraft.core.layout import Align


class PaletteRequest(BaseModel):
    """Request body for ``POST /api/palette``.

    Attributes:
        prompt: Free-text design prompt.
    """

    prompt: str = Field(
        default="",
        description="Free-text design prompt to derive the palette from.",
    )


class PaletteBody(BaseModel):
    """Mixin for requests that may carry an explicit palette."""

    palette: list[str] | None = Field(
        default=None,
        description="Explicit (soft, mid, deep) palette.  Derived from the prompt when omitted.",
    )

    @field_validator("palette")
    @classmethod
    def _three_stops(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and len(value) != 3:
            raise ValueError("palette must have exactly 3 colours")
        return value


class LayoutRequest(PaletteBody):
    """Request body for ``POST /api/layout``.

    Attributes:
        text: Invitation wording.
        prompt: Combined style and design prompt.
        palette: Optional explicit palette.
    """

    text: str = Field(default="", description="Invitation wording.")
    prompt: str = Field(default="", description="Combined style and design prompt.")


class TextFormatRequest(BaseModel):
    """Request body for ``POST /api/text/format``."""

    text: str = Field(default="", description="Invitation wording to split and tokenise.")


class PromptCompileRequest(PaletteBody):
    """Request body for ``POST /api/prompt/compile``.

    Attributes:
        prompt: Free-text design prompt.
        palette: Optional explicit palette.
    """

    prompt: str = Field(default="", description="Free-text design prompt.")


class PreviewRequest(BaseModel):
    """Request body for ``POST /api/preview``.

    Attributes:
        wording: Invitation wording with blank-line paragraphs and
            ``**bold**`` markers.
        style_prompt: Tone/style request.
        design_prompt: Background design request.
        auto_layout: Use the analysed alignment.  Defaults to ``True``.
        manual_align: Alignment used when ``auto_layout`` is ``False``.
        background_url: Generated artwork URL.  Empty for the palette
            gradient.
    """

    wording: str = Field(default="", description="Invitation wording.")
    style_prompt: str = Field(default="", description="Tone/style request.")
    design_prompt: str = Field(default="", description="Background design request.")
    auto_layout: bool = Field(default=True, description="Use the analysed alignment.")
    manual_align: Align = Field(
        default=Align.CENTER,
        description="Alignment override when auto_layout is false.",
    )
    background_url: str = Field(default="", description="Generated artwork URL.")


class ApiKeyRequest(BaseModel):
    """Request body for ``PUT /api/preferences/api-key``.

    An empty key clears the saved preference.
    """

    api_key: str = Field(default="", description="OpenAI API key to remember.")


class WordingRequest(BaseModel):
    """Request body for ``POST /api/generate/wording``."""

    wording: str = Field(..., description="Invitation details or draft wording.")
    style_prompt: str = Field(default="", description="Tone/style request.")
    api_key: str | None = Field(
        default=None,
        description="API key for this call.  Falls back to the saved key, then the server key.",
    )
    proxy_base: str | None = Field(
        default=None,
        description="Proxy prefix for this call.  Falls back to the configured proxy.",
    )


class BackgroundRequest(BaseModel):
    """Request body for ``POST /api/generate/background``."""

    design_prompt: str = Field(..., description="Background design request.")
    api_key: str | None = Field(default=None, description="API key for this call.")
    proxy_base: str | None = Field(default=None, description="Proxy prefix for this call.")


class LayoutPlanResponse(BaseModel):
    """Serialised layout plan."""

    align: Align
    overlay_color: str | None
    overlay_opacity: float = Field(..., ge=0.0, le=1.0)
    text_color: str
    shadow: str
    accent: str
