"""InviteCraft — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI
function that launches the uvicorn server.

Architecture
------------
- **Design decisions** (palette, layout, text tokens, prompts) are pure
  functions from :mod:`invitecraft.core`, recomputed on every request.
- **Generation** goes through :class:`~invitecraft.core.openai_client.OpenAIClient`.
- **The saved API key** lives behind a
  :class:`~invitecraft.core.preferences.PreferenceStore` injected with
  ``Depends`` so tests can override it.
- **The OpenAI proxy** lets a browser front end call OpenAI without
  exposing the server key.

Endpoints
---------
==============  ================================  ==================================
Method          Path                              Purpose
==============  ================================  ==================================
GET             ``/api/health``                   Liveness and version
GET             ``/api/palettes``                 Preset palettes and default
POST            ``/api/palette``                  Palette for a design prompt
POST            ``/api/layout``                   Layout plan
POST            ``/api/text/format``              Paragraphs and bold tokens
POST            ``/api/prompt/compile``           Background prompt preview
POST            ``/api/preview``                  Full preview composition
GET             ``/api/preferences/api-key``      Saved key status
PUT             ``/api/preferences/api-key``      Save the key
DELETE          ``/api/preferences/api-key``      Forget the key
POST            ``/api/generate/wording``         Polished wording
POST            ``/api/generate/background``      Background artwork
GET/POST/OPT    ``/api/openai-proxy?path=``       OpenAI pass-through
==============  ================================  ==================================

Usage
-----
CLI (installed entry point)::

    invitecraft

Direct invocation::

    python -m invitecraft.api.main
"""

from __future__ import annotations

import logging
from typing import NoReturn

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from invitecraft import __version__
from invitecraft.api.models import (
    ApiKeyRequest,
    BackgroundRequest,
    LayoutPlanResponse,
    LayoutRequest,
    PaletteRequest,
    PreviewRequest,
    PromptCompileRequest,
    TextFormatRequest,
    WordingRequest,
)
from invitecraft.core.config import InviteCraftConfig, config
from invitecraft.core.layout import analyze_layout
from invitecraft.core.openai_client import (
    OpenAIClient,
    OpenAIConfigError,
    OpenAIError,
)
from invitecraft.core.palette import (
    DEFAULT_PALETTE,
    PRESET_PALETTES,
    Palette,
    keyword_palette,
    matched_keyword,
)
from invitecraft.core.preferences import JsonFilePreferenceStore, PreferenceStore
from invitecraft.core.preview import compose_preview
from invitecraft.core.prompt_builder import build_image_prompt
from invitecraft.core.text import format_wording, token_to_dict

logger = logging.getLogger(__name__)

PROXY_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="InviteCraft",
    description="Invitation card design API: palettes, layout, wording and artwork.",
    version=__version__,
)

# The front end is usually served from a different port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_config() -> InviteCraftConfig:
    """Return the global configuration instance."""
    return config


def get_preference_store(cfg: InviteCraftConfig = Depends(get_config)) -> PreferenceStore:
    """Return the store holding the saved API key."""
    return JsonFilePreferenceStore(cfg.preferences_file)


def get_http_transport() -> httpx.AsyncBaseTransport | None:
    """Transport for outgoing OpenAI calls.  ``None`` means the real network."""
    return None


# ---------------------------------------------------------------------------
# Helpers.
# ---------------------------------------------------------------------------


def _resolve_palette(palette: list[str] | None, prompt: str) -> Palette:
    if palette is not None:
        return tuple(palette)
    return keyword_palette(prompt)


def _mask_key(key: str) -> str:
    """Show only the last four characters of a key."""
    if len(key) <= 4:
        return "*" * len(key)
    return f"{'*' * 8}{key[-4:]}"


def _build_client(
    api_key: str | None,
    proxy_base: str | None,
    store: PreferenceStore,
    cfg: InviteCraftConfig,
    transport: httpx.AsyncBaseTransport | None,
) -> OpenAIClient:
    """Resolve credentials for one generation call.

    The key comes from the request, then the saved preference, then the
    server configuration.  The proxy comes from the request, then the
    configuration.
    """
    key = (api_key or "").strip() or store.load() or cfg.openai_api_key
    proxy = cfg.openai_proxy_base if proxy_base is None else proxy_base
    return OpenAIClient(key, proxy, cfg, transport=transport)


def _raise_for_openai_error(e: OpenAIError, action: str) -> NoReturn:
    logger.error(f"Error generating {action}: {e}", exc_info=True)
    status_code = 400 if isinstance(e, OpenAIConfigError) else 502
    raise HTTPException(status_code=status_code, detail=str(e)) from e


# ---------------------------------------------------------------------------
# Design routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict:
    """Return liveness and the API version."""
    return {"ok": True, "version": __version__}


@app.get("/api/palettes")
async def list_palettes() -> dict:
    """Return the preset keyword palettes in match order, plus the default."""
    return {
        "presets": [
            {"keyword": keyword, "palette": list(palette)}
            for keyword, palette in PRESET_PALETTES.items()
        ],
        "default": list(DEFAULT_PALETTE),
    }


@app.post("/api/palette")
async def derive_palette(req: PaletteRequest) -> dict:
    """Derive the palette for a design prompt.

    ``keyword`` is the preset keyword that matched, or ``None`` when the
    default palette was used.
    """
    return {
        "palette": list(keyword_palette(req.prompt)),
        "keyword": matched_keyword(req.prompt),
    }


@app.post("/api/layout", response_model=LayoutPlanResponse)
async def layout(req: LayoutRequest) -> dict:
    """Analyse the layout for wording, prompt and palette.

    When no palette is supplied it is derived from the prompt.
    """
    palette = _resolve_palette(req.palette, req.prompt)
    return analyze_layout(req.text, req.prompt, palette).to_dict()


@app.post("/api/text/format")
async def format_text(req: TextFormatRequest) -> dict:
    """Split wording into paragraphs and tokenise bold spans.

    Returns:
        Dictionary with ``paragraphs``: a list of token lists, each token
        either ``{"text": ...}`` or ``{"strong": ...}``.
    """
    return {
        "paragraphs": [
            [token_to_dict(token) for token in paragraph]
            for paragraph in format_wording(req.text)
        ]
    }


@app.post("/api/prompt/compile")
async def compile_prompt(req: PromptCompileRequest) -> dict:
    """Preview the background prompt without calling the image model."""
    palette = _resolve_palette(req.palette, req.prompt)
    return {"palette": list(palette), "prompt": build_image_prompt(req.prompt, palette)}


@app.post("/api/preview")
async def preview(req: PreviewRequest) -> dict:
    """Compose palette, layout, tokens and image prompt in one call."""
    return compose_preview(
        req.wording,
        req.style_prompt,
        req.design_prompt,
        auto_layout=req.auto_layout,
        manual_align=req.manual_align,
        background_url=req.background_url,
    ).to_dict()


# ---------------------------------------------------------------------------
# Preference routes.
# ---------------------------------------------------------------------------


@app.get("/api/preferences/api-key")
async def get_api_key_status(store: PreferenceStore = Depends(get_preference_store)) -> dict:
    """Report whether a key is saved.  The key itself is never returned."""
    key = store.load()
    return {"saved": key is not None, "masked": _mask_key(key) if key else None}


@app.put("/api/preferences/api-key")
async def save_api_key(
    req: ApiKeyRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> dict:
    """Save the API key; an empty key clears it."""
    store.save(req.api_key)
    key = store.load()
    logger.info("Saved API key preference" if key else "Cleared API key preference")
    return {"saved": key is not None, "masked": _mask_key(key) if key else None}


@app.delete("/api/preferences/api-key")
async def delete_api_key(store: PreferenceStore = Depends(get_preference_store)) -> dict:
    """Forget the saved API key."""
    store.clear()
    return {"saved": False, "masked": None}


# ---------------------------------------------------------------------------
# Generation routes.
# ---------------------------------------------------------------------------


@app.post("/api/generate/wording")
async def generate_wording(
    req: WordingRequest,
    store: PreferenceStore = Depends(get_preference_store),
    cfg: InviteCraftConfig = Depends(get_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> dict:
    """Ask the text model for polished wording.

    Raises:
        HTTPException: 400 when no key or proxy is available, 502 when the
            upstream call fails or returns nothing usable.
    """
    client = _build_client(req.api_key, req.proxy_base, store, cfg, transport)
    try:
        wording = await client.generate_wording(req.wording, req.style_prompt)
    except OpenAIError as e:
        _raise_for_openai_error(e, "wording")

    return {
        "wording": wording,
        "paragraphs": [
            [token_to_dict(token) for token in paragraph] for paragraph in format_wording(wording)
        ],
    }


@app.post("/api/generate/background")
async def generate_background(
    req: BackgroundRequest,
    store: PreferenceStore = Depends(get_preference_store),
    cfg: InviteCraftConfig = Depends(get_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> dict:
    """Ask the image model for background artwork.

    Returns:
        Dictionary with ``background_url`` (a PNG data URL), the
        ``palette`` and the ``prompt`` that was sent.
    """
    palette = keyword_palette(req.design_prompt)
    client = _build_client(req.api_key, req.proxy_base, store, cfg, transport)
    try:
        background_url = await client.generate_background(req.design_prompt, palette)
    except OpenAIError as e:
        _raise_for_openai_error(e, "background")

    return {
        "background_url": background_url,
        "palette": list(palette),
        "prompt": build_image_prompt(req.design_prompt, palette),
    }


# ---------------------------------------------------------------------------
# OpenAI proxy.
# ---------------------------------------------------------------------------


def _proxy_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=PROXY_CORS_HEADERS)


@app.api_route("/api/openai-proxy", methods=["GET", "POST", "OPTIONS"])
async def openai_proxy(
    request: Request,
    path: str = "",
    cfg: InviteCraftConfig = Depends(get_config),
    transport: httpx.AsyncBaseTransport | None = Depends(get_http_transport),
) -> Response:
    """Forward a request to OpenAI.

    ``path`` is the OpenAI path (e.g. ``/v1/responses``).  The special path
    ``__health`` answers ``{"ok": true}`` without contacting OpenAI.  The
    caller's Authorization header is forwarded; without one the configured
    server key is used.

    Returns:
        The upstream status and body, or a JSON ``{"error": ...}`` with 401
        (no credentials), 400 (missing or invalid path) or 502 (upstream
        unreachable).
    """
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=PROXY_CORS_HEADERS)

    if path == "__health":
        return JSONResponse({"ok": True}, headers=PROXY_CORS_HEADERS)

    auth_header = request.headers.get("authorization", "").strip()
    if not auth_header and cfg.openai_api_key:
        auth_header = f"Bearer {cfg.openai_api_key}"
    if not auth_header:
        return _proxy_error(401, "Set INVITECRAFT_OPENAI_API_KEY or provide an Authorization header.")

    if not path:
        return _proxy_error(400, "Missing path query parameter.")
    if not path.startswith("/"):
        return _proxy_error(400, "path must be an absolute OpenAI path such as /v1/responses.")

    upstream_url = f"{cfg.openai_base_url.rstrip('/')}{path}"
    body = await request.body() if request.method == "POST" else None

    try:
        async with httpx.AsyncClient(timeout=cfg.request_timeout, transport=transport) as client:
            upstream = await client.request(
                request.method,
                upstream_url,
                content=body,
                headers={"Content-Type": "application/json", "Authorization": auth_header},
            )
    except httpx.HTTPError as e:
        logger.error(f"OpenAI proxy request to {path} failed: {e}")
        return _proxy_error(502, str(e) or "Upstream error")

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type", "application/json; charset=utf-8"),
        headers=PROXY_CORS_HEADERS,
    )


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~invitecraft.core.config.config`.
    This function is registered as the ``invitecraft`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "invitecraft.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
