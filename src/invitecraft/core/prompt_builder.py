"""Prompt composition for the generative collaborators.

Two prompts are built here:

- the **background prompt** sent to the image model, which embeds the
  user's design cues and the derived palette and always asks for a clean,
  text-free centre;
- the **wording messages** sent to the text model, which ask for polished
  invitation copy in the paragraph and ``**bold**`` conventions understood
  by :mod:`invitecraft.core.text`.

Background Template::

    Create a refined 5x7 wedding invitation background with the following
    style cues: [Design Prompt]. Use the palette ([hex soft], [hex mid],
    [hex deep]). [Fixed: clear centre and no-text directive]

Usage
-----
::

    palette = keyword_palette("teal watercolour wash")
    prompt = build_image_prompt("teal watercolour wash", palette)
"""

from __future__ import annotations

from collections.abc import Sequence

# ---------------------------------------------------------------------------
# Fixed boilerplate sections.
# The background must leave room for the wording, so the composition and
# no-text directives are constants rather than user-controlled parts.
# ---------------------------------------------------------------------------

_BACKGROUND_OPENING = (
    "Create a refined 5x7 wedding invitation background with the following style cues"
)

_BACKGROUND_DIRECTIVE = (
    "Leave a soft, readable centre area with gentle lighting and avoid any text, "
    "typography, watermarks or signatures."
)

_COPYWRITER_INSTRUCTIONS = (
    "You are an expert wedding invitation copywriter. Produce elegant, concise wording "
    "with double line breaks between sections. Use markdown bold for headline lines "
    "that must stand out."
)


def palette_hint(palette: Sequence[str]) -> str:
    """Render a palette as ``"hex #aaa, hex #bbb, hex #ccc"``."""
    return ", ".join(f"hex {color}" for color in palette)


def build_image_prompt(user_prompt: str, palette: Sequence[str]) -> str:
    """Compose the background-artwork prompt.

    Args:
        user_prompt: Free-text design cues (e.g. "teal and gold botanical
            border").  Surrounding whitespace is stripped.
        palette: The palette derived from the same prompt.

    Returns:
        The prompt string.  Identical inputs give identical output.
    """
    return (
        f"{_BACKGROUND_OPENING}: {(user_prompt or '').strip()}. "
        f"Use the palette ({palette_hint(palette)}). "
        f"{_BACKGROUND_DIRECTIVE}"
    )


def build_wording_messages(wording: str, style_prompt: str) -> list[dict[str, str]]:
    """Build the system/user message pair for the wording request.

    Args:
        wording: The current invitation details or draft wording.
        style_prompt: Free-text tone and style request.

    Returns:
        A list of two ``{"role", "content"}`` dictionaries.
    """
    return [
        {"role": "system", "content": _COPYWRITER_INSTRUCTIONS},
        {
            "role": "user",
            "content": (
                f"Invitation details: {wording}. Style request: {style_prompt}. "
                "Return only the invitation body."
            ),
        },
    ]
