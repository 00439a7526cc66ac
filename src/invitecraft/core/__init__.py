"""Core design logic for invitation cards.

This module provides the core components of InviteCraft:

- **color**: Hex parsing, relative luminance, rgba formatting
- **palette**: Keyword-driven ``(soft, mid, deep)`` palette selection
- **layout**: Alignment, overlay, text colour and shadow decisions
- **text**: Paragraph splitting and ``**bold**`` tokenisation
- **prompt_builder**: Prompts for the image and text models
- **preview**: One-call composition of all of the above

Everything above is pure and deterministic, so callers may memoise freely.

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with INVITECRAFT_ in .env files

2. **Decision Layer** (color.py, palette.py, layout.py, text.py,
   prompt_builder.py, preview.py):
   - No I/O, no shared state, no exceptions for bad input

3. **Collaborator Layer** (openai_client.py, preferences.py):
   - HTTP calls to OpenAI (wording and artwork)
   - Saved API key behind an injectable store

Usage Example
-------------
    from invitecraft.core import compose_preview

    preview = compose_preview(
        wording="Join us\\n\\n**Saturday, 4 PM**",
        style_prompt="modern and clean",
        design_prompt="teal watercolour wash",
    )
    print(preview.layout.align, preview.overlay)
"""

from invitecraft.core.color import apply_alpha, hex_to_rgb, luminance
from invitecraft.core.layout import Align, LayoutPlan, analyze_layout, pick_alignment
from invitecraft.core.palette import DEFAULT_PALETTE, PRESET_PALETTES, Palette, keyword_palette
from invitecraft.core.preview import Preview, compose_preview
from invitecraft.core.prompt_builder import build_image_prompt
from invitecraft.core.text import Strong, emphasise_inline, sanitize_paragraphs

__all__ = [
    "Align",
    "DEFAULT_PALETTE",
    "LayoutPlan",
    "PRESET_PALETTES",
    "Palette",
    "Preview",
    "Strong",
    "analyze_layout",
    "apply_alpha",
    "build_image_prompt",
    "compose_preview",
    "emphasise_inline",
    "hex_to_rgb",
    "keyword_palette",
    "luminance",
    "pick_alignment",
    "sanitize_paragraphs",
]
