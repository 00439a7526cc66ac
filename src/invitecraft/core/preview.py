"""Preview composition.

Ties the palette selector, layout analyzer, text formatter and prompt
builder together into a single description of what a front end should
paint.  Nothing here renders pixels; the result is plain data.
"""

from __future__ import annotations

from dataclasses import dataclass

from invitecraft.core.color import apply_alpha
from invitecraft.core.layout import Align, LayoutPlan, analyze_layout
from invitecraft.core.palette import Palette, keyword_palette
from invitecraft.core.prompt_builder import build_image_prompt
from invitecraft.core.text import Token, format_wording, token_to_dict


@dataclass(frozen=True)
class Preview:
    """Everything needed to paint one invitation preview.

    Attributes:
        palette: Palette derived from the design prompt.
        layout: Layout plan for the wording.
        align: Alignment actually used (layout or manual override).
        overlay: CSS ``rgba()`` overlay, or ``None`` when there is no overlay.
        background: CSS background value, artwork URL or palette gradient.
        paragraphs: Tokenised wording.
        image_prompt: Prompt to request background artwork with.
    """

    palette: Palette
    layout: LayoutPlan
    align: Align
    overlay: str | None
    background: str
    paragraphs: list[list[Token]]
    image_prompt: str

    def to_dict(self) -> dict:
        return {
            "palette": list(self.palette),
            "layout": self.layout.to_dict(),
            "align": self.align.value,
            "overlay": self.overlay,
            "background": self.background,
            "paragraphs": [
                [token_to_dict(token) for token in paragraph] for paragraph in self.paragraphs
            ],
            "image_prompt": self.image_prompt,
        }


def combine_prompts(style_prompt: str, design_prompt: str) -> str:
    """Join the style and design prompts the way the layout analyzer reads them."""
    return f"{style_prompt or ''} {design_prompt or ''}"


def gradient_background(palette: Palette) -> str:
    """CSS gradient shown when no artwork has been generated yet."""
    soft, mid, deep = palette
    return f"linear-gradient(135deg, {soft} 0%, {mid} 45%, {deep} 100%)"


def css_url(url: str) -> str:
    """Wrap *url* in a quoted CSS ``url()``.

    Backslashes and double quotes are escaped and newlines become CSS
    ``\\a`` escapes, so any URL yields a valid value.
    """
    escaped = url.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\r", "").replace("\n", "\\a ")
    return f'url("{escaped}")'


def compose_preview(
    wording: str,
    style_prompt: str,
    design_prompt: str,
    *,
    auto_layout: bool = True,
    manual_align: Align = Align.CENTER,
    background_url: str = "",
) -> Preview:
    """Compose the full preview for an invitation.

    The palette comes from the design prompt alone.  The layout is analysed
    against ``"{style_prompt} {design_prompt}"`` so tone words in either
    prompt count.

    Args:
        wording: Invitation wording with blank-line paragraphs and
            ``**bold**`` markers.
        style_prompt: Tone/style request.
        design_prompt: Background design request.
        auto_layout: Use the analysed alignment when ``True``; otherwise use
            *manual_align*.
        manual_align: Alignment override used when *auto_layout* is off.
        background_url: URL of generated artwork.  Empty for the gradient
            fallback.

    Returns:
        A :class:`Preview`.
    """
    palette = keyword_palette(design_prompt)
    layout = analyze_layout(wording, combine_prompts(style_prompt, design_prompt), palette)

    overlay = None
    if layout.overlay_color:
        overlay = apply_alpha(layout.overlay_color, layout.overlay_opacity)

    background = css_url(background_url) if background_url else gradient_background(palette)

    return Preview(
        palette=palette,
        layout=layout,
        align=layout.align if auto_layout else Align(manual_align),
        overlay=overlay,
        background=background,
        paragraphs=format_wording(wording),
        image_prompt=build_image_prompt(design_prompt, palette),
    )
