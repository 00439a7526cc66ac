"""Layout and contrast decisions for an invitation rendering.

The analyzer looks at the wording, the combined style/design prompt and the
palette, and decides how the text should sit on the artwork:

- **alignment**: from explicit keywords, else from line length
- **overlay**: a tinted layer over the artwork; stronger for busy or dark
  requests
- **text colour and shadow**: from the average palette luminance
- **accent**: the palette's mid stop, used for emphasised spans

Both keyword heuristics are ordered decision tables of
``(pattern, outcome)`` pairs.  The order is significant: the first matching
row wins, so ``"formal royal"`` beats ``"minimal"`` when both appear.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from enum import Enum

from invitecraft.core.color import clamp01, luminance
from invitecraft.core.palette import Palette


class Align(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


WHITE = "#f8fafc"
SLATE = "#1f2937"

DEEP_FALLBACK = "#0f172a"
MID_FALLBACK = "#1f2937"
ACCENT_FALLBACK = "#c08457"

LIGHT_SHADOW = "0 14px 60px rgba(15, 23, 42, 0.25)"
STRONG_SHADOW = "0 18px 80px rgba(15, 23, 42, 0.35)"

# Average palette luminance above which the palette counts as light.
LIGHT_PALETTE_THRESHOLD = 0.65

# Lines longer than this read better left-aligned.
LONG_LINE_LENGTH = 64

ALIGNMENT_RULES: tuple[tuple[re.Pattern[str], Align], ...] = (
    (re.compile(r"right-aligned|align to the right|formal royal"), Align.RIGHT),
    (re.compile(r"left-aligned|modern|minimal|editorial|clean"), Align.LEFT),
    (re.compile(r"center|centre|traditional|classic|ceremony"), Align.CENTER),
)

BUSY_PATTERN = re.compile(
    r"ornate|detailed|pattern|floral|paisley|motif|illustrated|luxurious|vibrant"
)
DARK_PATTERN = re.compile(r"midnight|navy|noir|moody|night|galaxy")

BUSY_OPACITY = 0.42
DARK_OPACITY = 0.38
DEFAULT_OPACITY = 0.24

_LINE_BREAKS = re.compile(r"\n+")


@dataclass(frozen=True)
class LayoutPlan:
    """Presentation decisions for one invitation rendering.

    Attributes:
        align: Text alignment.
        overlay_color: Hex colour of the overlay layer, or ``None`` for no
            overlay.
        overlay_opacity: Overlay opacity in ``[0, 1]``.
        text_color: Hex colour for body text.
        shadow: CSS ``box-shadow`` value for the card.
        accent: Hex colour for emphasised spans.
    """

    align: Align
    overlay_color: str | None
    overlay_opacity: float
    text_color: str
    shadow: str
    accent: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["align"] = self.align.value
        return data


def _combine(text: str, prompt: str) -> str:
    return f"{prompt or ''} {text or ''}".lower()


def _palette_slot(palette: Palette, index: int, fallback: str) -> str:
    if len(palette) > index and palette[index]:
        return palette[index]
    return fallback


def pick_alignment(text: str, prompt: str) -> Align:
    """Choose the text alignment for *text* under *prompt*.

    Keyword rules are checked against the lower-cased ``"{prompt} {text}"``
    in :data:`ALIGNMENT_RULES` order.  When none match, the body is split
    into non-empty lines and any line longer than :data:`LONG_LINE_LENGTH`
    characters selects left alignment; otherwise the text is centred.
    """
    combined = _combine(text, prompt)
    for pattern, align in ALIGNMENT_RULES:
        if pattern.search(combined):
            return align

    lines = [line.strip() for line in _LINE_BREAKS.split(text or "")]
    if any(len(line) > LONG_LINE_LENGTH for line in lines if line):
        return Align.LEFT
    return Align.CENTER


def classify_tone(text: str, prompt: str) -> tuple[bool, bool]:
    """Return ``(busy, dark_request)`` for the combined prompt and text."""
    combined = _combine(text, prompt)
    return bool(BUSY_PATTERN.search(combined)), bool(DARK_PATTERN.search(combined))


def average_luminance(palette: Palette) -> float:
    if not palette:
        return luminance("")
    return sum(luminance(color) for color in palette) / len(palette)


def analyze_layout(text: str, prompt: str, palette: Palette) -> LayoutPlan:
    """Derive the :class:`LayoutPlan` for an invitation.

    Args:
        text: The invitation wording.
        prompt: Combined style and design prompt.
        palette: The ``(soft, mid, deep)`` palette in use.

    Returns:
        A new plan.  Identical arguments always produce equal plans.
    """
    align = pick_alignment(text, prompt)
    busy, dark_request = classify_tone(text, prompt)

    if busy or dark_request:
        overlay_color = _palette_slot(palette, 2, DEEP_FALLBACK)
    else:
        overlay_color = _palette_slot(palette, 1, MID_FALLBACK)

    if busy:
        overlay_opacity = BUSY_OPACITY
    elif dark_request:
        overlay_opacity = DARK_OPACITY
    else:
        overlay_opacity = DEFAULT_OPACITY

    light_palette = average_luminance(palette) > LIGHT_PALETTE_THRESHOLD

    return LayoutPlan(
        align=align,
        overlay_color=overlay_color,
        overlay_opacity=clamp01(overlay_opacity),
        text_color=SLATE if light_palette and not busy else WHITE,
        shadow=LIGHT_SHADOW if light_palette else STRONG_SHADOW,
        accent=_palette_slot(palette, 1, ACCENT_FALLBACK),
    )
