"""Colour helpers shared by the layout analyzer and the preview composer.

All functions are pure.  Malformed hex input never raises: parsing returns
``None`` and every dependent helper substitutes a fixed fallback instead.
"""

from __future__ import annotations

import re

RGB = tuple[int, int, int]

_NON_HEX = re.compile(r"[^0-9a-f]", re.IGNORECASE)

# Dark slate used whenever a colour cannot be parsed.
FALLBACK_RGB: RGB = (15, 23, 42)

# Luminance reported for a missing colour.
NEUTRAL_LUMINANCE = 0.5


def clamp01(value: float) -> float:
    """Clamp *value* into the closed interval ``[0, 1]``."""
    return min(1.0, max(0.0, float(value)))


def hex_to_rgb(hex_color: str) -> RGB | None:
    """Parse a 3- or 6-digit hex colour into an ``(r, g, b)`` tuple.

    Every non-hex character is stripped first, so ``"#FFF"``, ``"fff"`` and
    ``"  #ffffff "`` are all accepted.  The short form is expanded by
    doubling each digit (``"abc"`` becomes ``"aabbcc"``).

    Args:
        hex_color: Colour string in any loose hex notation.

    Returns:
        The channel tuple, or ``None`` when the remaining digit count is
        neither 3 nor 6.
    """
    normalized = _NON_HEX.sub("", hex_color or "")

    if len(normalized) == 3:
        normalized = "".join(digit * 2 for digit in normalized)
    elif len(normalized) != 6:
        return None

    return (
        int(normalized[0:2], 16),
        int(normalized[2:4], 16),
        int(normalized[4:6], 16),
    )


def _linearize(value: int) -> float:
    channel = value / 255
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def luminance(hex_color: str) -> float:
    """Return the relative luminance (ITU-R BT.709 weights) of a hex colour.

    Unparseable colours report :data:`NEUTRAL_LUMINANCE`.
    """
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return NEUTRAL_LUMINANCE

    r, g, b = (_linearize(value) for value in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def apply_alpha(hex_color: str, alpha: float) -> str:
    """Format a hex colour as a CSS ``rgba()`` string.

    The alpha is clamped into ``[0, 1]`` and written with three decimals.
    When the colour cannot be parsed the dark slate fallback is used at the
    same alpha.

    Args:
        hex_color: Colour in loose hex notation.
        alpha: Desired opacity; values outside ``[0, 1]`` are clamped.

    Returns:
        A string such as ``"rgba(11, 31, 82, 0.380)"``.
    """
    r, g, b = hex_to_rgb(hex_color) or FALLBACK_RGB
    return f"rgba({r}, {g}, {b}, {clamp01(alpha):.3f})"
