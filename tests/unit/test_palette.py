"""Unit tests for invitecraft.core.palette."""

import re

import pytest

from invitecraft.core.palette import (
    DEFAULT_PALETTE,
    PRESET_PALETTES,
    keyword_palette,
    matched_keyword,
)

HEX = re.compile(r"^#[0-9a-f]{6}$")


class TestKeywordPalette:
    """Tests for keyword_palette."""

    def test_emerald(self):
        """The emerald keyword selects the emerald palette."""
        assert keyword_palette("emerald tones") == ("#e6f5ed", "#38a169", "#064e3b")

    def test_empty_prompt_returns_default(self):
        """An empty prompt resolves to the default palette."""
        assert keyword_palette("") == ("#f8f5f0", "#d6c3a5", "#8b6f47")
        assert keyword_palette("") == DEFAULT_PALETTE

    def test_none_prompt_returns_default(self):
        """None is tolerated like an empty prompt."""
        assert keyword_palette(None) == DEFAULT_PALETTE

    def test_no_keyword_returns_default(self):
        """Prompts without a keyword get the default."""
        assert keyword_palette("watercolour wash with soft light") == DEFAULT_PALETTE

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert keyword_palette("LAVENDER fields") == PRESET_PALETTES["lavender"]

    def test_substring_match(self):
        """Keywords match inside longer words."""
        assert keyword_palette("golden hour") == PRESET_PALETTES["gold"]

    def test_declaration_order_wins(self):
        """When several keywords appear, the earliest declared one wins."""
        # "navy" appears first in the text, but "gold" is declared first.
        assert keyword_palette("navy velvet with gold foil") == PRESET_PALETTES["gold"]
        assert keyword_palette("classic teal") == PRESET_PALETTES["teal"]

    @pytest.mark.parametrize(
        "prompt",
        ["", "gold", "blush", "random words", "minimalist", "🎉", "\n\n", "classic" * 50],
    )
    def test_always_three_hex_colours(self, prompt):
        """Every prompt resolves to exactly three hex colours."""
        palette = keyword_palette(prompt)
        assert len(palette) == 3
        assert all(HEX.match(color) for color in palette)


class TestPresetTable:
    """Tests for the preset keyword table."""

    def test_declaration_order(self):
        """The table keeps its fixed precedence order."""
        assert list(PRESET_PALETTES) == [
            "gold",
            "blush",
            "emerald",
            "teal",
            "lavender",
            "navy",
            "coral",
            "rustic",
            "minimalist",
            "classic",
        ]

    def test_table_is_read_only(self):
        """The preset table cannot be modified."""
        with pytest.raises(TypeError):
            PRESET_PALETTES["silver"] = ("#fff", "#ccc", "#999")

    def test_matched_keyword(self):
        """matched_keyword reports the keyword keyword_palette uses."""
        assert matched_keyword("Rustic barn") == "rustic"
        assert matched_keyword("nothing here") is None
