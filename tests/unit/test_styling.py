"""
Unit tests for summary table styling.
"""

from canhousing.core.models import SummaryRow
from canhousing.utils.styling import palette, style_level, style_summary, value_to_style


class TestPalette:

    def test_endpoints(self):
        colours = palette()
        assert len(colours) == 100
        assert colours[0] == "#08306B"
        assert colours[-1] == "#DEEBF7"


class TestValueToStyle:
    """Tests for value_to_style function."""

    def test_minimum_is_dark_with_white_text(self):
        token = value_to_style(100, 100, 200)
        assert token.level == 1
        assert token.background == "#08306B"
        assert token.color == "white"

    def test_maximum_is_light_with_black_text(self):
        token = value_to_style(200, 100, 200)
        assert token.level == 100
        assert token.background == "#DEEBF7"
        assert token.color == "black"

    def test_font_switches_after_level_40(self):
        assert value_to_style(139, 100, 200).color == "white"
        assert value_to_style(141, 100, 200).color == "black"

    def test_levels_monotone(self):
        levels = [style_level(v, 0, 1000) for v in range(0, 1001, 50)]
        assert levels == sorted(levels)

    def test_constant_column(self):
        token = value_to_style(5, 5, 5)
        assert token.level == 1


class TestStyleSummary:
    """Tests for style_summary function."""

    def test_duplicate_values_styled_independently_per_row(self):
        rows = [
            SummaryRow("A", 500000.0, 500000.0, 500000.0, 500000.0, 1),
            SummaryRow("B", 500000.0, 500000.0, 400000.0, 600000.0, 3),
            SummaryRow("C", 900000.0, 900000.0, 900000.0, 900000.0, 2),
        ]
        styles = style_summary(rows)
        assert len(styles) == 3
        assert styles[0]["average"] == styles[1]["average"]
        assert styles[2]["average"].level == 100
        assert styles[1]["minimum"].level == 1
        assert styles[1]["count"].level == 100

    def test_empty(self):
        assert style_summary([]) == []
