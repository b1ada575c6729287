"""
Summary Table Cell Styling

Maps numeric cells onto a dark-to-light blue ramp. Styles are computed per
cell position, never looked up by formatted value, so two rows with the same
displayed number cannot collide.
"""

from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

import numpy as np

from canhousing.core.constants import (
    DARK_FONT_MAX_LEVEL,
    PALETTE_DARK,
    PALETTE_LEVELS,
    PALETTE_LIGHT,
    STYLE_EPSILON,
)
from canhousing.core.models import StyleToken, SummaryRow

# SummaryRow attributes that receive a colour scale
STYLED_COLUMNS: Tuple[str, ...] = ("average", "median", "minimum", "maximum", "count")


def _hex_to_rgb(colour: str) -> Tuple[int, int, int]:
    colour = colour.lstrip("#")
    return int(colour[0:2], 16), int(colour[2:4], 16), int(colour[4:6], 16)


@lru_cache(maxsize=None)
def palette(levels: int = PALETTE_LEVELS, start: str = PALETTE_DARK, end: str = PALETTE_LIGHT) -> Tuple[str, ...]:
    """Linear RGB ramp of ``levels`` hex colours from ``start`` to ``end``."""
    ramp = np.linspace(_hex_to_rgb(start), _hex_to_rgb(end), num=levels)
    return tuple(
        "#{:02X}{:02X}{:02X}".format(*(int(round(channel)) for channel in rgb))
        for rgb in ramp
    )


def style_level(value: float, column_min: float, column_max: float) -> int:
    """Bucket ``value`` into 1..PALETTE_LEVELS relative to its column range."""
    normalized = (value - column_min) / (column_max - column_min + STYLE_EPSILON)
    normalized = min(max(normalized, 0.0), 1.0)
    return min(PALETTE_LEVELS, int(normalized * PALETTE_LEVELS) + 1)


def value_to_style(value: float, column_min: float, column_max: float) -> StyleToken:
    """Colour a table cell by where its value sits in the column range.

    Low values get the dark end of the ramp with white text; once past the
    first 40 levels the text switches to black.

    Args:
        value: Cell value.
        column_min: Smallest value in the column.
        column_max: Largest value in the column.

    Returns:
        StyleToken with background colour, font colour and level.
    """
    level = style_level(value, column_min, column_max)
    background = palette()[level - 1]
    color = "white" if level <= DARK_FONT_MAX_LEVEL else "black"
    return StyleToken(background=background, color=color, level=level)


def style_column(values: Sequence[float]) -> List[StyleToken]:
    """Style every value of one column against that column's own range."""
    if not values:
        return []
    low, high = min(values), max(values)
    return [value_to_style(value, low, high) for value in values]


def style_summary(rows: Sequence[SummaryRow]) -> List[Dict[str, StyleToken]]:
    """Per-row mapping of styled column name -> StyleToken.

    Args:
        rows: Summary rows in display order.

    Returns:
        One dict per row, aligned with ``rows``.
    """
    styled: List[Dict[str, StyleToken]] = [{} for _ in rows]
    for column in STYLED_COLUMNS:
        tokens = style_column([getattr(row, column) for row in rows])
        for position, token in enumerate(tokens):
            styled[position][column] = token
    return styled
