"""
Utility modules for Canadian Housing Insights.

Price parsing/formatting and summary table cell styling.
"""

from canhousing.utils.price_parser import (
    parse_price,
    format_price,
)
from canhousing.utils.styling import (
    value_to_style,
    style_summary,
    palette,
)

__all__ = [
    "parse_price",
    "format_price",
    "value_to_style",
    "style_summary",
    "palette",
]
