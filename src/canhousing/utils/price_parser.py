"""
Price Parsing Utilities

Converts listing price cells to numbers and formats prices for display
(map popups, table cells, axis labels).
"""

import math
import re
from typing import Optional, Union

from canhousing.logging_config import get_logger

logger = get_logger(__name__)

# Thousands separators and currency decoration seen in listing exports
_PRICE_NOISE = re.compile(r"[,\s$]|CAD", re.IGNORECASE)


def parse_price(value: Union[str, int, float, None]) -> Optional[float]:
    """Parse a listing price cell into a float.

    Handles:
    - "1,250,000"
    - "$899,900"
    - "725000.00"
    - 725000 (already numeric)

    Args:
        value: Raw price cell.

    Returns:
        Non-negative price, or None if the cell cannot be parsed.

    Example:
        >>> parse_price("1,250,000")
        1250000.0
        >>> parse_price("Contact agent") is None
        True
    """
    if value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _PRICE_NOISE.sub("", str(value))
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            logger.debug("Could not parse price from: %r", value)
            return None

    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return number


def format_price(price: Union[int, float, None], compact: bool = False) -> str:
    """Format a price value as a string.

    Args:
        price: Price value to format.
        compact: If True, use compact notation ($1.5M instead of $1,500,000).

    Returns:
        Formatted price string.

    Example:
        >>> format_price(1500000)
        '$1,500,000'
        >>> format_price(1500000, compact=True)
        '$1.5M'
    """
    if price is None:
        return "-"

    price = int(round(price))

    if compact:
        if price >= 1_000_000:
            value = price / 1_000_000
            if value == int(value):
                return f"${int(value)}M"
            return "$" + f"{value:.1f}".rstrip("0").rstrip(".") + "M"
        elif price >= 1_000:
            value = price / 1_000
            if value == int(value):
                return f"${int(value)}K"
            return "$" + f"{value:.1f}".rstrip("0").rstrip(".") + "K"

    return f"${price:,}"
