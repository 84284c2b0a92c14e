"""
Decimal Math Utilities for Wizard Amounts.

Currency fields are stored as text; anything that does arithmetic on them
goes through these helpers so that results are exact decimals rather than
binary floats.

Why Decimal?
- Float: 60000 * 0.8 * 0.8 * 0.5 = 19200.000000000004
- Decimal: 60000 * 0.8 * 0.8 * 0.5 = 19200.00
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

# Optional sign, digits, optional decimal point with up to two places
CURRENCY_PATTERN = re.compile(r"^-?\d*\.?\d{0,2}$")

def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Args:
        value: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal representation

    Examples:
        >>> to_decimal(40)
        Decimal('40')
        >>> to_decimal(0.8)
        Decimal('0.8')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Convert float to string first to preserve representation
        return Decimal(str(value))
    return Decimal(value)

def parse_currency(value: Optional[str]) -> Optional[Decimal]:
    """
    Parse a stored currency string.

    Blank values count as zero. Text that is not an amount returns None
    instead of raising, so callers can decide how to treat it.

    Examples:
        >>> parse_currency("1,250.50")
        Decimal('1250.50')
        >>> parse_currency("")
        Decimal('0')
    """
    if value is None:
        return Decimal("0")
    cleaned = value.strip().replace(",", "").replace("$", "")
    if cleaned in ("", "-", "."):
        return Decimal("0")
    if not CURRENCY_PATTERN.match(cleaned):
        logger.debug(f"Not a currency amount: {value!r}")
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None

def round_to_nearest(value: Numeric, increment: Numeric) -> Decimal:
    """
    Round half-up to the nearest multiple of increment.

    Examples:
        >>> round_to_nearest(19200, 1000)
        Decimal('19000')
        >>> round_to_nearest(33500, 1000)
        Decimal('34000')
    """
    step = to_decimal(increment)
    units = (to_decimal(value) / step).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return units * step

def format_whole_dollars(value: Numeric) -> str:
    """
    Format an amount as whole US dollars for display.

    Examples:
        >>> format_whole_dollars(126000)
        '$126,000'
    """
    rounded = to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"
