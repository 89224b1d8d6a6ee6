"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

ZERO = Decimal("0")

# Upper bound for a repaired unit price; larger values are treated as corrupt
MAX_PRICE = Decimal("1000000000")

# Everything except digits and the decimal point ("12.99 USD" -> "12.99")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return ZERO

    if isinstance(value, Decimal):
        return value

    try:
        # Convert via string to avoid float precision issues
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def parse_price(value: object) -> Decimal:
    """
    Repair a unit price into a finite Decimal between 0 and MAX_PRICE.

    Prices come from the catalog and from saved carts, which may hold
    strings like "12.99 USD". Anything that cannot be repaired becomes 0.

    Examples:
        parse_price("12.99 USD") -> Decimal("12.99")
        parse_price("free")      -> Decimal("0")
        parse_price(-5)          -> Decimal("0")
        parse_price("1e30")      -> Decimal("0")
    """
    if isinstance(value, bool) or value is None:
        return ZERO

    if isinstance(value, str):
        text = value.strip()
        try:
            result = Decimal(text)
        except InvalidOperation:
            cleaned = _NON_NUMERIC.sub("", text)
            if not cleaned:
                return ZERO
            try:
                result = Decimal(cleaned)
            except InvalidOperation:
                return ZERO
    elif isinstance(value, (int, float, Decimal)):
        result = to_decimal(value)
    else:
        return ZERO

    if not result.is_finite() or result < 0 or result > MAX_PRICE:
        return ZERO
    return result


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents (values too large to quantize are returned as is)."""
    amount = to_decimal(value)
    try:
        return amount.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return amount


def format_money(value: Number, currency: str = "$") -> str:
    """
    Format a monetary value the way the cart overlay shows it.

    Args:
        value: Value to format
        currency: Currency symbol or label taken from the cart line

    Returns:
        e.g. "$ 12.99"
    """
    return f"{currency} {round_money(value):,.2f}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization or external APIs.

    Use only at API boundaries, not for internal calculations. Values that
    do not fit a float (and NaN) become 0.0 so responses stay valid JSON.
    """
    result = float(to_decimal(value))
    return result if math.isfinite(result) else 0.0


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)
