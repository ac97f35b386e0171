"""
Display formatting for report cells.

All rounding is half-up (``Decimal.quantize`` with ``ROUND_HALF_UP``) so the
rendered text does not depend on binary float artefacts.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

MISSING = "-"

_TWO_PLACES = Decimal("0.01")
_ONE_PLACE = Decimal("0.1")
_UNIT = Decimal("1")


def _missing(value) -> bool:
    # NaN comes in from pandas columns
    return value is None or value != value


def _quantize(value: float, places: Decimal) -> Decimal:
    # str() first so 12.345 is treated as written, not as 12.3449999...
    rounded = Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP)
    # -0.004 rounds to -0.00; print it as 0
    return rounded.copy_abs() if rounded.is_zero() else rounded


def _trimmed(value: float) -> str:
    """Up to two decimals, trailing zeros dropped (0.50 -> 0.5, 3.00 -> 3)."""
    text = f"{_quantize(value, _TWO_PLACES):,.2f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


def format_value(value: Optional[float]) -> str:
    """
    Thousands-grouped integer text.

    Example:
        >>> format_value(1234567)
        '1,234,567'
        >>> format_value(None)
        '-'
    """
    if _missing(value):
        return MISSING
    return f"{_quantize(value, _UNIT):,.0f}"


def format_decimal(value: Optional[float]) -> str:
    """One decimal place, used for ratios such as sessions per device and app size."""
    if _missing(value):
        return MISSING
    return f"{_quantize(value, _ONE_PLACE):,.1f}"


def format_percent(value: Optional[float]) -> str:
    """
    Percentage text.

    Values under 1 in magnitude keep at most two decimals with trailing
    zeros trimmed; everything else gets exactly two decimals.

    Example:
        >>> format_percent(0.5), format_percent(12.345)
        ('0.5%', '12.35%')
    """
    if _missing(value):
        return MISSING
    if abs(value) < 1:
        return f"{_trimmed(value)}%"
    return f"{_quantize(value, _TWO_PLACES):,.2f}%"


def format_percent_change(value: Optional[float]) -> str:
    """
    Signed percent change; zero and positive values get a leading ``+``.

    Example:
        >>> format_percent_change(-3.2), format_percent_change(0)
        ('-3.2%', '+0%')
    """
    if _missing(value):
        return MISSING
    text = _trimmed(value)
    if text in ("-0", "0"):
        text = "0"
    sign = "+" if value >= 0 or text == "0" else ""
    return f"{sign}{text}%"


def format_metric(value: Optional[float], kind: str) -> str:
    """Dispatch on a metric kind (``"value"``, ``"percent"`` or ``"decimal"``)."""
    if kind == "percent":
        return format_percent(value)
    if kind == "decimal":
        return format_decimal(value)
    return format_value(value)


__all__ = [
    "MISSING",
    "format_decimal",
    "format_metric",
    "format_percent",
    "format_percent_change",
    "format_value",
]
