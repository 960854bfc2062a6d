"""Indian-numbering display helpers for calculator results.

Grouping follows the Indian pattern (last three digits, then pairs):
``12,34,567``. Large magnitudes are abbreviated by tier:

    >= 1e12  Kharab
    >= 1e9   Arab
    >= 1e7   Cr    (crore)
    >= 1e5   L     (lakh)
    >= 1e3   K     (only for the large-number and chart-axis helpers)

Every helper returns a renderable string for any input, including ``None``,
``NaN`` and infinities. Rounding is half-up on the decimal representation.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Tuple, Union

Number = Union[int, float, Decimal]

RUPEE = "₹"
INFINITY = "∞"

CURRENCY_TIERS: Tuple[Tuple[float, str], ...] = (
    (1e12, "Kharab"),
    (1e9, "Arab"),
    (1e7, "Cr"),
    (1e5, "L"),
)
LARGE_NUMBER_TIERS = CURRENCY_TIERS + ((1e3, "K"),)
AXIS_TIERS: Tuple[Tuple[float, str, int], ...] = (
    (1e12, "Kh", 1),
    (1e9, "Ar", 1),
    (1e7, "Cr", 1),
    (1e5, "L", 1),
    (1e3, "K", 0),
)

__all__ = [
    "format_currency",
    "format_number",
    "format_large_number",
    "format_compact",
    "format_percent",
    "parse_currency",
    "group_indian",
]


def _is_missing(value: Optional[Number]) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return True


def _quantize(value: Number, decimals: int) -> Decimal:
    exponent = Decimal(1).scaleb(-decimals)
    # floats up to 1e308 need more than the default 28 digits of precision
    with localcontext() as ctx:
        ctx.prec = 400
        return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def _fixed(value: Number, decimals: int) -> str:
    return format(_quantize(value, decimals), "f")


def group_indian(digits: str) -> str:
    """Group a string of integer digits as ``xx,xx,xxx``."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def _grouped(value: Number, decimals: int) -> Tuple[str, str]:
    """Return ``(sign, grouped_text)`` for a finite value."""
    quantized = _quantize(value, decimals)
    sign = "-" if quantized < 0 else ""
    whole, _, fraction = format(abs(quantized), "f").partition(".")
    text = group_indian(whole)
    if fraction:
        text = f"{text}.{fraction}"
    return sign, text


def _tiered(value: float, tiers) -> Optional[str]:
    magnitude = abs(value)
    for threshold, label in tiers:
        if magnitude >= threshold:
            return f"{_fixed(magnitude / threshold, 2)} {label}"
    return None


def format_currency(amount: Optional[Number], decimals: int = 0) -> str:
    """Format ``amount`` as rupees, abbreviating from one lakh upwards.

    ``format_currency(1234567)`` -> ``"₹12.35 L"``,
    ``format_currency(12345.5, 2)`` -> ``"₹12,345.50"``.
    """
    if _is_missing(amount):
        return f"{RUPEE}0"
    value = float(amount)
    sign = "-" if value < 0 else ""
    if math.isinf(value):
        return f"{sign}{RUPEE}{INFINITY}"

    tiered = _tiered(value, CURRENCY_TIERS)
    if tiered is not None:
        return f"{sign}{RUPEE}{tiered}"

    sign, text = _grouped(value, decimals)
    return f"{sign}{RUPEE}{text}"


def format_number(amount: Optional[Number], decimals: int = 0) -> str:
    """Indian-grouped number with a fixed number of decimals, no abbreviation."""
    if _is_missing(amount):
        return "0"
    value = float(amount)
    if math.isinf(value):
        return f"-{INFINITY}" if value < 0 else INFINITY
    sign, text = _grouped(value, decimals)
    return f"{sign}{text}"


def format_large_number(amount: Optional[Number]) -> str:
    """Abbreviated number without a currency symbol (``"1.50 Cr"``, ``"12.00 K"``)."""
    if _is_missing(amount) or math.isinf(float(amount)):
        return "0"
    value = float(amount)
    sign = "-" if value < 0 else ""
    tiered = _tiered(value, LARGE_NUMBER_TIERS)
    if tiered is not None:
        return f"{sign}{tiered}"
    return _fixed(value, 0)


def _plain(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_compact(amount: Optional[Number]) -> str:
    """Short chart-axis label such as ``"₹1.2Cr"`` or ``"₹50K"``.

    Negative values are never abbreviated: ``-500000`` gives ``"₹-500000"``.
    """
    if _is_missing(amount) or math.isinf(float(amount)):
        return f"{RUPEE}0"
    value = float(amount)
    for threshold, label, decimals in AXIS_TIERS:
        if value >= threshold:
            return f"{RUPEE}{_fixed(value / threshold, decimals)}{label}"
    return f"{RUPEE}{_plain(value)}"


def format_percent(value: Optional[Number], decimals: int = 1) -> str:
    if _is_missing(value):
        return "0%"
    number = float(value)
    if math.isinf(number):
        return f"-{INFINITY}%" if number < 0 else f"{INFINITY}%"
    return f"{_fixed(number, decimals)}%"


def parse_currency(text: Union[str, Number, None]) -> float:
    """Parse ``"₹12,34,567"`` style input back into a float (0.0 when unparseable)."""
    if text is None:
        return 0.0
    if not isinstance(text, str):
        return 0.0 if _is_missing(text) else float(text)
    cleaned = text.replace(RUPEE, "").replace(",", "").strip()
    try:
        value = float(cleaned)
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(value) else value
