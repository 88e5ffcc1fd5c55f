"""Decimal helpers shared by the loader, providers and aggregator."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# Currency marks seen on finance pages; "Rs." must be stripped before the bare dot survives.
_CURRENCY_PATTERN = re.compile(r"(Rs\.?|INR|USD|[₹$€£¥])", re.IGNORECASE)
_NUMBER_PATTERN = re.compile(r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a value to a finite Decimal, returning 0 for anything else.

    Floats go through str() so 0.1 stays 0.1 rather than its binary expansion.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return ZERO
        value = str(value)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def parse_number(text: str) -> Decimal:
    """
    Parse a scraped display value such as "₹1,234.50" or "23.45" into a Decimal.

    Strips currency symbols and thousands separators, then reads the leading
    numeric token. Returns 0 when nothing numeric remains.
    """
    if not text:
        return ZERO
    cleaned = _CURRENCY_PATTERN.sub("", text)
    cleaned = cleaned.replace(",", "").replace("−", "-").replace("\xa0", " ").strip()
    match = _NUMBER_PATTERN.search(cleaned)
    if not match:
        return ZERO
    return to_decimal(match.group(0))


def safe_percentage(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return numerator / denominator * 100 rounded to cents; 0 when denominator is 0."""
    if denominator == ZERO:
        return ZERO.quantize(CENT)
    return (numerator / denominator * HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)
