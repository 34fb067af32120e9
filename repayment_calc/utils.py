"""Utility functions for the repayment calculator.

This module provides helpers for rounding monetary values, for parsing user
input into Python numbers and for describing a number of months in words.
Rounding goes through ``decimal`` so that the exact binary value of a float
decides the result rather than its shortest printed form.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

_CENT = Decimal("0.01")
# Wide enough to quantize the largest finite float to cents
_ROUNDING_CONTEXT = Context(prec=400)
_CURRENCY_SYMBOLS = "$€£"


def round2(value: float) -> float:
    """Round ``value`` to two decimal places, halves away from zero.

    ``Decimal(float)`` is exact, so a value such as ``1.005`` (stored as
    ``1.00499999...``) rounds down, the same way ``Number.toFixed`` treats it.
    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def parse_amount(value: str) -> float:
    """Parse a monetary string with optional shorthand.

    Accepts plain numbers ("5000"), thousands separators ("5,000"), a leading
    currency symbol ("$5000") and ``k``/``m`` suffixes (e.g. "5k" meaning
    5_000).

    Raises
    ------
    ValueError
        If the string is not a number.
    """
    cleaned = value.strip().lower().replace(",", "").lstrip(_CURRENCY_SYMBOLS).strip()
    factor = Decimal(1)
    if cleaned.endswith("k"):
        factor = Decimal(1_000)
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = Decimal(1_000_000)
        cleaned = cleaned[:-1]
    try:
        return float(Decimal(cleaned) * factor)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_percent(value: str) -> float:
    """Parse a percentage string such as "18.9" or "18.9%".

    The result stays in percent units: "2%" gives ``2.0``, not ``0.02``.
    """
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1].strip()
    try:
        return float(Decimal(cleaned))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid percentage: {value}") from exc


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_duration(months: int) -> str:
    """Describe a number of months as years and months.

    >>> format_duration(7)
    '7 months'
    >>> format_duration(25)
    '2 years and 1 month'
    """
    years, remaining = divmod(months, 12)
    if years == 0:
        return _plural(remaining, "month")
    if remaining == 0:
        return _plural(years, "year")
    return f"{_plural(years, 'year')} and {_plural(remaining, 'month')}"
