"""
Monetary parsing and formatting.

Intake amounts arrive as free-form strings ("$1,500", "1500.00", "").
Parsing is total: anything that is not a number becomes zero.
"""
from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")
CENTS = Decimal("0.01")

_NON_NUMERIC = re.compile(r"[^0-9.]")


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a dollar amount to Decimal.

    Currency symbols, separators and signs are stripped; missing or
    non-numeric input yields 0.

    Example:
        >>> parse_amount("$1,500")
        Decimal('1500')
        >>> parse_amount("n/a")
        Decimal('0')
    """
    if raw is None or raw is False:
        return ZERO
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else ZERO
    cleaned = _NON_NUMERIC.sub("", str(raw))
    if not cleaned:
        return ZERO
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    return value if value.is_finite() else ZERO


def amount_reported(raw: Any) -> bool:
    """True when the intake actually carries a number for this field."""
    if raw is None:
        return False
    return bool(_NON_NUMERIC.sub("", str(raw)).strip("."))


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: Optional[Decimal]) -> str:
    """
    Format an amount for display.

    Whole-dollar amounts drop the cents: Decimal("1500") -> "$1,500".
    Non-positive amounts display as "$0".
    """
    if amount is None or amount <= 0:
        return "$0"
    cents = to_cents(amount)
    if cents == cents.to_integral_value():
        return f"${int(cents):,}"
    return f"${cents:,.2f}"
