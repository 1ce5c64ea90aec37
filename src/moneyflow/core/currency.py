"""
Currency precision and numeric coercion for MoneyFlow.
"""

from __future__ import annotations

import math
from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")

# Amounts at or above this magnitude are treated as unusable input
MAX_AMOUNT = Decimal("1e15")


class Currency:
    """
    Currency precision and rounding rule.

    Attributes:
        code: ISO currency code (e.g., 'RUB')
        decimals: Number of decimal places for this currency
        rounding: Decimal rounding mode (banker's rounding by default)
    """

    def __init__(self, code: str, decimals: int = 2, rounding: str = ROUND_HALF_EVEN):
        self.code = code.upper()
        self.decimals = decimals
        self.rounding = rounding

    def quantize(self, amount: Decimal) -> Decimal:
        """Quantize amount to currency precision."""
        quantum = Decimal("1").scaleb(-self.decimals)  # e.g., 0.01 for 2 dp
        return amount.quantize(quantum, rounding=self.rounding)


DEFAULT_CURRENCY = Currency("RUB", decimals=2)


def parse_number(value: Any) -> Decimal | None:
    """
    Parse a loosely typed numeric value into a Decimal.

    Accepts Decimal, int, float and numeric strings (surrounding whitespace
    allowed). Returns None for anything else: booleans, None, empty or
    non-numeric strings, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
        return parsed if parsed.is_finite() else None
    return None


def in_amount_range(value: Decimal) -> bool:
    """True if a parsed number is small enough to be used as a money amount."""
    return abs(value) < MAX_AMOUNT


def to_amount(
    value: Any, default: Decimal = ZERO, currency: Currency = DEFAULT_CURRENCY
) -> Decimal:
    """
    Coerce a loosely typed value into a quantized money amount.

    Values that are not numbers, or whose magnitude reaches MAX_AMOUNT,
    become `default`.
    """
    parsed = parse_number(value)
    if parsed is None or not in_amount_range(parsed):
        parsed = default
    try:
        return currency.quantize(parsed)
    except InvalidOperation:
        return currency.quantize(ZERO)


def floor_amount(amount: Decimal, currency: Currency = DEFAULT_CURRENCY) -> Decimal:
    """Round down to a whole currency unit, kept at currency precision."""
    return currency.quantize(amount.to_integral_value(rounding=ROUND_FLOOR))
