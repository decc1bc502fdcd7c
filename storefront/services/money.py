"""
Money Utilities - Decimal operations for cart prices and totals.

Line prices are kept as Decimal so totals are exact sums; rounding to
two places happens only when a value is formatted for display.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AED": "AED",
    "INR": "₹",
}

# Symbol goes before the amount for these
PREFIX_CURRENCIES = ("USD", "EUR", "GBP", "INR")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Floats go through str() so 19.99 stays 19.99 rather than its binary
    expansion. None and unparseable values become Decimal("0").
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number) -> Decimal:
    """Round to cents, half up."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Exact multiplication of a monetary value (no rounding)."""
    return to_decimal(value) * to_decimal(factor)


def format_money(value: Number, currency: str = "USD") -> str:
    """
    Format a monetary value for display, e.g. "$59.97" or "120.00 AED".

    Args:
        value: Amount to format
        currency: ISO currency code

    Returns:
        Formatted string with currency symbol
    """
    currency = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    formatted = f"{round_money(value):,.2f}"
    if currency in PREFIX_CURRENCIES:
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON serialization.

    Use only at boundaries (snapshot writes, API responses).
    """
    return float(to_decimal(value))
