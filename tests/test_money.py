"""Tests for money helpers"""
from decimal import Decimal

import pytest

from storefront.services.money import format_money, multiply, round_money, to_decimal, to_float


@pytest.mark.parametrize("value,expected", [
    (19.99, Decimal("19.99")),
    (0.1, Decimal("0.1")),
    (5, Decimal("5")),
    ("12.50", Decimal("12.50")),
    (None, Decimal("0")),
    ("abc", Decimal("0")),
])
def test_to_decimal(value, expected):
    assert to_decimal(value) == expected


def test_to_decimal_passes_decimal_through():
    value = Decimal("1.005")

    assert to_decimal(value) is value


def test_round_money_half_up():
    assert round_money(Decimal("1.005")) == Decimal("1.01")
    assert round_money(Decimal("59.9700000001")) == Decimal("59.97")


def test_multiply_is_exact():
    assert multiply(19.99, 3) == Decimal("59.97")


@pytest.mark.parametrize("value,currency,expected", [
    (Decimal("59.97"), "USD", "$59.97"),
    (Decimal("1234.5"), "USD", "$1,234.50"),
    (Decimal("0"), "EUR", "€0.00"),
    (Decimal("120"), "AED", "120.00 AED"),
    (Decimal("3"), "XYZ", "3.00 XYZ"),
])
def test_format_money(value, currency, expected):
    assert format_money(value, currency) == expected


def test_to_float():
    assert to_float(Decimal("19.99")) == 19.99
