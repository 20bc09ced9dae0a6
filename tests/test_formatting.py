from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from facture.core.currency import format_currency, parse_currency, round_money
from facture.core.dates import format_date
from facture.core.errors import FormatError

NBSP = "\u00a0"


def test_headline_amount_uses_zero_fraction_digits() -> None:
    assert format_currency(150000, "fr-CM", "XAF", 0) == f"150{NBSP}000{NBSP}FCFA"


def test_default_fraction_digits_follow_currency() -> None:
    # XAF has no minor unit, EUR has two
    assert format_currency(150000, "fr-CM", "XAF") == f"150{NBSP}000{NBSP}FCFA"
    assert format_currency(1234.5, "fr-FR", "EUR") == f"1{NBSP}234,50{NBSP}€"
    assert format_currency(1234.5, "fr-FR", "EUR", 0) == f"1{NBSP}235{NBSP}€"


def test_english_symbol_placement() -> None:
    assert format_currency(1234.5, "en-US", "USD") == "$1,234.50"
    assert format_currency(1234.5, "en-US", "XAF") == f"FCFA{NBSP}1,235"


def test_rounds_half_away_from_zero() -> None:
    assert format_currency(2.5, "fr-CM", "XAF", 0) == f"3{NBSP}FCFA"
    assert format_currency(Decimal("0.005"), "en-US", "USD") == "$0.01"


def test_zero_and_small_amounts() -> None:
    assert format_currency(0, "fr-CM", "XAF") == f"0{NBSP}FCFA"
    assert format_currency(999, "fr-CM", "XAF") == f"999{NBSP}FCFA"


@pytest.mark.parametrize("bad", [-5, -0.4, float("nan"), float("inf"), "abc", None, True])
def test_invalid_amounts_raise(bad) -> None:
    with pytest.raises(FormatError):
        format_currency(bad, "fr-CM", "XAF", 0)


def test_unknown_locale_or_currency_raises() -> None:
    with pytest.raises(FormatError):
        format_currency(10, "xx-XX", "XAF")
    with pytest.raises(FormatError):
        format_currency(10, "fr-CM", "ABC")


@pytest.mark.parametrize(
    "locale_tag,currency,digits",
    [("fr-CM", "XAF", 0), ("fr-CM", "XAF", None), ("fr-FR", "EUR", 2), ("en-US", "USD", None)],
)
def test_formatted_amount_parses_back_to_rounded_value(locale_tag, currency, digits) -> None:
    for value in (0, 1, 999.5, 150000, 1234567.891):
        text = format_currency(value, locale_tag, currency, digits)
        expected_digits = digits if digits is not None else (0 if currency == "XAF" else 2)
        assert parse_currency(text, locale_tag, currency) == round_money(value, expected_digits)


def test_format_date_short_convention() -> None:
    assert format_date(date(2024, 1, 10), "fr-CM") == "10/01/2024"
    assert format_date(date(2024, 1, 10), "en-US") == "1/10/2024"
    assert format_date(datetime(2024, 1, 20, 9, 30), "fr-CM") == "20/01/2024"
    assert format_date("2024-04-15", "fr-CM") == "15/04/2024"
    assert format_date("2024-04-15T08:00:00", "fr-CM") == "15/04/2024"


@pytest.mark.parametrize("bad", ["2024-02-30", "not a date", "", None, 20240110])
def test_format_date_invalid_raises(bad) -> None:
    with pytest.raises(FormatError):
        format_date(bad, "fr-CM")


def test_very_large_amount_is_formatted() -> None:
    text = format_currency(1e30, "fr-CM", "XAF", 0)
    assert text == NBSP.join(["1"] + ["000"] * 10 + ["FCFA"])
    assert format_currency(Decimal("123456789012345678901234567890.555"), "en-US", "USD") == (
        "$123,456,789,012,345,678,901,234,567,890.56"
    )


@pytest.mark.parametrize("zero", [-0.0, Decimal("-0.00"), Decimal("-0")])
def test_negative_zero_renders_without_sign(zero) -> None:
    assert format_currency(zero, "fr-CM", "XAF", 0) == f"0{NBSP}FCFA"
    assert format_currency(zero, "en-US", "USD") == "$0.00"
