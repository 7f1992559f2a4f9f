# tests/test_fields.py
"""
Unit tests for parsers/fields.py

Covers:
  - Localized amounts, including silent 0.0 on garbage.
  - MM/DD/YYYY and free-form dates (English and French month names).
  - DMY rendering, text-cell marker, French month names.
"""

from datetime import date

import pytest

from parsers.fields import (
    as_text_cell,
    format_date_dmy,
    month_name,
    parse_amount,
    parse_local_date,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1.234,56 €", 1234.56),
        ("120,50", 120.5),
        ("€ 89.90", 89.9),
        ("1,234.56", 1234.56),
        ("-15,00", -15.0),
        ("540 EUR", 540.0),
    ],
)
def test_parse_amount_localized(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", None, "€", "n/a", "-", ",,"])
def test_parse_amount_garbage_is_zero(text):
    assert parse_amount(text) == 0.0


def test_parse_mdy_date():
    assert parse_local_date("08/04/2025", "mdy") == date(2025, 8, 4)
    assert parse_local_date("12/31/2024", "mdy") == date(2024, 12, 31)


@pytest.mark.parametrize("text", ["", None, "2025-08-04", "13/01/2025", "aa/bb/cccc", "02/30/2025"])
def test_parse_mdy_date_malformed_is_none(text):
    assert parse_local_date(text, "mdy") is None


@pytest.mark.parametrize(
    "text",
    ["4 Aug 2025", "4 August 2025", "4 août 2025", "2025-08-04", "04/08/2025"],
)
def test_parse_free_form_date(text):
    assert parse_local_date(text, "text") == date(2025, 8, 4)


@pytest.mark.parametrize("text", ["", "pas une date", "août 2025", "10"])
def test_parse_free_form_malformed_is_none(text):
    assert parse_local_date(text, "text") is None


def test_format_date_dmy_zero_padded():
    assert format_date_dmy(date(2025, 3, 7)) == "07/03/2025"


def test_text_cell_marker():
    assert as_text_cell("07/03/2025") == "'07/03/2025"


def test_month_name_french_lower_case():
    assert month_name(date(2025, 8, 4)) == "août"
    assert month_name(date(2025, 2, 1), "fr_FR") == "février"
    assert month_name(date(2025, 2, 1), "en") == "february"
