import re
from datetime import UTC, datetime

import pytest

from starling_spaces.formatting import (
    format_category,
    format_money,
    format_signed_amount,
    format_timestamp,
)


@pytest.mark.parametrize(
    ("units", "expected"),
    [
        (12345, "123.45"),
        (0, "0.00"),
        (-500, "-5.00"),
        (5, "0.05"),
        (-5, "-0.05"),
        (100, "1.00"),
        (123456789, "1234567.89"),
    ],
)
def test_format_money_examples(units: int, expected: str):
    assert format_money(units) == expected


def test_format_money_always_two_decimals():
    for units in (-100001, -99, -1, 0, 1, 9, 10, 99, 101, 10_000_000):
        out = format_money(units)
        assert out.count(".") == 1
        assert re.fullmatch(r"-?\d+\.\d{2}", out), out


def test_signed_amount_marks_outgoing_money():
    assert format_signed_amount(250, "OUT") == "-2.50"
    assert format_signed_amount(250, "IN") == "2.50"
    assert format_signed_amount(250, None) == "2.50"


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("EATING_OUT", "Eating Out"),
        ("DIY", "Diy"),
        ("BILLS_AND_SERVICES", "Bills And Services"),
        ("SOMETHING_NEW_FROM_THE_SERVER", "Something New From The Server"),
    ],
)
def test_format_category(code: str, expected: str):
    assert format_category(code) == expected


def test_format_timestamp_accepts_iso_strings_and_datetimes():
    assert format_timestamp("2026-10-10T12:30:00.000Z") == "2026-10-10 12:30"
    assert format_timestamp(datetime(2026, 1, 2, 3, 4, tzinfo=UTC)) == "2026-01-02 03:04"
    assert format_timestamp(None) == ""
    assert format_timestamp("not a date") == "not a date"
