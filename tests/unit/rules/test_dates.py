from datetime import date

import pytest

from shiptrack.rules.dates import is_today, parse_delivery_date


@pytest.mark.parametrize("text, expected", [
    ("March 5, 2024", date(2024, 3, 5)),
    ("2024-03-05", date(2024, 3, 5)),
    ("2024-03-05T18:30:00", date(2024, 3, 5)),
    ("  March 5, 2024  ", date(2024, 3, 5)),
])
def test_parses_carrier_formats(text, expected):
    assert parse_delivery_date(text) == expected


@pytest.mark.parametrize("text", ["", "   ", None, "not a date", "Unknown"])
def test_blank_or_garbage_is_none(text):
    assert parse_delivery_date(text) is None


def test_is_today_compares_calendar_day_only():
    today = date(2024, 3, 10)
    assert is_today("March 10, 2024", today)
    assert is_today("2024-03-10T23:59:00", today)
    assert not is_today("March 11, 2024", today)
    assert not is_today("", today)
    assert not is_today("garbage", today)
