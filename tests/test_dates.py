"""
Date parsing and half-open interval helpers.
"""
from datetime import date, datetime

import pytest

from rental.core.exceptions import ValidationError
from rental.utils.dates import (
    month_bounds,
    nights_within,
    parse_date,
    parse_date_range,
    ranges_overlap,
)


def test_parse_date_accepts_iso_strings_and_dates():
    assert parse_date("2024-03-01") == date(2024, 3, 1)
    assert parse_date(" 2024-03-01 ") == date(2024, 3, 1)
    assert parse_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert parse_date(datetime(2024, 3, 1, 15, 30)) == date(2024, 3, 1)


@pytest.mark.parametrize("value", ["", "   ", None, "01/03/2024", "2024-02-30", 20240301])
def test_parse_date_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        parse_date(value)


def test_parse_date_range_requires_end_after_start():
    assert parse_date_range("2024-01-01", "2024-01-02") == (date(2024, 1, 1), date(2024, 1, 2))
    with pytest.raises(ValidationError):
        parse_date_range("2024-01-05", "2024-01-05")
    with pytest.raises(ValidationError):
        parse_date_range("2024-01-05", "2024-01-01")


def test_touching_ranges_do_not_overlap():
    jan1, jan4, jan5, jan6, jan10 = (date(2024, 1, d) for d in (1, 4, 5, 6, 10))
    assert not ranges_overlap(jan1, jan5, jan5, jan10)
    assert not ranges_overlap(jan5, jan10, jan1, jan5)
    assert ranges_overlap(jan1, jan5, jan4, jan6)
    assert ranges_overlap(jan1, jan10, jan4, jan6)


def test_nights_within_clips_to_period():
    march = month_bounds(2024, 3)
    assert march == (date(2024, 3, 1), date(2024, 4, 1))
    assert nights_within(date(2024, 3, 1), date(2024, 3, 4), *march) == 3
    assert nights_within(date(2024, 2, 27), date(2024, 3, 2), *march) == 1
    assert nights_within(date(2024, 4, 1), date(2024, 4, 3), *march) == 0
    assert month_bounds(2024, 12) == (date(2024, 12, 1), date(2025, 1, 1))
