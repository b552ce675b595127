from datetime import date, datetime

import pytest

from backend.dates import day_bounds, parse_booking_date


@pytest.mark.parametrize(
    "value",
    ["2030-05-17", "2030-05-17T09:45:00Z", "2030-05-17T09:45:00+02:00", "05/17/2030", date(2030, 5, 17)],
)
def test_formats(value):
    assert parse_booking_date(value) == datetime(2030, 5, 17)


def test_day_number_means_current_month():
    assert parse_booking_date("9", today=date(2030, 2, 20)) == datetime(2030, 2, 9)


@pytest.mark.parametrize("value", ["", "tomorrow", "2030-13-01", None])
def test_invalid(value):
    with pytest.raises((TypeError, ValueError)):
        parse_booking_date(value)


def test_day_bounds():
    start, end = day_bounds(datetime(2030, 5, 17, 13, 30))
    assert start == datetime(2030, 5, 17)
    assert end == datetime(2030, 5, 18)
