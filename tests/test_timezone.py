"""Tests for local time helpers."""

from datetime import date, datetime, timedelta

import pytest
from dateutil import tz

from drivetrack.domain.errors import DataError
from drivetrack.domain.timezone import (
    LOCAL_TZ,
    end_of_local_day,
    ensure_instant,
    local_date,
    local_date_key,
    local_today,
    start_of_local_day,
    to_local_time,
)


def test_local_offset_is_three_hours_behind_utc():
    assert LOCAL_TZ.utcoffset(datetime(2024, 1, 1)) == timedelta(hours=-3)


def test_naive_datetime_is_read_as_utc():
    instant = ensure_instant(datetime(2024, 3, 10, 12, 0))
    assert instant == datetime(2024, 3, 10, 12, 0, tzinfo=tz.UTC)


def test_iso_string_is_parsed():
    instant = ensure_instant("2024-03-10T02:30:00Z")
    assert instant == datetime(2024, 3, 10, 2, 30, tzinfo=tz.UTC)


def test_unparseable_string_raises_data_error():
    with pytest.raises(DataError):
        ensure_instant("not a date")


def test_missing_value_raises_data_error():
    with pytest.raises(DataError):
        ensure_instant(None)


def test_early_utc_instant_belongs_to_previous_local_day():
    # 02:30 UTC is 23:30 of the day before in local time
    assert local_date("2024-03-10T02:30:00Z") == date(2024, 3, 9)
    assert local_date_key("2024-03-10T02:30:00Z") == "2024-03-09"


def test_to_local_time_keeps_the_instant():
    utc = datetime(2024, 3, 10, 2, 30, tzinfo=tz.UTC)
    local = to_local_time(utc)
    assert local.hour == 23
    assert local == utc


def test_day_bounds_cover_the_whole_local_day():
    start = start_of_local_day(date(2024, 3, 10))
    end = end_of_local_day(date(2024, 3, 10))

    assert start.hour == 0 and start.minute == 0
    assert end.date() == date(2024, 3, 10)
    assert end + timedelta(microseconds=1) == start_of_local_day(date(2024, 3, 11))


def test_local_today_uses_reference_instant():
    assert local_today("2024-03-10T01:00:00Z") == date(2024, 3, 9)
