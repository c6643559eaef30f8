"""Tests for working-day attribution with the 04:00 cutoff."""

from datetime import date, timedelta

import pytest

from drivetrack.domain.periods import resolve_period
from drivetrack.domain.work_hours import (
    attribute_working_day,
    attribute_working_days,
    hours_by_day,
    total_hours,
    working_date,
)

from conftest import at, session


def test_hours_before_cutoff_belong_to_previous_day():
    assert working_date(at(2024, 3, 11, 3, 59)) == date(2024, 3, 10)
    assert working_date(at(2024, 3, 11, 4, 0)) == date(2024, 3, 11)


def test_session_within_a_day_is_not_split():
    segments = attribute_working_day(session(1, at(2024, 3, 10, 8, 0), at(2024, 3, 10, 18, 0)))

    assert len(segments) == 1
    assert segments[0].id == "1"
    assert segments[0].working_date == date(2024, 3, 10)
    assert not segments[0].is_partial
    assert segments[0].duration_hours == pytest.approx(10.0)


def test_session_crossing_midnight_and_cutoff_is_split():
    segments = attribute_working_day(
        session(7, at(2024, 3, 10, 23, 30), at(2024, 3, 11, 5, 0))
    )

    assert [s.id for s in segments] == ["7_part1", "7_part2"]
    first, second = segments
    assert first.working_date == date(2024, 3, 10)
    assert second.working_date == date(2024, 3, 11)
    assert first.end == at(2024, 3, 11, 4, 0) - timedelta(milliseconds=1)
    assert second.start == at(2024, 3, 11, 4, 0, 1)
    assert first.duration_hours == pytest.approx(4.5, abs=1e-3)
    assert second.duration_hours == pytest.approx(1.0, abs=1e-3)


def test_split_conserves_duration_up_to_the_boundary_gap():
    work_session = session(7, at(2024, 3, 10, 23, 30), at(2024, 3, 11, 5, 0))
    segments = attribute_working_day(work_session)

    total = sum(s.duration_hours for s in segments)
    assert total == pytest.approx(work_session.duration_hours, abs=1e-3)
    assert total <= work_session.duration_hours


def test_early_morning_session_on_one_day_is_split_at_cutoff():
    segments = attribute_working_day(session(2, at(2024, 3, 11, 2, 0), at(2024, 3, 11, 6, 0)))

    assert [s.working_date for s in segments] == [date(2024, 3, 10), date(2024, 3, 11)]


def test_session_ending_before_cutoff_after_midnight_is_not_split():
    segments = attribute_working_day(session(3, at(2024, 3, 10, 22, 0), at(2024, 3, 11, 2, 0)))

    assert len(segments) == 1
    assert segments[0].working_date == date(2024, 3, 10)
    assert segments[0].duration_hours == pytest.approx(4.0)


def test_session_in_progress_yields_no_segments():
    assert attribute_working_day(session(4, at(2024, 3, 10, 8, 0))) == []


def test_segments_are_ordered_by_start():
    segments = attribute_working_days(
        [
            session(2, at(2024, 3, 11, 8, 0), at(2024, 3, 11, 10, 0)),
            session(1, at(2024, 3, 10, 8, 0), at(2024, 3, 10, 10, 0)),
        ]
    )
    assert [s.session_id for s in segments] == [1, 2]


def test_hours_are_summed_per_working_day():
    segments = attribute_working_days(
        [
            session(1, at(2024, 3, 10, 8, 0), at(2024, 3, 10, 12, 0)),
            session(2, at(2024, 3, 10, 20, 0), at(2024, 3, 11, 2, 0)),
        ]
    )
    assert hours_by_day(segments) == {"2024-03-10": pytest.approx(10.0)}


def test_total_hours_uses_working_date():
    segments = attribute_working_days(
        [session(1, at(2024, 3, 11, 1, 0), at(2024, 3, 11, 3, 0))]
    )
    march_10 = resolve_period("custom", "2024-03-10", "2024-03-10")
    march_11 = resolve_period("custom", "2024-03-11", "2024-03-11")

    assert total_hours(segments, march_10) == pytest.approx(2.0)
    assert total_hours(segments, march_11) == 0
