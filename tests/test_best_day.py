"""Tests for the best weekday calculation."""

from datetime import date, timedelta

import pytest

from drivetrack.domain.best_day import calculate_best_day

from conftest import at, expense, income, odometer, session

NOW = at(2024, 3, 31, 12, 0)


def _worked_day(day: date, revenue: float, seq: int, km: int = 100):
    """Records for one worked day: 08:00-18:00, one income, one cycle."""
    y, m, d = day.year, day.month, day.day
    return (
        [income(seq, at(y, m, d, 12, 0), revenue)],
        [session(seq, at(y, m, d, 8, 0), at(y, m, d, 18, 0))],
        [
            odometer(seq * 2, "open", at(y, m, d, 8, 0), 1000, f"p{seq}"),
            odometer(seq * 2 + 1, "close", at(y, m, d, 18, 0), 1000 + km, f"p{seq}"),
        ],
    )


def _history(days_and_revenue):
    transactions, sessions, events = [], [], []
    for seq, (day, revenue) in enumerate(days_and_revenue, start=1):
        t, s, e = _worked_day(day, revenue, seq)
        transactions += t
        sessions += s
        events += e
    return transactions, sessions, events


MONDAYS = [date(2024, 3, 4), date(2024, 3, 11), date(2024, 3, 18)]
TUESDAYS = [d + timedelta(days=1) for d in MONDAYS]


def test_best_day_is_the_highest_weighted_score():
    transactions, sessions, events = _history(
        [(d, 200) for d in MONDAYS] + [(d, 100) for d in TUESDAYS]
    )
    result = calculate_best_day(transactions, sessions, events, now=NOW)

    assert result.sufficient_data
    assert result.best_day == "Monday"
    assert [score.day_name for score in result.ranking] == ["Monday", "Tuesday"]

    monday = result.ranking[0]
    assert monday.days_worked == 3
    assert monday.average_profit == pytest.approx(200.0)
    assert monday.revenue_per_distance == pytest.approx(2.0)
    assert monday.revenue_per_hour == pytest.approx(20.0)
    assert monday.score == pytest.approx(0.4 * 200 + 0.3 * 2 + 0.3 * 20)


def test_weekday_needs_three_worked_days():
    transactions, sessions, events = _history([(d, 200) for d in MONDAYS[:2]])
    result = calculate_best_day(transactions, sessions, events, now=NOW)

    assert not result.sufficient_data
    assert result.best_day is None
    assert result.ranking == ()


def test_days_without_hours_do_not_count():
    transactions, sessions, events = _history([(d, 200) for d in MONDAYS])
    result = calculate_best_day(transactions, sessions[:2], events, now=NOW)
    assert not result.sufficient_data


def test_fuel_purchases_reduce_profit():
    transactions, sessions, events = _history([(d, 200) for d in MONDAYS])
    transactions.append(
        expense(99, at(2024, 3, 4, 7, 0), 60, category="Fuel", price_per_liter="5.00")
    )
    result = calculate_best_day(transactions, sessions, events, now=NOW)

    assert result.ranking[0].average_profit == pytest.approx((600 - 60) / 3)


def test_history_older_than_three_months_is_ignored():
    old_mondays = [date(2023, 11, 6), date(2023, 11, 13), date(2023, 11, 20)]
    transactions, sessions, events = _history([(d, 200) for d in old_mondays])
    result = calculate_best_day(transactions, sessions, events, now=NOW)
    assert not result.sufficient_data
