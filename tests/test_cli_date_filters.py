"""Tests for CLI period filter helper."""

from datetime import date

import click
import pytest

from drivetrack.cli.date_filters import resolve_cli_period
from drivetrack.domain.entities import PeriodKind
from drivetrack.domain.periods import CustomPeriod, NamedPeriod
from drivetrack.utils.date_parser import parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def _flags(**selected):
    flags = {
        "today": False,
        "yesterday": False,
        "this_week": False,
        "last_week": False,
        "this_month": False,
        "last_month": False,
    }
    flags.update(selected)
    return flags


def test_resolve_cli_period_rejects_multiple_periods(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_period(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=_flags(this_month=True, last_month=True),
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_period_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_period(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags=_flags(this_month=True),
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "cannot be combined" in err


def test_resolve_cli_period_returns_named_period():
    request = resolve_cli_period(
        _ctx(), start_date=None, end_date=None, period_flags=_flags(last_week=True)
    )
    assert request == NamedPeriod(PeriodKind.LAST_WEEK)


def test_resolve_cli_period_defaults_to_today():
    request = resolve_cli_period(_ctx(), start_date=None, end_date=None, period_flags=_flags())
    assert request == NamedPeriod(PeriodKind.TODAY)


def test_resolve_cli_period_custom_range():
    request = resolve_cli_period(
        _ctx(), start_date="2024-03-01", end_date="2024-03-15", period_flags=_flags()
    )
    assert request == CustomPeriod(date(2024, 3, 1), date(2024, 3, 15))


def test_end_date_alone_is_a_single_day():
    request = resolve_cli_period(
        _ctx(), start_date=None, end_date="2024-03-15", period_flags=_flags()
    )
    assert request == CustomPeriod(date(2024, 3, 15), date(2024, 3, 15))


def test_start_date_alone_runs_to_today():
    request = resolve_cli_period(
        _ctx(), start_date="2024-03-01", end_date=None, period_flags=_flags()
    )
    assert request.start == date(2024, 3, 1)
    assert request.end == parse_date("today")


def test_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_period(
            _ctx(), start_date="not-a-date", end_date=None, period_flags=_flags()
        )
    assert "Invalid start date" in capsys.readouterr().err
