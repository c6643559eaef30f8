"""CLI helpers for period resolution."""

from datetime import date

import click

from drivetrack.domain.entities import PeriodKind
from drivetrack.domain.periods import CustomPeriod, NamedPeriod, PeriodRequest
from drivetrack.utils.date_parser import parse_date

PERIOD_FLAGS = (
    ("today", PeriodKind.TODAY, "Today (default)"),
    ("yesterday", PeriodKind.YESTERDAY, "Yesterday"),
    ("this-week", PeriodKind.THIS_WEEK, "Monday of this week up to today"),
    ("last-week", PeriodKind.LAST_WEEK, "Monday to Sunday of last week"),
    ("this-month", PeriodKind.THIS_MONTH, "First of this month up to today"),
    ("last-month", PeriodKind.LAST_MONTH, "The whole previous month"),
)


def period_options(command):
    """Attach the period flags and --start-date/--end-date to a command.

    The decorated command receives ``start_date``, ``end_date`` and one boolean
    keyword per period flag (``today``, ``this_week`` and so on).
    """
    for flag, _, help_text in reversed(PERIOD_FLAGS):
        command = click.option(f"--{flag}", is_flag=True, help=help_text)(command)
    command = click.option(
        "--end-date", help="Last day of a custom period (YYYY-MM-DD)"
    )(command)
    command = click.option(
        "--start-date", help="First day of a custom period (YYYY-MM-DD or 'yesterday')"
    )(command)
    return command


def resolve_cli_period(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> PeriodRequest:
    """Resolve a period request from period flags or explicit dates.

    With only --start-date the period runs up to today; with only --end-date
    it covers that single day. Without any option the period is today.
    """
    selected = [name for name, is_set in period_flags.items() if is_set]
    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--today, --yesterday, --this-week, "
            "--last-week, --this-month, --last-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options (--today, --this-month, etc.) cannot be combined "
            "with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        kinds = {flag.replace("-", "_"): kind for flag, kind, _ in PERIOD_FLAGS}
        return NamedPeriod(kinds[selected[0]])

    if not start_date and not end_date:
        return NamedPeriod(PeriodKind.TODAY)

    start: date | None = None
    end: date | None = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None:
        start = end
    if end is None:
        end = parse_date("today")

    return CustomPeriod(start, end)
