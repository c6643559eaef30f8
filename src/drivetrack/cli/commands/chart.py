"""Weekly chart command."""

import click

from drivetrack.cli.date_filters import period_options, resolve_cli_period
from drivetrack.cli.error_handling import handle_domain_error
from drivetrack.domain.dashboard import DashboardService

BAR_WIDTH = 30


def _bar(value: float, scale: float, char: str) -> str:
    if scale <= 0:
        return ""
    return char * round(value / scale * BAR_WIDTH)


@click.command("chart")
@period_options
@click.pass_context
def chart(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Revenue and expenses per day of the week being looked at.

    The week is the one containing the start of a custom period, or the
    current week otherwise.
    """
    request = resolve_cli_period(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    service = DashboardService(ctx.obj["db"])

    try:
        series = service.week_series(ctx.obj["user_id"], request)
    except ValueError as e:
        handle_domain_error(ctx, e)

    scale = max([max(day.revenue, day.expense) for day in series] + [0.0])
    click.echo(f"Week of {series[0].day.isoformat()}  (+ revenue, - expenses)")
    for day in series:
        click.echo(
            f"{day.day:%a %d/%m} +{_bar(day.revenue, scale, '#'):<{BAR_WIDTH}} "
            f"R${day.revenue:>10,.2f}"
        )
        click.echo(
            f"{'':<9} -{_bar(day.expense, scale, '='):<{BAR_WIDTH}} "
            f"R${day.expense:>10,.2f}"
        )


def register_commands(cli: click.Group) -> None:
    """Register chart command with main CLI."""
    cli.add_command(chart)
