"""Best day command."""

import click

from drivetrack.cli.error_handling import handle_domain_error
from drivetrack.domain.best_day import LOOKBACK_MONTHS, MIN_DAYS_WORKED
from drivetrack.domain.dashboard import DashboardService


@click.command("best-day")
@click.pass_context
def best_day(ctx):
    """Rank weekdays by profit, revenue per km and revenue per hour."""
    service = DashboardService(ctx.obj["db"])

    try:
        result = service.best_day(ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not result.sufficient_data:
        click.echo(
            f"Not enough data yet: each weekday needs at least {MIN_DAYS_WORKED} "
            f"worked days in the last {LOOKBACK_MONTHS} months."
        )
        return

    click.echo(f"Best day to work: {result.best_day}")
    click.echo("-" * 78)
    click.echo(
        f"{'#':<3} {'Day':<10} {'Avg profit':>12} {'R$/km':>8} {'R$/h':>8} "
        f"{'Days':>5} {'Score':>8}"
    )
    click.echo("-" * 78)
    for rank, score in enumerate(result.ranking, start=1):
        click.echo(
            f"{rank:<3} {score.day_name:<10} {score.average_profit:>12,.2f} "
            f"{score.revenue_per_distance:>8.2f} {score.revenue_per_hour:>8.2f} "
            f"{score.days_worked:>5} {score.score:>8.2f}"
        )


def register_commands(cli: click.Group) -> None:
    """Register best-day command with main CLI."""
    cli.add_command(best_day)
