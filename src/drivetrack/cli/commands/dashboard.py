"""Dashboard command."""

import click

from drivetrack.cli.date_filters import period_options, resolve_cli_period
from drivetrack.cli.error_handling import handle_domain_error
from drivetrack.domain.dashboard import DashboardService
from drivetrack.domain.entities import FuelStatus, METRIC_NAMES

METRIC_LABELS = {
    "revenue": "Revenue",
    "expense": "Expenses",
    "balance": "Balance",
    "distance": "Distance",
    "revenue_per_distance": "Revenue per km",
    "hours": "Hours worked",
    "revenue_per_hour": "Revenue per hour",
    "fuel_expense": "Fuel expense (est.)",
    "profit": "Profit",
}

_FUEL_NOTES = {
    FuelStatus.INCOMPLETE_PROFILE: "Configure fuel consumption with 'drivetrack profile set'",
    FuelStatus.NO_PRICE_DATA: "No fuel price recorded yet",
}


def format_metric(name: str, value: float) -> str:
    """Render a metric value with its unit."""
    if name == "distance":
        return f"{value:,.0f} km"
    if name == "hours":
        return f"{value:,.2f} h"
    return f"R${value:,.2f}"


def _format_range(period) -> str:
    if period.is_single_day:
        return period.start_day.isoformat()
    return f"{period.start_day.isoformat()} to {period.end_day.isoformat()}"


@click.command("dashboard")
@period_options
@click.pass_context
def dashboard(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Show metrics for a period compared with the month before.

    Examples:
        drivetrack dashboard
        drivetrack dashboard --last-month
        drivetrack dashboard --start-date 2024-03-01 --end-date 2024-03-15
    """
    request = resolve_cli_period(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    service = DashboardService(ctx.obj["db"])

    try:
        report = service.build_report(ctx.obj["user_id"], request)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nDashboard: {_format_range(report.period)}")
    if report.previous_period is not None:
        click.echo(f"Compared with: {_format_range(report.previous_period)}")
    else:
        click.echo("Compared with: no corresponding previous period")
    click.echo("-" * 60)
    click.echo(f"{'Metric':<22} {'Value':>18}  {'Change':>16}")
    click.echo("-" * 60)

    for name in METRIC_NAMES:
        value = report.metrics.value_of(name)
        if name in ("fuel_expense", "profit") and (
            report.metrics.fuel_status != FuelStatus.OK
        ):
            value_str = "-"
        else:
            value_str = format_metric(name, value)
        click.echo(
            f"{METRIC_LABELS[name]:<22} {value_str:>18}  {str(report.comparison[name]):>16}"
        )

    click.echo("-" * 60)
    note = _FUEL_NOTES.get(report.metrics.fuel_status)
    if note:
        click.echo(f"Note: {note}")


def register_commands(cli: click.Group) -> None:
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
