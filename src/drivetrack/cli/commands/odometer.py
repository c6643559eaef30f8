"""Odometer commands."""

import click

from drivetrack.cli.error_handling import (
    handle_domain_error,
    parse_datetime_or_exit,
    parse_reading_or_exit,
)
from drivetrack.domain.odometer import OdometerService
from drivetrack.domain.timezone import to_local_time


def _format_time(instant) -> str:
    return f"{to_local_time(instant):%Y-%m-%d %H:%M}"


@click.group("odometer")
def odometer_group():
    """Record odometer readings at the start and end of a shift."""
    pass


@odometer_group.command("open")
@click.argument("reading")
@click.option("--date", default="now", show_default=True, help="Local date and time of the reading")
@click.pass_context
def open_cycle(ctx, reading: str, date: str):
    """Open a cycle with the current odometer READING in km.

    Examples:
        drivetrack odometer open 12500
        drivetrack odometer open 12500 --date "2024-03-10 08:00"
    """
    service = OdometerService(ctx.obj["db"])
    value = parse_reading_or_exit(ctx, reading)
    when = parse_datetime_or_exit(ctx, date)

    try:
        event_id = service.open_cycle(ctx.obj["user_id"], value, when)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Opened cycle at {value:,} km (event {event_id})")


@odometer_group.command("close")
@click.argument("reading")
@click.option("--date", default="now", show_default=True, help="Local date and time of the reading")
@click.pass_context
def close_cycle(ctx, reading: str, date: str):
    """Close the open cycle with the final odometer READING in km.

    Examples:
        drivetrack odometer close 12630
    """
    service = OdometerService(ctx.obj["db"])
    value = parse_reading_or_exit(ctx, reading)
    when = parse_datetime_or_exit(ctx, date)

    try:
        current = service.current_cycle(ctx.obj["user_id"])
        event_id = service.close_cycle(ctx.obj["user_id"], value, when)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Closed cycle at {value:,} km (event {event_id})")
    click.echo(f"  Distance: {value - current.open.value:,} km")


@odometer_group.command("list")
@click.pass_context
def list_events(ctx):
    """List odometer readings."""
    service = OdometerService(ctx.obj["db"])
    events = service.list_events(ctx.obj["user_id"])

    if not events:
        click.echo("No odometer readings found.")
        return

    click.echo(f"{'ID':<6} {'Date':<17} {'Type':<6} {'Reading':>10}")
    click.echo("-" * 44)
    for event in events:
        click.echo(
            f"{event.id:<6} {_format_time(event.date):<17} {event.type.value:<6} "
            f"{event.value:>10,}"
        )


@odometer_group.command("cycles")
@click.pass_context
def list_cycles(ctx):
    """List reconciled cycles and their distances."""
    service = OdometerService(ctx.obj["db"])
    cycles = service.cycles(ctx.obj["user_id"])

    if not cycles:
        click.echo("No cycles found.")
        return

    click.echo(f"{'Day':<12} {'Opened':<17} {'Closed':<17} {'Distance':>10}")
    click.echo("-" * 60)
    total = 0
    for cycle in cycles:
        closed = _format_time(cycle.close.date) if cycle.is_closed else "(open)"
        click.echo(
            f"{cycle.day.isoformat():<12} {_format_time(cycle.open.date):<17} "
            f"{closed:<17} {cycle.distance:>7,} km"
        )
        total += cycle.distance
    click.echo("-" * 60)
    click.echo(f"{'TOTAL':<48} {total:>7,} km")


@odometer_group.command("edit")
@click.argument("event_id", type=int)
@click.option("--reading", help="Corrected reading in km")
@click.option("--date", help="Corrected local date and time")
@click.pass_context
def edit_event(ctx, event_id: int, reading: str | None, date: str | None):
    """Correct an odometer reading.

    Examples:
        drivetrack odometer edit 4 --reading 12640
    """
    service = OdometerService(ctx.obj["db"])
    value = parse_reading_or_exit(ctx, reading) if reading is not None else None
    when = parse_datetime_or_exit(ctx, date) if date is not None else None

    try:
        service.update_event(event_id, value=value, date=when)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated odometer event {event_id}")


@odometer_group.command("delete")
@click.argument("event_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_event(ctx, event_id: int, yes: bool):
    """Delete an odometer reading."""
    service = OdometerService(ctx.obj["db"])

    if not yes and not click.confirm(
        f"Are you sure you want to delete odometer event {event_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_event(event_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted odometer event {event_id}")


def register_commands(cli: click.Group) -> None:
    """Register odometer commands with main CLI."""
    cli.add_command(odometer_group, name="odometer")
