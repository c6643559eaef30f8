"""Work session commands."""

import click

from drivetrack.cli.error_handling import handle_domain_error, parse_datetime_or_exit
from drivetrack.domain.timezone import to_local_time
from drivetrack.domain.work_session import WorkSessionService


def _format_time(instant) -> str:
    return f"{to_local_time(instant):%Y-%m-%d %H:%M}"


@click.group("work")
def work_group():
    """Track worked hours."""
    pass


@work_group.command("start")
@click.option("--at", "at", default="now", show_default=True, help="Local start time")
@click.pass_context
def start_session(ctx, at: str):
    """Start a work session."""
    service = WorkSessionService(ctx.obj["db"])
    start = parse_datetime_or_exit(ctx, at, "start time")

    try:
        session_id = service.start_session(ctx.obj["user_id"], start)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Started work session {session_id} at {_format_time(start)}")


@work_group.command("stop")
@click.option("--at", "at", default="now", show_default=True, help="Local end time")
@click.pass_context
def stop_session(ctx, at: str):
    """Stop the running work session."""
    service = WorkSessionService(ctx.obj["db"])
    end = parse_datetime_or_exit(ctx, at, "end time")

    try:
        work_session = service.end_session(ctx.obj["user_id"], end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Stopped work session {work_session.id} at {_format_time(end)}")
    click.echo(f"  Duration: {work_session.duration_hours:.2f} h")


@work_group.command("add")
@click.option("--start", required=True, help="Local start time (YYYY-MM-DD HH:MM)")
@click.option("--end", required=True, help="Local end time (YYYY-MM-DD HH:MM)")
@click.pass_context
def add_session(ctx, start: str, end: str):
    """Record a finished work session.

    Examples:
        drivetrack work add --start "2024-03-10 23:30" --end "2024-03-11 05:00"
    """
    service = WorkSessionService(ctx.obj["db"])
    start_at = parse_datetime_or_exit(ctx, start, "start time")
    end_at = parse_datetime_or_exit(ctx, end, "end time")

    try:
        session_id = service.add_session(ctx.obj["user_id"], start_at, end_at)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added work session {session_id}")


@work_group.command("list")
@click.pass_context
def list_sessions(ctx):
    """List work sessions."""
    service = WorkSessionService(ctx.obj["db"])
    sessions = service.list_sessions(ctx.obj["user_id"])

    if not sessions:
        click.echo("No work sessions found.")
        return

    click.echo(f"{'ID':<6} {'Start':<17} {'End':<17} {'Hours':>7}")
    click.echo("-" * 50)
    for work_session in sessions:
        if work_session.in_progress:
            end_str, hours_str = "(running)", ""
        else:
            end_str = _format_time(work_session.end)
            hours_str = f"{work_session.duration_hours:.2f}"
        click.echo(
            f"{work_session.id:<6} {_format_time(work_session.start):<17} "
            f"{end_str:<17} {hours_str:>7}"
        )


@work_group.command("segments")
@click.pass_context
def list_segments(ctx):
    """Show finished sessions split at the 04:00 cutoff, by working day."""
    service = WorkSessionService(ctx.obj["db"])
    segments = service.segments(ctx.obj["user_id"])

    if not segments:
        click.echo("No finished work sessions found.")
        return

    click.echo(f"{'Segment':<12} {'Working day':<12} {'Start':<17} {'End':<17} {'Hours':>7}")
    click.echo("-" * 70)
    for segment in segments:
        click.echo(
            f"{segment.id:<12} {segment.working_date.isoformat():<12} "
            f"{_format_time(segment.start):<17} {_format_time(segment.end):<17} "
            f"{segment.duration_hours:>7.2f}"
        )


@work_group.command("edit")
@click.argument("session_id", type=int)
@click.option("--start", help="Corrected local start time")
@click.option("--end", help="Corrected local end time")
@click.pass_context
def edit_session(ctx, session_id: int, start: str | None, end: str | None):
    """Correct a work session's start or end."""
    service = WorkSessionService(ctx.obj["db"])
    start_at = parse_datetime_or_exit(ctx, start, "start time") if start else None
    end_at = parse_datetime_or_exit(ctx, end, "end time") if end else None

    try:
        service.update_session(session_id, start=start_at, end=end_at)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated work session {session_id}")


@work_group.command("delete")
@click.argument("session_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_session(ctx, session_id: int, yes: bool):
    """Delete a work session."""
    service = WorkSessionService(ctx.obj["db"])

    if not yes and not click.confirm(
        f"Are you sure you want to delete work session {session_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_session(session_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted work session {session_id}")


def register_commands(cli: click.Group) -> None:
    """Register work commands with main CLI."""
    cli.add_command(work_group, name="work")
