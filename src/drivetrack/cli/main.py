"""Main CLI entry point."""

import click

from drivetrack.config import get_settings
from drivetrack.database.factories import create_sqlite_database
from drivetrack.utils.logger import configure_logging, get_logger, reset_logging

# Import and register all commands at module level
from drivetrack.cli.commands import (
    best_day,
    chart,
    dashboard,
    goals,
    odometer,
    profile,
    transaction,
    work,
)

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DRIVETRACK_DB_PATH environment variable)",
    envvar="DRIVETRACK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    help="User whose records are read and written (default: DRIVETRACK_USER or 'default')",
    envvar="DRIVETRACK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level for messages on stderr (default: WARNING)",
    envvar="DRIVETRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str | None, log_level: str | None):
    """Drivetrack - Earnings tracker for ride-hailing and delivery drivers.

    Record income, expenses, odometer readings and work hours, then look at
    the dashboard for a period compared with the month before.
    """
    ctx.ensure_object(dict)
    settings = get_settings()

    handler = configure_logging(log_level or settings.log_level)
    ctx.call_on_close(lambda: reset_logging(handler))

    ctx.obj["user_id"] = user_id or settings.default_user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
        logger.debug("Using database %s for user %s", db.database_url, ctx.obj["user_id"])


# Register all commands
transaction.register_commands(cli)
odometer.register_commands(cli)
work.register_commands(cli)
profile.register_commands(cli)
dashboard.register_commands(cli)
best_day.register_commands(cli)
goals.register_commands(cli)
chart.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
