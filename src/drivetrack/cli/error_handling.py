"""CLI error handling helpers."""

from datetime import datetime

import click

from drivetrack.domain.errors import DomainError
from drivetrack.utils.amount_parser import parse_amount, parse_reading
from drivetrack.utils.date_parser import parse_datetime


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def parse_datetime_or_exit(ctx: click.Context, value: str, label: str = "date") -> datetime:
    """Parse a local date and time, exiting with an error message on failure."""
    try:
        return parse_datetime(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str = "amount"):
    """Parse a money amount, exiting with an error message on failure."""
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_reading_or_exit(ctx: click.Context, value: str) -> int:
    """Parse an odometer reading, exiting with an error message on failure."""
    try:
        return parse_reading(value)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
