"""Profile commands."""

import click

from drivetrack.cli.error_handling import handle_domain_error, parse_amount_or_exit
from drivetrack.domain.profile import ProfileService


def _show(profile) -> None:
    consumption = (
        f"{profile.fuel_consumption} km/l" if profile.has_fuel_consumption else "(not set)"
    )
    click.echo(f"User: {profile.user_id}")
    click.echo(f"  Name: {profile.name or '(not set)'}")
    click.echo(f"  Vehicle type: {profile.vehicle_type or '(not set)'}")
    click.echo(f"  Vehicle model: {profile.vehicle_model or '(not set)'}")
    click.echo(f"  Fuel consumption: {consumption}")


@click.group("profile")
def profile_group():
    """View and update the driver profile."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx):
    """Show the driver profile."""
    service = ProfileService(ctx.obj["db"])
    _show(service.get_profile(ctx.obj["user_id"]))


@profile_group.command("set")
@click.option("--name", help="Driver name")
@click.option("--vehicle-type", help="Vehicle type (e.g., car, motorcycle)")
@click.option("--vehicle-model", help="Vehicle model")
@click.option("--consumption", help="Average fuel consumption in km per liter")
@click.pass_context
def set_profile(
    ctx,
    name: str | None,
    vehicle_type: str | None,
    vehicle_model: str | None,
    consumption: str | None,
):
    """Update the driver profile.

    Fuel consumption is required for the fuel expense and profit estimates.

    Examples:
        drivetrack profile set --vehicle-model "Onix 1.0" --consumption 12.5
    """
    service = ProfileService(ctx.obj["db"])
    fuel_consumption = None
    if consumption is not None:
        fuel_consumption = parse_amount_or_exit(ctx, consumption, "fuel consumption")

    try:
        profile = service.update_profile(
            ctx.obj["user_id"],
            name=name,
            vehicle_type=vehicle_type,
            vehicle_model=vehicle_model,
            fuel_consumption=fuel_consumption,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("Profile updated")
    _show(profile)


def register_commands(cli: click.Group) -> None:
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
