"""Earnings goal commands."""

import click

from drivetrack.cli.error_handling import handle_domain_error, parse_amount_or_exit
from drivetrack.domain.goals import GoalService


@click.group("goals")
def goals_group():
    """Weekly and monthly earnings goals."""
    pass


@goals_group.command("show")
@click.pass_context
def show_goals(ctx):
    """Show goals and progress for this week and month."""
    service = GoalService(ctx.obj["db"])
    progress = service.progress(ctx.obj["user_id"])

    click.echo(
        f"Weekly goal:  R${progress.goals.weekly_goal:,.2f}  "
        f"earned R${progress.week_earnings:,.2f} ({progress.weekly_percent:.1f}%)"
    )
    click.echo(
        f"Monthly goal: R${progress.goals.monthly_goal:,.2f}  "
        f"earned R${progress.month_earnings:,.2f} ({progress.monthly_percent:.1f}%)"
    )


@goals_group.command("set")
@click.option("--weekly", help="Weekly earnings goal")
@click.option("--monthly", help="Monthly earnings goal")
@click.pass_context
def set_goals(ctx, weekly: str | None, monthly: str | None):
    """Set the weekly and/or monthly goal.

    Examples:
        drivetrack goals set --weekly 1200 --monthly 5000
    """
    if weekly is None and monthly is None:
        click.echo("Error: Provide --weekly and/or --monthly.", err=True)
        ctx.exit(1)

    weekly_goal = parse_amount_or_exit(ctx, weekly, "weekly goal") if weekly else None
    monthly_goal = parse_amount_or_exit(ctx, monthly, "monthly goal") if monthly else None

    service = GoalService(ctx.obj["db"])
    try:
        goals = service.set_goals(
            ctx.obj["user_id"], weekly_goal=weekly_goal, monthly_goal=monthly_goal
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Goals updated: weekly R${goals.weekly_goal:,.2f}, "
        f"monthly R${goals.monthly_goal:,.2f}"
    )


@goals_group.command("suggest")
@click.option("--apply", "apply_goals", is_flag=True, help="Save the suggested goals")
@click.pass_context
def suggest_goals(ctx, apply_goals: bool):
    """Suggest goals from the last four weeks and months of income."""
    service = GoalService(ctx.obj["db"])
    suggestion = service.suggest(ctx.obj["user_id"])

    click.echo(f"Suggested weekly goal:  R${suggestion.weekly_goal:,.2f}")
    click.echo(f"Suggested monthly goal: R${suggestion.monthly_goal:,.2f}")

    if apply_goals:
        service.set_goals(
            ctx.obj["user_id"],
            weekly_goal=suggestion.weekly_goal,
            monthly_goal=suggestion.monthly_goal,
        )
        click.echo("Suggested goals saved.")


def register_commands(cli: click.Group) -> None:
    """Register goals commands with main CLI."""
    cli.add_command(goals_group, name="goals")
