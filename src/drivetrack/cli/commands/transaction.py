"""Income, expense and transaction management commands."""

import click

from drivetrack.cli.date_filters import period_options, resolve_cli_period
from drivetrack.cli.error_handling import (
    handle_domain_error,
    parse_amount_or_exit,
    parse_datetime_or_exit,
)
from drivetrack.domain.entities import TransactionType
from drivetrack.domain.periods import resolve_period
from drivetrack.domain.timezone import to_local_time
from drivetrack.domain.transaction import TransactionService


def _create(
    ctx,
    type: TransactionType,
    value: str,
    category: str,
    date: str,
    fuel_type: str | None = None,
    price_per_liter: str | None = None,
    subcategory: str | None = None,
    observation: str | None = None,
) -> None:
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_value = parse_amount_or_exit(ctx, value, "value")
    txn_price = None
    if price_per_liter is not None:
        txn_price = parse_amount_or_exit(ctx, price_per_liter, "price per liter")
    txn_date = parse_datetime_or_exit(ctx, date)

    try:
        transaction_id = service.create_transaction(
            user_id=ctx.obj["user_id"],
            type=type,
            date=txn_date,
            value=txn_value,
            category=category,
            fuel_type=fuel_type,
            price_per_liter=txn_price,
            subcategory=subcategory,
            observation=observation,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {type.value} {transaction_id}")
    click.echo(f"  Date: {to_local_time(txn_date):%Y-%m-%d %H:%M}")
    click.echo(f"  Value: R${txn_value:,.2f}")
    click.echo(f"  Category: {category}")
    if txn_price is not None:
        click.echo(f"  Price per liter: R${txn_price:,.3f}")


@click.group("income")
def income_group():
    """Record earnings."""
    pass


@income_group.command("add")
@click.option("--value", required=True, help="Amount received (e.g., 85.50)")
@click.option("--category", required=True, help="Source platform (e.g., 'Uber', '99', 'iFood')")
@click.option(
    "--date",
    default="now",
    show_default=True,
    help="Local date and time (YYYY-MM-DD HH:MM, HH:MM or 'now')",
)
@click.option("--observation", help="Free-text note")
@click.pass_context
def add_income(ctx, value: str, category: str, date: str, observation: str | None):
    """Add an income entry.

    Examples:
        drivetrack income add --value 150 --category Uber
        drivetrack income add --value 42.30 --category 99 --date "2024-03-10 22:15"
    """
    _create(ctx, TransactionType.INCOME, value, category, date, observation=observation)


@click.group("expense")
def expense_group():
    """Record costs."""
    pass


@expense_group.command("add")
@click.option("--value", required=True, help="Amount paid (e.g., 120.00)")
@click.option("--category", required=True, help="Expense category (e.g., 'Fuel', 'Maintenance')")
@click.option(
    "--date",
    default="now",
    show_default=True,
    help="Local date and time (YYYY-MM-DD HH:MM, HH:MM or 'now')",
)
@click.option("--fuel-type", help="Fuel type for fuel purchases (e.g., 'Gasoline')")
@click.option("--price-per-liter", help="Fuel price per liter, used for fuel cost estimates")
@click.option("--subcategory", help="Subcategory")
@click.option("--observation", help="Free-text note")
@click.pass_context
def add_expense(
    ctx,
    value: str,
    category: str,
    date: str,
    fuel_type: str | None,
    price_per_liter: str | None,
    subcategory: str | None,
    observation: str | None,
):
    """Add an expense entry.

    Examples:
        drivetrack expense add --value 200 --category Fuel --price-per-liter 5.89
        drivetrack expense add --value 80 --category Maintenance --subcategory "Oil change"
    """
    _create(
        ctx,
        TransactionType.EXPENSE,
        value,
        category,
        date,
        fuel_type=fuel_type,
        price_per_liter=price_per_liter,
        subcategory=subcategory,
        observation=observation,
    )


@click.group("transaction")
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@period_options
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Show only income or only expenses",
)
@click.option("--all", "show_all", is_flag=True, help="Ignore the period and list everything")
@click.option("--verbose", "-v", is_flag=True, help="Show fuel details and observations")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    txn_type: str | None,
    show_all: bool,
    verbose: bool,
    **period_flags,
):
    """List transactions for a period (today by default)."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    period = None
    if not show_all:
        request = resolve_cli_period(
            ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
        )
        try:
            period = resolve_period(request)
        except ValueError as e:
            handle_domain_error(ctx, e)

    transactions = service.list_transactions(ctx.obj["user_id"], period=period, type=txn_type)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Date':<17} {'Type':<8} {'Value':>12}  {'Category':<20}")
    click.echo("-" * 80)

    for txn in transactions:
        value_str = f"R${txn.value:,.2f}"
        click.echo(
            f"{txn.id:<6} {to_local_time(txn.date):%Y-%m-%d %H:%M} {txn.type.value:<8} "
            f"{value_str:>12}  {txn.category:<20}"
        )
        if verbose:
            if txn.subcategory:
                click.echo(f"       Subcategory: {txn.subcategory}")
            if txn.fuel_type:
                click.echo(f"       Fuel type: {txn.fuel_type}")
            if txn.price_per_liter is not None:
                click.echo(f"       Price per liter: R${txn.price_per_liter:,.3f}")
            if txn.observation:
                click.echo(f"       Observation: {txn.observation}")

    total_income = sum(txn.value for txn in transactions if txn.is_income)
    total_expenses = sum(txn.value for txn in transactions if txn.is_expense)
    click.echo("-" * 80)
    click.echo(
        f"{'TOTAL':<6} Income: R${total_income:,.2f} | "
        f"Expenses: R${total_expenses:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType]),
    help="Change to income or expense",
)
@click.option("--date", help="Local date and time (YYYY-MM-DD HH:MM)")
@click.option("--value", help="Amount")
@click.option("--category", help="Category")
@click.option("--fuel-type", help="Fuel type")
@click.option("--price-per-liter", help="Fuel price per liter")
@click.option("--subcategory", help="Subcategory")
@click.option("--observation", help="Free-text note")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    txn_type: str | None,
    date: str | None,
    value: str | None,
    category: str | None,
    fuel_type: str | None,
    price_per_liter: str | None,
    subcategory: str | None,
    observation: str | None,
) -> None:
    """Edit a transaction.

    Updates only the fields that are provided.

    Examples:
        drivetrack transaction edit 3 --value 95.00
        drivetrack transaction edit 3 --category Fuel --price-per-liter 5.79
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_date = parse_datetime_or_exit(ctx, date) if date is not None else None
    txn_value = parse_amount_or_exit(ctx, value, "value") if value is not None else None
    txn_price = None
    if price_per_liter is not None:
        txn_price = parse_amount_or_exit(ctx, price_per_liter, "price per liter")

    try:
        service.update_transaction(
            transaction_id,
            type=TransactionType(txn_type) if txn_type else None,
            date=txn_date,
            value=txn_value,
            category=category,
            fuel_type=fuel_type,
            price_per_liter=txn_price,
            subcategory=subcategory,
            observation=observation,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        drivetrack transaction delete 3
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register income, expense and transaction commands with main CLI."""
    cli.add_command(income_group, name="income")
    cli.add_command(expense_group, name="expense")
    cli.add_command(transaction_group, name="transaction")
