"""Add transaction command."""

import click
from kakebo.cli.error_handling import handle_domain_error, handle_input_error
from kakebo.cli.formatting import echo_progress
from kakebo.domain.entities import TransactionType
from kakebo.domain.errors import DomainError
from kakebo.domain.progress import ProgressService
from kakebo.utils.amount_parser import parse_amount
from kakebo.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--type",
    "transaction_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Transaction type",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--date",
    "txn_date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'; default: today)",
)
@click.option("--category", help="Category label")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    transaction_type: str,
    amount: str,
    description: str,
    txn_date: str | None,
    category: str | None,
    notes: str | None,
):
    """Record a transaction and collect its streak points.

    Examples:
        kakebo add --type expense --amount 12.50 --description "Lunch"
        kakebo add --type income --amount 2000 --description "Salary" --date 2024-01-31
        kakebo add --type saving --amount 300 --description "Monthly saving"
    """
    db = ctx.obj["db"]
    service = ProgressService(db, ctx.obj["clock"])

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        handle_input_error(ctx, "amount", e)
        return

    # Parse date
    parsed_date = None
    if txn_date:
        try:
            parsed_date = parse_date(txn_date, today=ctx.obj["clock"].today())
        except ValueError as e:
            handle_input_error(ctx, "date", e)
            return

    try:
        transaction_id, result = service.record_transaction(
            amount=txn_amount,
            transaction_type=TransactionType(transaction_type.lower()),
            description=description,
            txn_date=parsed_date,
            category=category,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}: {transaction_type.lower()} {txn_amount}")
    echo_progress(result)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
