"""Financial period commands."""

from decimal import Decimal

import click
from kakebo.cli.error_handling import handle_domain_error, handle_input_error
from kakebo.cli.formatting import echo_progress
from kakebo.domain.errors import DomainError
from kakebo.domain.period import FinancialPeriod, PeriodType
from kakebo.domain.periods import PeriodService
from kakebo.domain.progress import ProgressService
from kakebo.utils.amount_parser import parse_amount
from kakebo.utils.date_parser import parse_date


def _print_period(period: FinancialPeriod) -> None:
    state = "closed" if period.is_closed else "open"
    click.echo(
        f"ID: {period.id:3d} | {period.name:24s} | {period.period_type.value:9s} | "
        f"{period.start_date} to {period.end_date} | {state}"
    )


@click.group()
def period_group():
    """Manage financial periods."""
    pass


@period_group.command("create")
@click.argument(
    "period_type",
    type=click.Choice([t.value for t in PeriodType], case_sensitive=False),
)
@click.option("--start", help="Start or reference date (default: today)")
@click.option("--end", help="End date (custom periods only)")
@click.option("--name", help="Period name (required for custom periods)")
@click.option("--saving-goal", help="Amount to save during the period")
@click.option("--expense-limit", help="Maximum expenses for the period")
@click.pass_context
def create_period(
    ctx,
    period_type: str,
    start: str | None,
    end: str | None,
    name: str | None,
    saving_goal: str | None,
    expense_limit: str | None,
):
    """Create a financial period.

    Examples:
        kakebo period create monthly --saving-goal 300 --expense-limit 1500
        kakebo period create weekly --start "next week"
        kakebo period create custom --name "Summer" --start 2024-06-01 --end 2024-08-31
    """
    clock = ctx.obj["clock"]
    service = PeriodService(ctx.obj["db"], clock)
    today = clock.today()

    try:
        start_date = parse_date(start, today=today) if start else None
        end_date = parse_date(end, today=today) if end else None
        goal_amount: Decimal | None = parse_amount(saving_goal) if saving_goal else None
        limit: Decimal | None = parse_amount(expense_limit) if expense_limit else None
    except ValueError as e:
        handle_input_error(ctx, "input", e)
        return

    try:
        period_id = service.create_period(
            PeriodType(period_type.lower()),
            start_date=start_date,
            end_date=end_date,
            name=name,
            saving_goal_amount=goal_amount,
            max_expense_limit=limit,
        )
        period = service.require_period(period_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created period '{period.name}' (ID: {period_id}): "
        f"{period.start_date} to {period.end_date}"
    )


@period_group.command("list")
@click.pass_context
def list_periods(ctx):
    """List all periods."""
    service = PeriodService(ctx.obj["db"], ctx.obj["clock"])

    periods = service.list_periods()
    if not periods:
        click.echo("No periods found.")
        return

    click.echo("\nPeriods:")
    click.echo("-" * 80)
    for period in periods:
        _print_period(period)


@period_group.command("show")
@click.argument("period_id", type=int)
@click.pass_context
def show_period(ctx, period_id: int):
    """Show a period's totals and its current score."""
    clock = ctx.obj["clock"]
    service = PeriodService(ctx.obj["db"], clock)
    today = clock.today()

    try:
        period = service.require_period(period_id)
        score = service.score(period_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _print_period(period)
    summary = score.summary
    click.echo(f"Income:   {summary.total_income}")
    click.echo(f"Expenses: {summary.total_expenses}")
    click.echo(f"Savings:  {summary.total_savings}")
    click.echo(f"Balance:  {summary.balance}")
    click.echo(f"Saving rate: {summary.saving_rate:.1f}%")
    if period.saving_goal_amount is not None:
        met = "met" if period.is_saving_goal_met() else "not met"
        click.echo(f"Saving goal: {period.saving_goal_amount} ({met})")
    if period.max_expense_limit is not None:
        over = "exceeded" if period.is_over_expense_limit() else "respected"
        click.echo(f"Expense limit: {period.max_expense_limit} ({over})")
    if period.is_current(today):
        click.echo(
            f"Days remaining: {period.days_remaining(today)} "
            f"({period.time_elapsed_percent(today):.1f}% elapsed)"
        )

    click.echo(f"\nScore: {score.points} points")
    for reason, points in score.breakdown:
        click.echo(f"  {reason:22s} +{points}")


@period_group.command("close")
@click.argument("period_id", type=int)
@click.pass_context
def close_period(ctx, period_id: int):
    """Close a period and collect its points."""
    service = ProgressService(ctx.obj["db"], ctx.obj["clock"])

    try:
        result = service.close_period(period_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not result.changed:
        click.echo(f"Period {period_id} is already closed")
        return
    click.echo(f"Closed period {period_id}")
    echo_progress(result)


def register_commands(cli):
    """Register period commands with main CLI."""
    cli.add_command(period_group, name="period")
