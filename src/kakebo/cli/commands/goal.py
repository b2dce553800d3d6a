"""Saving goal commands."""

import click
from kakebo.cli.error_handling import handle_domain_error, handle_input_error
from kakebo.cli.formatting import echo_progress
from kakebo.domain.errors import DomainError
from kakebo.domain.goals import GoalService
from kakebo.domain.progress import ProgressService
from kakebo.domain.saving_goal import GoalPriority, GoalStatus, SavingGoal
from kakebo.utils.amount_parser import parse_amount, parse_percentages
from kakebo.utils.date_parser import parse_date


def _print_goal(goal: SavingGoal, today) -> None:
    click.echo(
        f"ID: {goal.id:3d} | {goal.name:24s} | {goal.current_amount}/{goal.target_amount} "
        f"({goal.progress_percent:.1f}%) | {goal.status.value} | due {goal.target_date}"
    )
    flags = []
    if goal.is_at_risk(today):
        flags.append("at risk")
    if goal.is_overdue(today):
        flags.append("overdue")
    if flags:
        click.echo(f"      {', '.join(flags)}")


@click.group()
def goal_group():
    """Manage saving goals."""
    pass


@goal_group.command("create")
@click.argument("name")
@click.option("--target", required=True, help="Amount to save")
@click.option("--target-date", required=True, help="Deadline (e.g., 2024-12-31 or 'in 6 months')")
@click.option("--reward", type=int, default=100, show_default=True, help="Points on completion")
@click.option(
    "--priority",
    type=click.Choice([p.value for p in GoalPriority], case_sensitive=False),
    default=GoalPriority.MEDIUM.value,
    show_default=True,
)
@click.option("--description", help="Goal description")
@click.option("--milestones", help="Comma-separated milestone percentages (e.g., '25,50,75')")
@click.pass_context
def create_goal(
    ctx,
    name: str,
    target: str,
    target_date: str,
    reward: int,
    priority: str,
    description: str | None,
    milestones: str | None,
):
    """Create a saving goal.

    Examples:
        kakebo goal create "Emergency Fund" --target 3000 --target-date "in 6 months" --milestones 25,50,75
        kakebo goal create "New Bike" --target 800 --target-date 2024-09-01 --reward 150
    """
    clock = ctx.obj["clock"]
    service = GoalService(ctx.obj["db"], clock)

    try:
        target_amount = parse_amount(target)
        deadline = parse_date(target_date, today=clock.today())
        percentages = parse_percentages(milestones) if milestones else []
    except ValueError as e:
        handle_input_error(ctx, "input", e)
        return

    try:
        goal_id = service.create_goal(
            name=name,
            target_amount=target_amount,
            target_date=deadline,
            reward_points=reward,
            priority=GoalPriority(priority.lower()),
            description=description,
            milestones=percentages,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created goal '{name}' (ID: {goal_id})")
    if percentages:
        click.echo(f"Milestones: {', '.join(f'{p:g}%' for p in sorted(percentages))}")


@goal_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in GoalStatus], case_sensitive=False),
    help="Only show goals with this status",
)
@click.pass_context
def list_goals(ctx, status: str | None):
    """List saving goals."""
    clock = ctx.obj["clock"]
    service = GoalService(ctx.obj["db"], clock)

    goals = service.list_goals(GoalStatus(status.lower()) if status else None)
    if not goals:
        click.echo("No goals found.")
        return

    click.echo("\nGoals:")
    click.echo("-" * 80)
    for goal in goals:
        _print_goal(goal, clock.today())


@goal_group.command("show")
@click.argument("goal_id", type=int)
@click.pass_context
def show_goal(ctx, goal_id: int):
    """Show a goal with its milestones and pace."""
    clock = ctx.obj["clock"]
    service = GoalService(ctx.obj["db"], clock)
    today = clock.today()

    try:
        goal = service.require_goal(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    _print_goal(goal, today)
    click.echo(f"Remaining: {goal.remaining_amount}")
    if goal.status == GoalStatus.ACTIVE:
        click.echo(f"Days remaining: {goal.days_remaining(today)}")
        click.echo(
            f"Needed per day/week/month: {goal.required_daily_amount(today):.2f} / "
            f"{goal.required_weekly_amount(today):.2f} / {goal.required_monthly_amount(today):.2f}"
        )
        click.echo(f"On track: {'yes' if goal.is_on_track(today) else 'no'}")
    for sub_goal in goal.sub_goals:
        marker = "[x]" if sub_goal.is_completed else "[ ]"
        click.echo(
            f"  {marker} {sub_goal.name} - {sub_goal.target_amount} "
            f"({goal.sub_goal_progress(sub_goal):.1f}%)"
        )
    click.echo(f"Points earned: {service.total_points(goal_id)}")


@goal_group.command("contribute")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_context
def contribute(ctx, goal_id: int, amount: str):
    """Put money towards a goal."""
    service = ProgressService(ctx.obj["db"], ctx.obj["clock"])

    try:
        contribution = parse_amount(amount)
    except ValueError as e:
        handle_input_error(ctx, "amount", e)
        return

    try:
        applied, result = service.contribute_to_goal(goal_id, contribution)
        goal = GoalService(ctx.obj["db"]).require_goal(goal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if applied <= 0:
        click.echo(f"Goal {goal_id} is {goal.status.value}; contribution not applied")
        return
    click.echo(f"Added {applied} to goal '{goal.name}': {goal.current_amount}/{goal.target_amount}")
    if goal.status == GoalStatus.COMPLETED:
        click.echo("Goal completed!")
    echo_progress(result)


@goal_group.command("withdraw")
@click.argument("goal_id", type=int)
@click.argument("amount")
@click.pass_context
def withdraw(ctx, goal_id: int, amount: str):
    """Take money out of a goal."""
    service = GoalService(ctx.obj["db"], ctx.obj["clock"])

    try:
        value = parse_amount(amount)
    except ValueError as e:
        handle_input_error(ctx, "amount", e)
        return

    try:
        withdrawn = service.withdraw(goal_id, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Withdrew {withdrawn} from goal {goal_id}")


def _status_command(name: str, verb: str):
    @goal_group.command(name, help=f"Mark a goal as {verb}.")
    @click.argument("goal_id", type=int)
    @click.pass_context
    def command(ctx, goal_id: int):
        service = GoalService(ctx.obj["db"], ctx.obj["clock"])
        try:
            goal = getattr(service, name)(goal_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
            return
        click.echo(f"Goal '{goal.name}' {verb} (status: {goal.status.value})")

    return command


pause_goal = _status_command("pause", "paused")
resume_goal = _status_command("resume", "resumed")
cancel_goal = _status_command("cancel", "cancelled")
fail_goal = _status_command("fail", "failed")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
