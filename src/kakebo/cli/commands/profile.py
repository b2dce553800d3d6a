"""Profile commands."""

import click
from kakebo.domain.achievements import CATALOG
from kakebo.domain.progress import ProgressService


@click.group()
def profile_group():
    """Show points, rank, streak and achievements."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx):
    """Show the progress summary."""
    clock = ctx.obj["clock"]
    service = ProgressService(ctx.obj["db"], clock)
    profile = service.get_profile()

    click.echo(f"\nRank: {profile.current_rank.label}")
    click.echo(f"Points: {profile.total_points}")
    if profile.points_to_next_rank is None:
        click.echo("Top rank reached")
    else:
        click.echo(
            f"Next rank in {profile.points_to_next_rank} points "
            f"({profile.rank_progress_percent:.1f}%)"
        )

    streak_status = "active" if profile.is_streak_active(clock.today()) else "inactive"
    click.echo(
        f"Streak: {profile.current_streak} days ({streak_status}), "
        f"longest {profile.longest_streak}"
    )
    click.echo(f"Transactions: {profile.total_transactions_count}")
    click.echo(f"Goals completed: {profile.completed_goals_count}")
    click.echo(f"Best saving rate: {profile.best_saving_rate:.1f}%")
    click.echo(
        f"Achievements: {profile.achievement_count}/{len(CATALOG)} "
        f"({profile.achievement_completion_rate:.1f}%)"
    )

    recent = profile.recent_achievements(clock.now())
    if recent:
        click.echo("\nRecently unlocked:")
        for unlocked in recent:
            click.echo(f"  {unlocked.definition.name} ({unlocked.unlocked_at:%Y-%m-%d})")


@profile_group.command("achievements")
@click.pass_context
def list_achievements(ctx):
    """List every achievement and whether it is unlocked."""
    service = ProgressService(ctx.obj["db"], ctx.obj["clock"])
    profile = service.get_profile()

    click.echo("\nAchievements:")
    click.echo("-" * 70)
    for achievement_type, definition in CATALOG.items():
        unlocked = profile.unlocked_achievements.get(achievement_type)
        marker = "[x]" if unlocked else "[ ]"
        click.echo(
            f"{marker} {definition.name:20s} | {definition.rarity.value:9s} | "
            f"{definition.awarded_points:5d} pts | {definition.description}"
        )


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
