"""Shared output helpers for progress results."""

import click

from kakebo.domain.profile import ProgressResult


def echo_progress(result: ProgressResult) -> None:
    """Print points, rank changes and unlocks from a progress result."""
    if result.points_earned > 0:
        click.echo(f"+{result.points_earned} points")
    if result.ranked_up and result.new_rank is not None:
        click.echo(f"Rank up! You are now {result.new_rank.label}")
    for unlocked in result.unlocked:
        definition = unlocked.definition
        click.echo(
            f"Achievement unlocked: {definition.name} "
            f"({definition.rarity.value}, +{definition.awarded_points})"
        )
