"""Main CLI entry point."""

import logging

import click
from kakebo.database.factories import create_sqlite_database
from kakebo.domain.clock import SystemClock

# Import and register all commands at module level
from kakebo.cli.commands import (
    add,
    goal,
    period,
    profile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides KAKEBO_DB_PATH environment variable)",
    envvar="KAKEBO_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Kakebo - Budgeting with progress and rewards.

    Record income, expenses and savings, work towards saving goals and
    earn points, ranks and achievements for keeping the habit.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj.setdefault("clock", SystemClock())


# Register all commands
add.register_commands(cli)
goal.register_commands(cli)
period.register_commands(cli)
profile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
