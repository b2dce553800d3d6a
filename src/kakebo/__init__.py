"""Kakebo: budgeting with points, ranks, streaks and achievements."""

__version__ = "0.1.0"


def __getattr__(name):
    # The CLI pulls in the database layer, so it is only loaded on demand
    if name == "main":
        from kakebo.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
