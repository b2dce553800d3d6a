"""Shared pytest fixtures for kakebo tests."""

import tempfile
import os
from datetime import UTC, datetime
import pytest

from kakebo.database.factories import create_sqlite_database
from kakebo.domain.clock import FixedClock
from kakebo.domain.goals import GoalService
from kakebo.domain.periods import PeriodService
from kakebo.domain.progress import ProgressService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock fixed at noon UTC on 2024-01-01, a Monday."""
    return FixedClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def progress_service(temp_db, clock):
    """Create a ProgressService with a temporary database."""
    return ProgressService(temp_db, clock)


@pytest.fixture
def goal_service(temp_db, clock):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db, clock)


@pytest.fixture
def period_service(temp_db, clock):
    """Create a PeriodService with a temporary database."""
    return PeriodService(temp_db, clock)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
