"""Progress domain service.

Loads aggregates from the database, reports events to the engine and
stores whatever the engine changed.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from kakebo.database.base import Database
from kakebo.domain.clock import Clock, SystemClock
from kakebo.domain.engine import GamificationEngine
from kakebo.domain.entities import Transaction, TransactionType, validate_transaction
from kakebo.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    goal_not_found,
    period_closed,
    period_not_found,
)
from kakebo.domain.profile import GamificationProfile, ProgressResult

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for recording activity and awarding progress."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize progress service.

        Args:
            db: Database instance
            clock: Source of the current time, defaults to the wall clock
        """
        self.db = db
        self.clock = clock or SystemClock()
        self.engine = GamificationEngine(self.clock)

    def get_profile(self) -> GamificationProfile:
        """Get the user's profile, creating it on first use."""
        profile = self.db.get_profile()
        if profile is None:
            profile_id = self.db.create_profile()
            logger.info("Created gamification profile %s", profile_id)
            profile = self.db.get_profile(profile_id)
        return profile

    def record_transaction(
        self,
        amount: Decimal,
        transaction_type: TransactionType,
        description: str,
        txn_date: Optional[date] = None,
        category: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> tuple[int, ProgressResult]:
        """Store a transaction and credit the profile for it.

        The transaction is attached to the open period containing its date,
        if there is one.

        Args:
            amount: Positive amount
            transaction_type: Kind of transaction
            description: Description of the transaction
            txn_date: Transaction date, defaults to today
            category: Optional category label
            notes: Optional notes

        Returns:
            Tuple of (transaction ID, progress result)

        Raises:
            ValidationError: If amount or description are invalid
            ConflictError: If the date falls only in closed periods
        """
        if txn_date is None:
            txn_date = self.clock.today()

        candidate = Transaction(
            id=None,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
            date=txn_date,
            created_at=self.clock.now(),
        )
        errors = validate_transaction(candidate)
        if errors:
            raise ValidationError("; ".join(errors))

        period = self.db.find_open_period(txn_date)
        if period is None:
            # Any period still covering the date must be closed
            covering = [p for p in self.db.list_periods() if p.contains(txn_date)]
            if covering:
                raise ConflictError(period_closed(covering[0].id))

        transaction_id = self.db.create_transaction(
            amount=amount,
            transaction_type=transaction_type,
            description=description,
            date=txn_date,
            category=category,
            notes=notes,
            period_id=period.id if period is not None else None,
        )

        profile = self.get_profile()
        result = self.engine.record_transaction(profile)
        self.db.save_profile(profile)
        return transaction_id, result

    def contribute_to_goal(self, goal_id: int, amount: Decimal) -> tuple[Decimal, ProgressResult]:
        """Put money towards a goal.

        Returns:
            Tuple of (amount added to the goal, progress result). The amount
            is zero when the goal is not active.

        Raises:
            NotFoundError: If the goal doesn't exist
        """
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))

        before = goal.current_amount
        profile = self.get_profile()
        result = self.engine.record_goal_contribution(profile, goal, amount)
        self.db.save_goal(goal)
        self.db.save_profile(profile)
        return goal.current_amount - before, result

    def close_period(self, period_id: int) -> ProgressResult:
        """Close a period, comparing it with the last closed one.

        Raises:
            NotFoundError: If the period doesn't exist
        """
        period = self.db.get_period(period_id)
        if period is None:
            raise NotFoundError(period_not_found(period_id))

        if period.is_closed:
            return ProgressResult.empty()

        previous = self.db.find_previous_closed_period(period.start_date)
        profile = self.get_profile()
        result = self.engine.close_period(profile, period, previous)
        self.db.save_period(period)
        self.db.save_profile(profile)
        return result

    def update_best_saving_rate(self, rate: float) -> ProgressResult:
        """Report a saving rate reached outside of period closing."""
        profile = self.get_profile()
        result = self.engine.update_best_saving_rate(profile, rate)
        self.db.save_profile(profile)
        return result
