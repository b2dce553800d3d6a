"""Saving goal domain service."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from kakebo.database.base import Database
from kakebo.domain.clock import Clock, SystemClock
from kakebo.domain.errors import NotFoundError, ValidationError, goal_not_found
from kakebo.domain.saving_goal import (
    GoalPriority,
    GoalStatus,
    SavingGoal,
    SavingGoalTracker,
    validate_goal,
)

logger = logging.getLogger(__name__)


class GoalService:
    """Service for managing saving goals."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize goal service.

        Args:
            db: Database instance
            clock: Source of the current time, defaults to the wall clock
        """
        self.db = db
        self.clock = clock or SystemClock()
        self.tracker = SavingGoalTracker()

    def create_goal(
        self,
        name: str,
        target_amount: Decimal,
        target_date: date,
        start_date: Optional[date] = None,
        reward_points: int = 100,
        priority: GoalPriority = GoalPriority.MEDIUM,
        description: Optional[str] = None,
        milestones: Sequence[float] = (),
    ) -> int:
        """Create a goal, optionally with percentage milestones.

        Milestone target dates are spread over the goal's duration in
        proportion to their percentage.

        Args:
            name: Goal name
            target_amount: Amount to save
            target_date: Date the goal should be reached by
            start_date: Start date, defaults to today
            reward_points: Points awarded on completion
            priority: Goal priority
            description: Optional description
            milestones: Percentages strictly between 0 and 100, e.g. (25, 50, 75)

        Returns:
            Goal ID

        Raises:
            ValidationError: If goal fields or milestones are invalid
        """
        if start_date is None:
            start_date = self.clock.today()

        goal = SavingGoal(
            name=name,
            target_amount=target_amount,
            target_date=target_date,
            start_date=start_date,
            reward_points=reward_points,
            priority=priority,
            description=description,
        )
        errors = validate_goal(goal)
        if errors:
            raise ValidationError("; ".join(errors))

        duration = goal.total_duration
        for percentage in sorted(milestones):
            if not 0 < percentage < 100:
                raise ValidationError(f"Milestone {percentage}% must be above 0 and below 100")
            offset = int(duration * percentage / 100)
            goal.create_sub_goal(
                name=f"{percentage:g}% of {name}",
                percentage=percentage,
                target_date=start_date + timedelta(days=offset),
            )

        goal_id = self.db.create_goal(goal)
        logger.info("Created goal %s '%s' with %d milestones", goal_id, name, len(goal.sub_goals))
        return goal_id

    def get_goal(self, goal_id: int) -> Optional[SavingGoal]:
        """Get goal by ID.

        Args:
            goal_id: Goal ID

        Returns:
            Goal or None if not found
        """
        return self.db.get_goal(goal_id)

    def require_goal(self, goal_id: int) -> SavingGoal:
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_goals(self, status: Optional[GoalStatus] = None) -> list[SavingGoal]:
        """List goals, optionally filtered by status."""
        return self.db.list_goals(status=status)

    def withdraw(self, goal_id: int, amount: Decimal) -> Decimal:
        """Take money out of a goal.

        Returns:
            Amount actually withdrawn
        """
        goal = self.require_goal(goal_id)
        withdrawn = self.tracker.withdraw(goal, amount)
        if withdrawn > 0:
            self.db.save_goal(goal)
        return withdrawn

    def pause(self, goal_id: int) -> SavingGoal:
        return self._transition(goal_id, SavingGoal.pause)

    def resume(self, goal_id: int) -> SavingGoal:
        return self._transition(goal_id, SavingGoal.resume)

    def cancel(self, goal_id: int) -> SavingGoal:
        return self._transition(goal_id, SavingGoal.cancel)

    def fail(self, goal_id: int) -> SavingGoal:
        return self._transition(goal_id, SavingGoal.fail)

    def _transition(self, goal_id: int, action) -> SavingGoal:
        goal = self.require_goal(goal_id)
        if goal.status == GoalStatus.COMPLETED:
            raise ValidationError(f"Goal {goal_id} is already completed")
        action(goal)
        self.db.save_goal(goal)
        return goal

    def total_points(self, goal_id: int) -> int:
        """Points the goal is worth so far."""
        return self.tracker.calculate_total_points(self.require_goal(goal_id))
