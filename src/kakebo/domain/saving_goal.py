"""Saving goals with sub-goal milestones.

A goal owns an ordered list of sub-goals. Sub-goals have no balance of
their own: their progress is read from the parent goal's current amount,
so every parent-dependent read goes through the goal.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_FLOOR
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from kakebo.domain.errors import ValidationError, sub_goal_exceeds_parent

logger = logging.getLogger(__name__)

AT_RISK_MARGIN = 10.0
EARLY_COMPLETION_POINTS_PER_DAY = 2


class GoalStatus(str, Enum):
    """Lifecycle state of a saving goal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"
    PAUSED = "paused"
    CANCELLED = "cancelled"

    @property
    def color(self) -> str:
        return _STATUS_DISPLAY[self][0]

    @property
    def icon(self) -> str:
        return _STATUS_DISPLAY[self][1]


_STATUS_DISPLAY = {
    GoalStatus.ACTIVE: ("#3B82F6", "target"),
    GoalStatus.COMPLETED: ("#10B981", "checkmark.circle.fill"),
    GoalStatus.FAILED: ("#EF4444", "xmark.circle.fill"),
    GoalStatus.PAUSED: ("#F59E0B", "pause.circle.fill"),
    GoalStatus.CANCELLED: ("#6B7280", "slash.circle.fill"),
}


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class SubGoal:
    """Intermediate milestone of a saving goal."""

    name: str
    target_amount: Decimal
    target_date: date
    reward_points: int = 25
    order: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    id: Optional[int] = None

    def complete(self, now: datetime) -> None:
        self.is_completed = True
        self.completed_at = now

    def is_overdue(self, today: date) -> bool:
        return today > self.target_date and not self.is_completed


@dataclass
class SavingGoal:
    """Saving goal aggregate."""

    name: str
    target_amount: Decimal
    target_date: date
    start_date: date
    current_amount: Decimal = Decimal("0")
    status: GoalStatus = GoalStatus.ACTIVE
    priority: GoalPriority = GoalPriority.MEDIUM
    reward_points: int = 100
    description: Optional[str] = None
    notes: Optional[str] = None
    icon: str = "target"
    color: str = "#3B82F6"
    completed_at: Optional[datetime] = None
    sub_goals: list[SubGoal] = field(default_factory=list)
    id: Optional[int] = None

    # Sub-goals

    def add_sub_goal(self, sub_goal: SubGoal) -> SubGoal:
        """Attach a sub-goal, keeping the list ordered.

        Raises:
            ValidationError: If the sub-goal target exceeds the goal target
        """
        if sub_goal.target_amount > self.target_amount:
            raise ValidationError(
                sub_goal_exceeds_parent(sub_goal.name, sub_goal.target_amount, self.target_amount)
            )
        if sub_goal.target_amount <= 0:
            raise ValidationError(f"Sub-goal '{sub_goal.name}' target must be greater than zero")
        self.sub_goals.append(sub_goal)
        self.sub_goals.sort(key=lambda sub: (sub.order, sub.target_amount))
        return sub_goal

    def create_sub_goal(
        self,
        name: str,
        percentage: float,
        target_date: date,
        reward_points: int = 25,
    ) -> SubGoal:
        """Create a sub-goal worth ``percentage`` of the goal target."""
        amount = (self.target_amount * Decimal(str(percentage)) / Decimal("100")).quantize(
            Decimal("0.01")
        )
        return self.add_sub_goal(
            SubGoal(
                name=name,
                target_amount=amount,
                target_date=target_date,
                reward_points=reward_points,
                order=len(self.sub_goals),
            )
        )

    def sub_goal_progress(self, sub_goal: SubGoal) -> float:
        """Progress of a sub-goal measured against this goal's balance."""
        if sub_goal.target_amount <= 0:
            return 0.0
        progress = float(self.current_amount) / float(sub_goal.target_amount) * 100
        return min(progress, 100.0)

    @property
    def completed_sub_goals(self) -> list[SubGoal]:
        return [sub for sub in self.sub_goals if sub.is_completed]

    # Lifecycle

    @property
    def is_completed(self) -> bool:
        return self.status == GoalStatus.COMPLETED or self.current_amount >= self.target_amount

    def complete(self, now: datetime) -> None:
        self.status = GoalStatus.COMPLETED
        self.completed_at = now
        self.current_amount = self.target_amount

    def fail(self) -> None:
        self.status = GoalStatus.FAILED

    def pause(self) -> None:
        self.status = GoalStatus.PAUSED

    def resume(self) -> None:
        if self.status == GoalStatus.PAUSED:
            self.status = GoalStatus.ACTIVE

    def cancel(self) -> None:
        self.status = GoalStatus.CANCELLED

    # Derived metrics

    @property
    def remaining_amount(self) -> Decimal:
        return max(Decimal("0"), self.target_amount - self.current_amount)

    @property
    def progress_percent(self) -> float:
        if self.target_amount <= 0:
            return 0.0
        return min(float(self.current_amount) / float(self.target_amount) * 100, 100.0)

    @property
    def total_duration(self) -> int:
        return (self.target_date - self.start_date).days

    def days_elapsed(self, today: date) -> int:
        return (today - self.start_date).days

    def days_remaining(self, today: date) -> int:
        return max(0, (self.target_date - today).days)

    def time_elapsed_percent(self, today: date) -> float:
        if self.total_duration <= 0:
            return 0.0
        return self.days_elapsed(today) / self.total_duration * 100

    def is_at_risk(self, today: date) -> bool:
        """True when time is running out faster than money comes in."""
        if self.status != GoalStatus.ACTIVE:
            return False
        return self.time_elapsed_percent(today) > self.progress_percent + AT_RISK_MARGIN

    def is_overdue(self, today: date) -> bool:
        return today > self.target_date and not self.is_completed

    def required_daily_amount(self, today: date) -> Decimal:
        days = self.days_remaining(today)
        if days <= 0:
            return Decimal("0")
        return self.remaining_amount / Decimal(days)

    def required_weekly_amount(self, today: date) -> Decimal:
        return self.required_daily_amount(today) * 7

    def required_monthly_amount(self, today: date) -> Decimal:
        return self.required_daily_amount(today) * 30

    def current_saving_pace(self, today: date) -> Decimal:
        """Average amount saved per day since the start date."""
        days = self.days_elapsed(today)
        if days <= 0:
            return Decimal("0")
        return self.current_amount / Decimal(days)

    def projected_amount(self, today: date) -> Decimal:
        if self.total_duration <= 0:
            return self.current_amount
        return self.current_saving_pace(today) * Decimal(self.total_duration)

    def is_on_track(self, today: date) -> bool:
        return self.projected_amount(today) >= self.target_amount


def validate_goal(goal: SavingGoal) -> list[str]:
    """Return validation messages for a goal, empty when valid."""
    errors = []
    if not goal.name or not goal.name.strip():
        errors.append("Goal name cannot be empty")
    if goal.target_amount <= 0:
        errors.append("Target amount must be greater than zero")
    if goal.current_amount < 0:
        errors.append("Current amount cannot be negative")
    if goal.target_date <= goal.start_date:
        errors.append("Target date must be after the start date")
    for sub_goal in goal.sub_goals:
        if sub_goal.target_amount > goal.target_amount:
            errors.append(
                sub_goal_exceeds_parent(sub_goal.name, sub_goal.target_amount, goal.target_amount)
            )
    return errors


@dataclass
class ContributionResult:
    """Outcome of putting money into a goal."""

    points: int = 0
    applied_amount: Decimal = Decimal("0")
    goal_completed: bool = False
    completed_sub_goals: list[SubGoal] = field(default_factory=list)


class SavingGoalTracker:
    """Moves money in and out of saving goals and scores them."""

    def contribute(self, goal: SavingGoal, amount: Decimal, now: datetime) -> ContributionResult:
        """Add ``amount`` to an active goal.

        Args:
            goal: Goal receiving the money
            amount: Positive amount to add
            now: Completion timestamp if the goal gets completed

        Returns:
            ContributionResult. The goal's full reward when this
            contribution completes it, otherwise one point per 10 units
            contributed. Inactive goals and non-positive amounts yield an
            empty result.
        """
        if goal.status != GoalStatus.ACTIVE:
            logger.debug("Ignoring contribution to goal %s in status %s", goal.id, goal.status.value)
            return ContributionResult()
        if amount <= 0:
            logger.debug("Ignoring non-positive contribution %s to goal %s", amount, goal.id)
            return ContributionResult()

        previous = goal.current_amount
        goal.current_amount += amount

        if goal.current_amount >= goal.target_amount:
            goal.complete(now)
            logger.info("Goal %s '%s' completed", goal.id, goal.name)
            return ContributionResult(
                points=goal.reward_points,
                applied_amount=goal.target_amount - previous,
                goal_completed=True,
            )

        points = int((amount / Decimal("10")).to_integral_value(rounding=ROUND_FLOOR))
        completed = []
        for sub_goal in goal.sub_goals:
            if not sub_goal.is_completed and goal.current_amount >= sub_goal.target_amount:
                sub_goal.complete(now)
                completed.append(sub_goal)
                logger.info("Sub-goal '%s' of goal %s completed", sub_goal.name, goal.id)

        return ContributionResult(
            points=points,
            applied_amount=amount,
            completed_sub_goals=completed,
        )

    def withdraw(self, goal: SavingGoal, amount: Decimal) -> Decimal:
        """Take money out of a goal, never below zero.

        Completed goals keep their balance. Status is never changed.

        Returns:
            Amount actually withdrawn
        """
        if amount <= 0 or goal.status == GoalStatus.COMPLETED:
            return Decimal("0")
        withdrawn = min(amount, goal.current_amount)
        goal.current_amount = max(Decimal("0"), goal.current_amount - amount)
        return withdrawn

    def calculate_total_points(self, goal: SavingGoal) -> int:
        """Points a goal is worth, including sub-goals and early completion."""
        points = goal.reward_points if goal.is_completed else 0
        points += sum(sub.reward_points for sub in goal.completed_sub_goals)

        if goal.is_completed and goal.completed_at is not None:
            days_early = (goal.target_date - goal.completed_at.date()).days
            if days_early > 0:
                points += days_early * EARLY_COMPLETION_POINTS_PER_DAY
        return points


def emergency_fund_goal(amount: Decimal, today: date, months: int = 6) -> SavingGoal:
    """Goal covering ``months`` of expenses, with 25/50/75% milestones."""
    goal = SavingGoal(
        name="Emergency Fund",
        description=f"Cushion for the unexpected worth {months} months of expenses",
        target_amount=amount,
        start_date=today,
        target_date=today + relativedelta(months=months),
        priority=GoalPriority.CRITICAL,
        icon="shield.fill",
        color="#10B981",
        reward_points=200,
    )
    for percentage in (25, 50, 75):
        goal.create_sub_goal(
            name=f"{percentage}% of the fund",
            percentage=percentage,
            target_date=today + relativedelta(months=months * percentage // 100),
        )
    return goal


def travel_goal(destination: str, amount: Decimal, today: date, target_date: date) -> SavingGoal:
    return SavingGoal(
        name=f"Trip to {destination}",
        description=f"Holiday savings for {destination}",
        target_amount=amount,
        start_date=today,
        target_date=target_date,
        icon="airplane",
        reward_points=150,
    )
