"""Event interface of the progress and rewards engine.

Callers report what happened; the engine updates the aggregates in memory
and returns a ProgressResult describing points earned, rank changes and
newly unlocked achievements. Persisting the aggregates is up to the caller.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from kakebo.domain.achievements import AchievementType
from kakebo.domain.clock import Clock, SystemClock
from kakebo.domain.period import FinancialPeriod, PeriodType, compare_with_previous, score_period
from kakebo.domain.profile import GamificationProfile, ProgressResult
from kakebo.domain.saving_goal import SavingGoal, SavingGoalTracker

logger = logging.getLogger(__name__)

EARLY_BIRD_HOUR = 6
NIGHT_OWL_HOUR = 23


class GamificationEngine:
    """Routes domain events to the profile and trackers."""

    def __init__(self, clock: Optional[Clock] = None):
        """Initialize the engine.

        Args:
            clock: Source of the current time, defaults to the wall clock
        """
        self.clock = clock or SystemClock()
        self.goal_tracker = SavingGoalTracker()

    def record_transaction(
        self, profile: GamificationProfile, occurred_at: Optional[datetime] = None
    ) -> ProgressResult:
        """Report that a transaction was recorded.

        Args:
            profile: Profile to update
            occurred_at: Local time the user recorded it, defaults to now

        Returns:
            ProgressResult covering streak points and unlocks
        """
        now = self.clock.now()
        local_time = occurred_at or self.clock.local_now()
        result = profile.record_transaction(now, today=self.clock.today())

        if local_time.hour < EARLY_BIRD_HOUR:
            result.merge(profile.unlock(AchievementType.EARLY_BIRD, now))
        elif local_time.hour >= NIGHT_OWL_HOUR:
            result.merge(profile.unlock(AchievementType.NIGHT_OWL, now))
        return result

    def record_goal_contribution(
        self, profile: GamificationProfile, goal: SavingGoal, amount: Decimal
    ) -> ProgressResult:
        """Report money put towards a saving goal.

        A contribution that completes the goal is credited as a goal
        completion worth the goal's reward; any other contribution earns
        its proportional points.
        """
        now = self.clock.now()
        contribution = self.goal_tracker.contribute(goal, amount, now)
        if contribution.applied_amount <= 0 and not contribution.goal_completed:
            return ProgressResult.empty()

        if contribution.goal_completed:
            result = self.record_goal_completed(profile, contribution.points)
        else:
            result = profile.award(contribution.points)
        result.merge(profile.record_savings(contribution.applied_amount, now))
        return result

    def record_goal_completed(self, profile: GamificationProfile, points: int) -> ProgressResult:
        """Report a completed goal worth ``points``."""
        return profile.record_goal_completed(points, self.clock.now())

    def update_best_saving_rate(self, profile: GamificationProfile, rate: float) -> ProgressResult:
        """Report a saving rate (percent of income) reached by the user."""
        return profile.update_best_saving_rate(rate, self.clock.now())

    def close_period(
        self,
        profile: GamificationProfile,
        period: FinancialPeriod,
        previous: Optional[FinancialPeriod] = None,
    ) -> ProgressResult:
        """Close a period and award its performance.

        Args:
            profile: Profile to credit
            period: Period being closed; already closed periods are ignored
            previous: Period to compare savings against, if any

        Returns:
            ProgressResult with performance and improvement points
        """
        if period.is_closed:
            logger.debug("Period %s already closed, nothing to award", period.id)
            return ProgressResult.empty()

        now = self.clock.now()
        period.close()
        score = score_period(period)
        logger.info("Closed period %s '%s' scoring %d points", period.id, period.name, score.points)

        result = profile.award(score.points)
        result.merge(profile.update_best_saving_rate(score.saving_rate, now))

        if previous is not None:
            comparison = compare_with_previous(period, previous)
            if comparison.improved_savings:
                result.merge(profile.award(comparison.points))

        if (
            period.period_type == PeriodType.MONTHLY
            and period.max_expense_limit is not None
            and not period.is_over_expense_limit()
        ):
            result.merge(profile.unlock(AchievementType.MONTHLY_COMPLETE, now))

        if period.period_type == PeriodType.WEEKLY and period.covers_every_day():
            result.merge(profile.unlock(AchievementType.PERFECT_WEEK, now))
        return result
