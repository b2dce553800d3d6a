"""Gamification profile aggregate.

The profile owns cumulative points, rank, streak counters and unlocked
achievements. Every mutation goes through a method here so that rank is
always derived from points and each achievement is unlocked at most once.
Methods never raise for bad input: they decline it and report an empty
result.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from kakebo.domain.achievements import (
    CATALOG,
    STREAK_MILESTONES,
    AchievementDefinition,
    AchievementType,
    UnlockedAchievement,
)
from kakebo.domain.ranks import RankTier, points_to_next, progress_percent, rank_for
from kakebo.domain.streaks import StreakState, StreakTracker

logger = logging.getLogger(__name__)

SAVING_RATE_THRESHOLDS = (
    (20.0, AchievementType.SAVING_RATE_20),
    (50.0, AchievementType.SAVING_RATE_50),
)
TRANSACTION_MILESTONES = {
    1: AchievementType.FIRST_TRANSACTION,
    100: AchievementType.TRANSACTIONS_100,
}
GOAL_MILESTONES = {
    1: AchievementType.FIRST_GOAL,
    5: AchievementType.MULTIPLE_GOALS,
}
BIG_SAVER_AMOUNT = Decimal("1000")


@dataclass(frozen=True)
class RankChange:
    """Rank outcome of a point award."""

    ranked_up: bool
    new_rank: Optional[RankTier] = None


@dataclass
class ProgressResult:
    """What a reported event changed on a profile."""

    points_earned: int = 0
    ranked_up: bool = False
    new_rank: Optional[RankTier] = None
    unlocked: list[UnlockedAchievement] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ProgressResult":
        return cls()

    @property
    def changed(self) -> bool:
        return self.points_earned > 0 or bool(self.unlocked)

    def merge(self, other: "ProgressResult") -> "ProgressResult":
        """Fold another result into this one and return self."""
        self.points_earned += other.points_earned
        if other.ranked_up:
            self.ranked_up = True
            self.new_rank = other.new_rank
        self.unlocked.extend(other.unlocked)
        return self


@dataclass
class GamificationProfile:
    """Aggregate root for a user's progress."""

    id: Optional[int] = None
    total_points: int = 0
    current_rank: RankTier = RankTier.NOVICE
    current_streak: int = 0
    longest_streak: int = 0
    last_streak_date: Optional[date] = None
    completed_goals_count: int = 0
    total_transactions_count: int = 0
    best_saving_rate: float = 0.0
    total_savings_amount: Decimal = Decimal("0")
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity_at: Optional[datetime] = None
    unlocked_achievements: dict[AchievementType, UnlockedAchievement] = field(
        default_factory=dict
    )

    # Read-only derivations

    @property
    def streak_state(self) -> StreakState:
        return StreakState(
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
            last_streak_date=self.last_streak_date,
        )

    @property
    def points_to_next_rank(self) -> Optional[int]:
        return points_to_next(self.total_points, self.current_rank)

    @property
    def rank_progress_percent(self) -> float:
        return progress_percent(self.total_points, self.current_rank)

    @property
    def achievement_count(self) -> int:
        return len(self.unlocked_achievements)

    @property
    def achievement_completion_rate(self) -> float:
        """Percentage of the catalog unlocked."""
        if not CATALOG:
            return 0.0
        return self.achievement_count / len(CATALOG) * 100

    def has_achievement(self, achievement_type: AchievementType) -> bool:
        return achievement_type in self.unlocked_achievements

    def is_streak_active(self, today: date) -> bool:
        return StreakTracker().is_active(self.streak_state, today)

    def recent_achievements(self, now: datetime, days: int = 7) -> list[UnlockedAchievement]:
        """Achievements unlocked within the last ``days`` days, newest first."""
        since = now - timedelta(days=days)
        recent = [
            unlocked
            for unlocked in self.unlocked_achievements.values()
            if unlocked.unlocked_at >= since
        ]
        return sorted(recent, key=lambda unlocked: unlocked.unlocked_at, reverse=True)

    # Mutations

    def add_points(self, delta: int) -> RankChange:
        """Add points and recompute rank.

        Args:
            delta: Non-negative number of points

        Returns:
            RankChange telling whether the rank moved up
        """
        if delta < 0:
            logger.debug("Declining negative point delta %d", delta)
            return RankChange(ranked_up=False)

        previous_rank = self.current_rank
        self.total_points += delta
        self.current_rank = rank_for(self.total_points)
        if self.current_rank != previous_rank:
            logger.info(
                "Profile %s ranked up from %s to %s with %d points",
                self.id,
                previous_rank.label,
                self.current_rank.label,
                self.total_points,
            )
            return RankChange(ranked_up=True, new_rank=self.current_rank)
        return RankChange(ranked_up=False)

    def award(self, points: int) -> ProgressResult:
        """Add points and wrap the outcome in a ProgressResult."""
        if points <= 0:
            return ProgressResult.empty()
        change = self.add_points(points)
        return ProgressResult(
            points_earned=points,
            ranked_up=change.ranked_up,
            new_rank=change.new_rank,
        )

    def unlock_achievement(
        self, definition: AchievementDefinition, now: datetime
    ) -> ProgressResult:
        """Unlock an achievement once, awarding its points.

        Unlocking a type that is already unlocked changes nothing.
        """
        if definition.achievement_type in self.unlocked_achievements:
            return ProgressResult.empty()

        unlocked = UnlockedAchievement(definition=definition, unlocked_at=now)
        self.unlocked_achievements[definition.achievement_type] = unlocked
        logger.info(
            "Profile %s unlocked achievement '%s' (+%d)",
            self.id,
            definition.name,
            definition.awarded_points,
        )
        result = self.award(definition.awarded_points)
        result.unlocked.append(unlocked)
        return result

    def unlock(self, achievement_type: AchievementType, now: datetime) -> ProgressResult:
        """Unlock a catalog achievement by type."""
        return self.unlock_achievement(CATALOG[achievement_type], now)

    def record_daily_activity(self, today: date, now: Optional[datetime] = None) -> ProgressResult:
        """Credit activity on ``today`` to the streak.

        Args:
            today: Calendar day of the activity
            now: Timestamp for any achievement unlocked; defaults to
                midnight UTC of ``today``

        Returns:
            ProgressResult with streak points and streak milestone unlocks
        """
        update = StreakTracker().advance(self.streak_state, today)
        if not update.counted:
            return ProgressResult.empty()

        self.current_streak = update.state.current_streak
        self.longest_streak = update.state.longest_streak
        self.last_streak_date = update.state.last_streak_date
        if now is None:
            now = datetime(today.year, today.month, today.day, tzinfo=UTC)
        self.last_activity_at = now

        result = self.award(update.points)
        if update.milestone is not None:
            result.merge(self.unlock(STREAK_MILESTONES[update.milestone], now))
        return result

    def record_transaction(self, now: datetime, today: Optional[date] = None) -> ProgressResult:
        """Count a recorded transaction, crediting the streak for the day."""
        if today is None:
            today = now.date()
        self.total_transactions_count += 1
        self.last_activity_at = now

        result = self.record_daily_activity(today, now)
        milestone = TRANSACTION_MILESTONES.get(self.total_transactions_count)
        if milestone is not None:
            result.merge(self.unlock(milestone, now))
        return result

    def record_goal_completed(self, points: int, now: datetime) -> ProgressResult:
        """Count a completed goal and award its points."""
        if points < 0:
            logger.debug("Declining goal completion with negative points %d", points)
            return ProgressResult.empty()
        self.completed_goals_count += 1
        self.last_activity_at = now

        result = self.award(points)
        milestone = GOAL_MILESTONES.get(self.completed_goals_count)
        if milestone is not None:
            result.merge(self.unlock(milestone, now))
        return result

    def record_savings(self, amount: Decimal, now: datetime) -> ProgressResult:
        """Add money put towards goals to the lifetime savings total."""
        if amount <= 0:
            return ProgressResult.empty()
        self.total_savings_amount += amount

        result = self.unlock(AchievementType.FIRST_SAVING, now)
        if self.total_savings_amount >= BIG_SAVER_AMOUNT:
            result.merge(self.unlock(AchievementType.BIG_SAVER, now))
        return result

    def update_best_saving_rate(self, rate: float, now: datetime) -> ProgressResult:
        """Raise the saving-rate high-water mark.

        Each threshold is checked on every improvement, so a rate that
        jumps straight past 50% unlocks both saving-rate achievements.
        """
        if rate <= self.best_saving_rate:
            return ProgressResult.empty()
        self.best_saving_rate = rate

        result = ProgressResult.empty()
        for threshold, achievement_type in SAVING_RATE_THRESHOLDS:
            if self.best_saving_rate >= threshold:
                result.merge(self.unlock(achievement_type, now))
        return result
