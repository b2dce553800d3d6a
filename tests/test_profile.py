"""Tests for the gamification profile aggregate."""

from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

import pytest

from kakebo.domain.achievements import AchievementType
from kakebo.domain.profile import GamificationProfile, ProgressResult
from kakebo.domain.ranks import RankTier

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def profile():
    return GamificationProfile(id=1, created_at=NOW)


class TestPoints:
    """Tests for point and rank bookkeeping."""

    def test_new_profile(self, profile):
        """Test the starting state."""
        assert profile.total_points == 0
        assert profile.current_rank == RankTier.NOVICE
        assert profile.points_to_next_rank == 100
        assert profile.achievement_count == 0

    def test_add_points_ranks_up(self, profile):
        """Test that crossing a threshold reports the new rank."""
        change = profile.add_points(99)
        assert not change.ranked_up

        change = profile.add_points(1)
        assert change.ranked_up
        assert change.new_rank == RankTier.APPRENTICE
        assert profile.current_rank == RankTier.APPRENTICE

    def test_negative_points_declined(self, profile):
        """Test that points never go down."""
        profile.add_points(50)
        change = profile.add_points(-20)
        assert not change.ranked_up
        assert profile.total_points == 50

    def test_award_zero_is_empty(self, profile):
        """Test that awarding nothing reports nothing."""
        result = profile.award(0)
        assert not result.changed
        assert profile.total_points == 0

    def test_rank_follows_points_across_events(self, profile):
        """Test that rank always matches the point total."""
        for day in range(10):
            profile.record_transaction(NOW + timedelta(days=day))
            profile.update_best_saving_rate(float(day * 6), NOW)
            assert profile.current_rank.minimum_points <= profile.total_points


class TestAchievements:
    """Tests for achievement unlocking."""

    def test_unlock_is_idempotent(self, profile):
        """Test that an achievement is unlocked and paid only once."""
        first = profile.unlock(AchievementType.EARLY_BIRD, NOW)
        assert first.points_earned == 60
        assert [u.achievement_type for u in first.unlocked] == [AchievementType.EARLY_BIRD]

        second = profile.unlock(AchievementType.EARLY_BIRD, NOW + timedelta(days=1))
        assert second == ProgressResult.empty()
        assert profile.total_points == 60
        assert profile.unlocked_achievements[AchievementType.EARLY_BIRD].unlocked_at == NOW

    def test_first_transaction(self, profile):
        """Test the first transaction unlocks its achievement."""
        result = profile.record_transaction(NOW)
        assert result.points_earned == 2 + 10
        assert profile.total_transactions_count == 1
        assert profile.has_achievement(AchievementType.FIRST_TRANSACTION)

        result = profile.record_transaction(NOW)
        assert result.points_earned == 0
        assert profile.total_transactions_count == 2

    def test_hundredth_transaction(self, profile):
        """Test the transaction count milestone."""
        profile.total_transactions_count = 99
        profile.record_transaction(NOW)
        assert profile.has_achievement(AchievementType.TRANSACTIONS_100)
        assert not profile.has_achievement(AchievementType.FIRST_TRANSACTION)

    def test_seven_day_streak(self, profile):
        """Test a week of daily activity."""
        total_unlocks = []
        for offset in range(7):
            result = profile.record_daily_activity(date(2024, 1, 1) + timedelta(days=offset))
            total_unlocks.extend(result.unlocked)

        assert profile.current_streak == 7
        assert profile.longest_streak == 7
        assert [u.achievement_type for u in total_unlocks] == [AchievementType.STREAK_7]
        # 2+4+6+8+10+12+35 streak points plus 28 for the achievement
        assert profile.total_points == 77 + 28

    def test_streak_achievement_not_unlocked_twice(self, profile):
        """Test that reaching 7 days again after a reset pays nothing extra."""
        for offset in range(7):
            profile.record_daily_activity(date(2024, 1, 1) + timedelta(days=offset))
        for offset in range(7):
            result = profile.record_daily_activity(date(2024, 2, 1) + timedelta(days=offset))
        assert result.unlocked == []
        assert profile.achievement_count == 1

    def test_saving_rate_checks_every_threshold(self, profile):
        """Test that jumping past 50% unlocks both saving-rate achievements."""
        result = profile.update_best_saving_rate(55.0, NOW)
        unlocked = {u.achievement_type for u in result.unlocked}
        assert unlocked == {AchievementType.SAVING_RATE_20, AchievementType.SAVING_RATE_50}
        assert result.points_earned == 450 + 5000
        assert result.ranked_up
        assert profile.best_saving_rate == 55.0

    def test_saving_rate_is_high_water_mark(self, profile):
        """Test that a lower rate changes nothing."""
        profile.update_best_saving_rate(25.0, NOW)
        result = profile.update_best_saving_rate(15.0, NOW)
        assert not result.changed
        assert profile.best_saving_rate == 25.0

    def test_savings_achievements(self, profile):
        """Test first saving and big saver."""
        result = profile.record_savings(Decimal("500"), NOW)
        assert [u.achievement_type for u in result.unlocked] == [AchievementType.FIRST_SAVING]

        result = profile.record_savings(Decimal("600"), NOW)
        assert [u.achievement_type for u in result.unlocked] == [AchievementType.BIG_SAVER]
        assert profile.total_savings_amount == Decimal("1100")

    def test_goal_completion_milestones(self, profile):
        """Test first goal and five goals."""
        unlocked = []
        for _ in range(5):
            unlocked.extend(profile.record_goal_completed(100, NOW).unlocked)
        assert [u.achievement_type for u in unlocked] == [
            AchievementType.FIRST_GOAL,
            AchievementType.MULTIPLE_GOALS,
        ]
        assert profile.completed_goals_count == 5

    def test_negative_goal_points_declined(self, profile):
        """Test that a completion with negative points is ignored."""
        result = profile.record_goal_completed(-5, NOW)
        assert not result.changed
        assert profile.completed_goals_count == 0

    def test_recent_achievements_newest_first(self, profile):
        """Test listing recent unlocks."""
        profile.unlock(AchievementType.FIRST_TRANSACTION, NOW - timedelta(days=10))
        profile.unlock(AchievementType.EARLY_BIRD, NOW - timedelta(days=2))
        profile.unlock(AchievementType.NIGHT_OWL, NOW - timedelta(days=1))

        recent = profile.recent_achievements(NOW)
        assert [u.achievement_type for u in recent] == [
            AchievementType.NIGHT_OWL,
            AchievementType.EARLY_BIRD,
        ]

    def test_completion_rate(self, profile):
        """Test the share of the catalog unlocked."""
        profile.unlock(AchievementType.FIRST_TRANSACTION, NOW)
        profile.unlock(AchievementType.FIRST_SAVING, NOW)
        profile.unlock(AchievementType.FIRST_GOAL, NOW)
        assert profile.achievement_completion_rate == pytest.approx(20.0)
