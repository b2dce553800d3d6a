"""Tests for the SQLAlchemy database implementation and mappers."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from kakebo.database.mappers import profile_to_domain
from kakebo.database.models import (
    Profile as ORMProfile,
    UnlockedAchievement as ORMUnlockedAchievement,
)
from kakebo.domain.achievements import AchievementType
from kakebo.domain.entities import TransactionType
from kakebo.domain.errors import NotFoundError
from kakebo.domain.period import custom_period, monthly_period
from kakebo.domain.ranks import RankTier
from kakebo.domain.saving_goal import GoalStatus, SavingGoal

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def _goal(name="Car", target="5000"):
    return SavingGoal(
        name=name,
        target_amount=Decimal(target),
        start_date=date(2024, 1, 1),
        target_date=date(2024, 12, 31),
    )


class TestProfiles:
    """Tests for profile persistence."""

    def test_round_trip(self, temp_db):
        profile_id = temp_db.create_profile()
        profile = temp_db.get_profile(profile_id)
        profile.record_transaction(NOW)
        profile.add_points(200)
        temp_db.save_profile(profile)

        loaded = temp_db.get_profile(profile_id)
        assert loaded.total_points == 212
        assert loaded.current_rank == RankTier.APPRENTICE
        assert loaded.current_streak == 1
        assert loaded.last_streak_date == date(2024, 1, 1)
        unlocked = loaded.unlocked_achievements[AchievementType.FIRST_TRANSACTION]
        assert unlocked.unlocked_at == NOW
        assert unlocked.unlocked_at.tzinfo is not None

    def test_saving_twice_keeps_one_record(self, temp_db):
        profile_id = temp_db.create_profile()
        profile = temp_db.get_profile(profile_id)
        profile.unlock(AchievementType.EARLY_BIRD, NOW)
        temp_db.save_profile(profile)
        temp_db.save_profile(profile)

        assert temp_db.get_profile(profile_id).achievement_count == 1

    def test_get_profile_without_id(self, temp_db):
        assert temp_db.get_profile() is None
        profile_id = temp_db.create_profile()
        assert temp_db.get_profile().id == profile_id

    def test_save_missing_profile(self, temp_db):
        profile_id = temp_db.create_profile()
        profile = temp_db.get_profile(profile_id)
        profile.id = 99
        with pytest.raises(NotFoundError):
            temp_db.save_profile(profile)


class TestGoals:
    """Tests for goal persistence."""

    def test_goal_with_sub_goals(self, temp_db):
        goal = _goal()
        goal.create_sub_goal("Half", 50, date(2024, 7, 1))
        goal_id = temp_db.create_goal(goal)

        loaded = temp_db.get_goal(goal_id)
        assert loaded.name == "Car"
        assert loaded.target_amount == Decimal("5000")
        assert len(loaded.sub_goals) == 1
        assert loaded.sub_goals[0].id is not None
        assert loaded.sub_goals[0].target_amount == Decimal("2500")

    def test_save_updates_sub_goals_in_place(self, temp_db):
        goal = _goal()
        goal.create_sub_goal("Half", 50, date(2024, 7, 1))
        goal_id = temp_db.create_goal(goal)

        loaded = temp_db.get_goal(goal_id)
        loaded.current_amount = Decimal("3000")
        loaded.sub_goals[0].complete(NOW)
        loaded.create_sub_goal("Most", 80, date(2024, 10, 1))
        temp_db.save_goal(loaded)

        reloaded = temp_db.get_goal(goal_id)
        assert reloaded.current_amount == Decimal("3000")
        assert [sub.name for sub in reloaded.sub_goals] == ["Half", "Most"]
        assert reloaded.sub_goals[0].is_completed
        assert reloaded.sub_goals[0].completed_at == NOW

    def test_list_goals(self, temp_db):
        temp_db.create_goal(_goal("A"))
        paused = _goal("B")
        paused.pause()
        temp_db.create_goal(paused)

        assert len(temp_db.list_goals()) == 2
        assert [g.name for g in temp_db.list_goals(GoalStatus.PAUSED)] == ["B"]

    def test_save_missing_goal(self, temp_db):
        goal = _goal()
        goal.id = 5
        with pytest.raises(NotFoundError):
            temp_db.save_goal(goal)


class TestPeriods:
    """Tests for period and transaction persistence."""

    def test_find_open_period_skips_closed(self, temp_db):
        january = monthly_period(date(2024, 1, 10))
        january_id = temp_db.create_period(january)
        assert temp_db.find_open_period(date(2024, 1, 10)).id == january_id
        assert temp_db.find_open_period(date(2024, 2, 1)) is None

        january.id = january_id
        january.close()
        temp_db.save_period(january)
        assert temp_db.find_open_period(date(2024, 1, 10)) is None

    def test_find_previous_closed_period(self, temp_db):
        december = monthly_period(date(2023, 12, 5))
        december.close()
        december_id = temp_db.create_period(december)
        temp_db.create_period(monthly_period(date(2023, 11, 5)))

        previous = temp_db.find_previous_closed_period(date(2024, 1, 1))
        assert previous.id == december_id
        assert temp_db.find_previous_closed_period(date(2023, 12, 1)) is None

    def test_period_transactions(self, temp_db):
        period_id = temp_db.create_period(
            custom_period("Trip", date(2024, 3, 1), date(2024, 3, 10))
        )
        temp_db.create_transaction(
            Decimal("800"), TransactionType.EXPENSE, "Hotel", date(2024, 3, 2), period_id=period_id
        )
        temp_db.create_transaction(
            Decimal("50"), TransactionType.EXPENSE, "Taxi", date(2024, 3, 3), category="Transport"
        )

        period = temp_db.get_period(period_id)
        assert period.total_expenses == Decimal("800")

        assert len(temp_db.list_transactions()) == 2
        assert [t.description for t in temp_db.list_transactions(period_id=period_id)] == ["Hotel"]
        in_range = temp_db.list_transactions(start_date=date(2024, 3, 3), end_date=date(2024, 3, 3))
        assert [t.category for t in in_range] == ["Transport"]

    def test_save_missing_period(self, temp_db):
        period = monthly_period(date(2024, 1, 1))
        period.id = 12
        with pytest.raises(NotFoundError):
            temp_db.save_period(period)


def test_profile_mapper_restores_utc():
    """Test that naive timestamps from SQLite come back as UTC."""
    orm_profile = ORMProfile(
        id=1,
        total_points=150,
        current_rank="apprentice",
        current_streak=0,
        longest_streak=4,
        completed_goals_count=0,
        total_transactions_count=3,
        best_saving_rate=12.5,
        total_savings_amount=Decimal("0"),
        created_at=datetime(2024, 1, 1, 8, 0),
    )
    orm_profile.achievements.append(
        ORMUnlockedAchievement(achievement_type="night_owl", unlocked_at=datetime(2024, 1, 2, 23, 30))
    )

    profile = profile_to_domain(orm_profile)
    assert profile.current_rank == RankTier.APPRENTICE
    assert profile.created_at.tzinfo == UTC
    assert profile.has_achievement(AchievementType.NIGHT_OWL)
    assert profile.unlocked_achievements[AchievementType.NIGHT_OWL].unlocked_at.tzinfo == UTC
