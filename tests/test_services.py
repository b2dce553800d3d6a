"""Tests for the domain services against a real database."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from kakebo.domain.achievements import AchievementType
from kakebo.domain.entities import TransactionType
from kakebo.domain.errors import ConflictError, NotFoundError, ValidationError
from kakebo.domain.period import PeriodType
from kakebo.domain.ranks import RankTier
from kakebo.domain.saving_goal import GoalStatus


class TestProgressService:
    """Tests for ProgressService."""

    def test_profile_created_on_first_use(self, progress_service):
        profile = progress_service.get_profile()
        assert profile.id is not None
        assert profile.total_points == 0
        assert progress_service.get_profile().id == profile.id

    def test_record_transaction_persists_progress(self, progress_service, temp_db):
        transaction_id, result = progress_service.record_transaction(
            amount=Decimal("12.50"),
            transaction_type=TransactionType.EXPENSE,
            description="Lunch",
        )
        assert result.points_earned == 12

        transaction = temp_db.get_transaction(transaction_id)
        assert transaction.amount == Decimal("12.50")
        assert transaction.date == date(2024, 1, 1)
        assert transaction.period_id is None

        profile = progress_service.get_profile()
        assert profile.total_points == 12
        assert profile.total_transactions_count == 1
        assert profile.has_achievement(AchievementType.FIRST_TRANSACTION)

    def test_streak_over_days(self, progress_service, clock):
        for _ in range(7):
            progress_service.record_transaction(
                Decimal("5"), TransactionType.EXPENSE, "Coffee"
            )
            clock.advance(days=1)

        profile = progress_service.get_profile()
        assert profile.current_streak == 7
        assert profile.has_achievement(AchievementType.STREAK_7)
        # streak points, first transaction, 7-day streak
        assert profile.total_points == 77 + 10 + 28
        assert profile.current_rank == RankTier.APPRENTICE

    def test_invalid_transaction(self, progress_service):
        with pytest.raises(ValidationError, match="Description"):
            progress_service.record_transaction(Decimal("5"), TransactionType.EXPENSE, "  ")

    def test_transaction_attached_to_open_period(
        self, progress_service, period_service, temp_db
    ):
        period_id = period_service.create_period(PeriodType.MONTHLY)
        transaction_id, _ = progress_service.record_transaction(
            Decimal("1000"), TransactionType.INCOME, "Salary"
        )
        assert temp_db.get_transaction(transaction_id).period_id == period_id
        assert period_service.require_period(period_id).total_income == Decimal("1000")

    def test_closed_period_rejects_transactions(self, progress_service, period_service):
        period_id = period_service.create_period(PeriodType.MONTHLY)
        progress_service.close_period(period_id)

        with pytest.raises(ConflictError, match="closed"):
            progress_service.record_transaction(
                Decimal("10"), TransactionType.EXPENSE, "Late expense"
            )

    def test_close_period_awards_points(self, progress_service, period_service):
        period_id = period_service.create_period(
            PeriodType.MONTHLY, max_expense_limit=Decimal("700")
        )
        for amount, transaction_type in (
            ("1000", TransactionType.INCOME),
            ("600", TransactionType.EXPENSE),
            ("250", TransactionType.SAVING),
        ):
            progress_service.record_transaction(Decimal(amount), transaction_type, "entry")
        before = progress_service.get_profile().total_points

        result = progress_service.close_period(period_id)
        assert result.points_earned == 85 + 450 + 1000

        profile = progress_service.get_profile()
        assert profile.total_points == before + result.points_earned
        assert profile.best_saving_rate == pytest.approx(25.0)
        assert period_service.require_period(period_id).is_closed

        assert not progress_service.close_period(period_id).changed

    def test_close_period_compares_with_previous(self, progress_service, period_service, clock):
        december = period_service.create_period(PeriodType.MONTHLY, start_date=date(2023, 12, 1))
        clock.set(clock.now().replace(year=2023, month=12, day=15))
        progress_service.record_transaction(Decimal("1000"), TransactionType.INCOME, "Salary")
        progress_service.record_transaction(Decimal("100"), TransactionType.SAVING, "Save")
        progress_service.close_period(december)

        january = period_service.create_period(PeriodType.MONTHLY, start_date=date(2024, 1, 1))
        clock.set(clock.now().replace(year=2024, month=1, day=15))
        progress_service.record_transaction(Decimal("1000"), TransactionType.INCOME, "Salary")
        progress_service.record_transaction(Decimal("160"), TransactionType.SAVING, "Save")

        result = progress_service.close_period(january)
        # base, 15 for a 16% rate, positive balance, 100 for 60% more savings
        assert result.points_earned == 10 + 15 + 20 + 100

    def test_close_missing_period(self, progress_service):
        with pytest.raises(NotFoundError):
            progress_service.close_period(999)

    def test_contribute_to_goal(self, progress_service, goal_service):
        goal_id = goal_service.create_goal(
            "Bike", Decimal("1000"), date(2024, 6, 1), milestones=[25, 50]
        )
        applied, result = progress_service.contribute_to_goal(goal_id, Decimal("300"))
        assert applied == Decimal("300")
        assert result.points_earned == 30 + 15

        goal = goal_service.require_goal(goal_id)
        assert goal.current_amount == Decimal("300")
        assert [sub.is_completed for sub in goal.sub_goals] == [True, False]

        applied, _ = progress_service.contribute_to_goal(goal_id, Decimal("800"))
        assert applied == Decimal("700")
        goal = goal_service.require_goal(goal_id)
        assert goal.status == GoalStatus.COMPLETED
        assert goal.current_amount == Decimal("1000")

        profile = progress_service.get_profile()
        assert profile.completed_goals_count == 1
        assert profile.total_savings_amount == Decimal("1000")
        assert profile.has_achievement(AchievementType.BIG_SAVER)

    def test_contribution_without_points_is_still_applied(self, progress_service, goal_service):
        goal_id = goal_service.create_goal("Bike", Decimal("800"), date(2024, 6, 1))
        progress_service.contribute_to_goal(goal_id, Decimal("50"))

        applied, result = progress_service.contribute_to_goal(goal_id, Decimal("5"))
        assert applied == Decimal("5")
        assert not result.changed
        assert goal_service.require_goal(goal_id).current_amount == Decimal("55")

    def test_contribution_to_paused_goal_is_not_applied(self, progress_service, goal_service):
        goal_id = goal_service.create_goal("Bike", Decimal("800"), date(2024, 6, 1))
        goal_service.pause(goal_id)

        applied, _ = progress_service.contribute_to_goal(goal_id, Decimal("50"))
        assert applied == Decimal("0")
        assert goal_service.require_goal(goal_id).current_amount == Decimal("0")

    def test_contribute_to_missing_goal(self, progress_service):
        with pytest.raises(NotFoundError):
            progress_service.contribute_to_goal(42, Decimal("10"))

    def test_update_best_saving_rate(self, progress_service):
        result = progress_service.update_best_saving_rate(22.0)
        assert [u.achievement_type for u in result.unlocked] == [AchievementType.SAVING_RATE_20]
        assert progress_service.get_profile().best_saving_rate == 22.0


class TestGoalService:
    """Tests for GoalService."""

    def test_create_goal_with_milestones(self, goal_service):
        goal_id = goal_service.create_goal(
            "Emergency Fund", Decimal("3000"), date(2024, 4, 10), milestones=[75, 25, 50]
        )
        goal = goal_service.require_goal(goal_id)

        assert goal.start_date == date(2024, 1, 1)
        assert [sub.name for sub in goal.sub_goals] == [
            "25% of Emergency Fund",
            "50% of Emergency Fund",
            "75% of Emergency Fund",
        ]
        assert [sub.target_amount for sub in goal.sub_goals] == [
            Decimal("750"),
            Decimal("1500"),
            Decimal("2250"),
        ]
        assert goal.sub_goals[1].target_date == date(2024, 1, 1) + timedelta(days=50)

    def test_invalid_goal(self, goal_service):
        with pytest.raises(ValidationError, match="Target date"):
            goal_service.create_goal("Late", Decimal("100"), date(2023, 12, 1))

    def test_invalid_milestone(self, goal_service):
        with pytest.raises(ValidationError, match="Milestone"):
            goal_service.create_goal("Bike", Decimal("100"), date(2024, 6, 1), milestones=[150])

    def test_full_target_milestone_rejected(self, goal_service):
        with pytest.raises(ValidationError, match="below 100"):
            goal_service.create_goal("Bike", Decimal("100"), date(2024, 6, 1), milestones=[50, 100])
        assert goal_service.list_goals() == []

    def test_list_goals_by_status(self, goal_service):
        first = goal_service.create_goal("A", Decimal("100"), date(2024, 6, 1))
        goal_service.create_goal("B", Decimal("100"), date(2024, 7, 1))
        goal_service.pause(first)

        assert [g.name for g in goal_service.list_goals()] == ["A", "B"]
        assert [g.name for g in goal_service.list_goals(GoalStatus.PAUSED)] == ["A"]
        assert [g.name for g in goal_service.list_goals(GoalStatus.ACTIVE)] == ["B"]

    def test_status_transitions(self, goal_service):
        goal_id = goal_service.create_goal("A", Decimal("100"), date(2024, 6, 1))
        assert goal_service.pause(goal_id).status == GoalStatus.PAUSED
        assert goal_service.resume(goal_id).status == GoalStatus.ACTIVE
        assert goal_service.fail(goal_id).status == GoalStatus.FAILED
        assert goal_service.cancel(goal_id).status == GoalStatus.CANCELLED

    def test_completed_goal_cannot_change_status(self, goal_service, progress_service):
        goal_id = goal_service.create_goal("A", Decimal("100"), date(2024, 6, 1))
        progress_service.contribute_to_goal(goal_id, Decimal("100"))
        with pytest.raises(ValidationError, match="already completed"):
            goal_service.cancel(goal_id)

    def test_withdraw(self, goal_service, progress_service):
        goal_id = goal_service.create_goal("A", Decimal("1000"), date(2024, 6, 1))
        progress_service.contribute_to_goal(goal_id, Decimal("200"))
        assert goal_service.withdraw(goal_id, Decimal("300")) == Decimal("200")
        assert goal_service.require_goal(goal_id).current_amount == Decimal("0")

    def test_missing_goal(self, goal_service):
        assert goal_service.get_goal(7) is None
        with pytest.raises(NotFoundError):
            goal_service.require_goal(7)

    def test_total_points(self, goal_service, progress_service, clock):
        goal_id = goal_service.create_goal(
            "A", Decimal("1000"), date(2024, 1, 31), milestones=[50]
        )
        progress_service.contribute_to_goal(goal_id, Decimal("600"))
        clock.advance(days=9)
        progress_service.contribute_to_goal(goal_id, Decimal("400"))
        # reward, one sub-goal, 21 days early
        assert goal_service.total_points(goal_id) == 100 + 25 + 42


class TestPeriodService:
    """Tests for PeriodService."""

    def test_create_monthly(self, period_service):
        period_id = period_service.create_period(
            PeriodType.MONTHLY, saving_goal_amount=Decimal("300")
        )
        period = period_service.require_period(period_id)
        assert period.start_date == date(2024, 1, 1)
        assert period.end_date == date(2024, 1, 31)
        assert period.saving_goal_amount == Decimal("300")
        assert period.is_default

    def test_create_custom_needs_dates(self, period_service):
        with pytest.raises(ValidationError):
            period_service.create_period(PeriodType.CUSTOM, name="Summer")

    def test_create_custom(self, period_service):
        period_id = period_service.create_period(
            PeriodType.CUSTOM,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 8, 31),
            name="Summer",
        )
        assert period_service.require_period(period_id).name == "Summer"

    def test_current_period(self, period_service):
        assert period_service.current_period() is None
        period_id = period_service.create_period(PeriodType.WEEKLY)
        assert period_service.current_period().id == period_id

    def test_score_without_closing(self, period_service, progress_service):
        period_id = period_service.create_period(PeriodType.MONTHLY)
        progress_service.record_transaction(Decimal("100"), TransactionType.INCOME, "Gift")
        score = period_service.score(period_id)
        assert score.points == 10 + 20
        assert not period_service.require_period(period_id).is_closed

    def test_missing_period(self, period_service):
        assert period_service.get_period(3) is None
        with pytest.raises(NotFoundError):
            period_service.score(3)
