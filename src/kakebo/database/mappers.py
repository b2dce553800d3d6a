"""Mapper functions to convert between domain models and SQLAlchemy models.

Reading builds fresh domain aggregates; writing copies aggregate state onto
an existing ORM row so SQLAlchemy only issues the changed columns.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Optional

from kakebo.domain import entities as domain
from kakebo.domain.achievements import CATALOG, AchievementType, UnlockedAchievement
from kakebo.domain.period import FinancialPeriod, PeriodType
from kakebo.domain.profile import GamificationProfile
from kakebo.domain.ranks import RankTier
from kakebo.domain.saving_goal import GoalPriority, GoalStatus, SavingGoal, SubGoal
from kakebo.database.models import (
    Profile as ORMProfile,
    UnlockedAchievement as ORMUnlockedAchievement,
    SavingGoal as ORMSavingGoal,
    SubGoal as ORMSubGoal,
    FinancialPeriod as ORMFinancialPeriod,
    Transaction as ORMTransaction,
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored timestamps are UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def profile_to_domain(orm_profile: ORMProfile) -> GamificationProfile:
    """Convert SQLAlchemy Profile model to domain GamificationProfile."""
    unlocked = {}
    for record in orm_profile.achievements:
        achievement_type = AchievementType(record.achievement_type)
        unlocked[achievement_type] = UnlockedAchievement(
            definition=CATALOG[achievement_type],
            unlocked_at=_aware(record.unlocked_at),
        )
    return GamificationProfile(
        id=orm_profile.id,
        total_points=orm_profile.total_points,
        current_rank=RankTier(orm_profile.current_rank),
        current_streak=orm_profile.current_streak,
        longest_streak=orm_profile.longest_streak,
        last_streak_date=orm_profile.last_streak_date,
        completed_goals_count=orm_profile.completed_goals_count,
        total_transactions_count=orm_profile.total_transactions_count,
        best_saving_rate=orm_profile.best_saving_rate,
        total_savings_amount=Decimal(orm_profile.total_savings_amount),
        created_at=_aware(orm_profile.created_at),
        last_activity_at=_aware(orm_profile.last_activity_at),
        unlocked_achievements=unlocked,
    )


def apply_profile(orm_profile: ORMProfile, profile: GamificationProfile) -> None:
    """Copy profile state onto its ORM row, adding new achievement records."""
    orm_profile.total_points = profile.total_points
    orm_profile.current_rank = profile.current_rank.value
    orm_profile.current_streak = profile.current_streak
    orm_profile.longest_streak = profile.longest_streak
    orm_profile.last_streak_date = profile.last_streak_date
    orm_profile.completed_goals_count = profile.completed_goals_count
    orm_profile.total_transactions_count = profile.total_transactions_count
    orm_profile.best_saving_rate = profile.best_saving_rate
    orm_profile.total_savings_amount = profile.total_savings_amount
    orm_profile.last_activity_at = profile.last_activity_at

    stored = {record.achievement_type for record in orm_profile.achievements}
    for achievement_type, unlocked in profile.unlocked_achievements.items():
        if achievement_type.value not in stored:
            orm_profile.achievements.append(
                ORMUnlockedAchievement(
                    achievement_type=achievement_type.value,
                    unlocked_at=unlocked.unlocked_at,
                )
            )


def sub_goal_to_domain(orm_sub_goal: ORMSubGoal) -> SubGoal:
    """Convert SQLAlchemy SubGoal model to domain SubGoal."""
    return SubGoal(
        id=orm_sub_goal.id,
        name=orm_sub_goal.name,
        target_amount=Decimal(orm_sub_goal.target_amount),
        target_date=orm_sub_goal.target_date,
        reward_points=orm_sub_goal.reward_points,
        order=orm_sub_goal.order,
        is_completed=orm_sub_goal.is_completed,
        completed_at=_aware(orm_sub_goal.completed_at),
    )


def goal_to_domain(orm_goal: ORMSavingGoal) -> SavingGoal:
    """Convert SQLAlchemy SavingGoal model to domain SavingGoal."""
    return SavingGoal(
        id=orm_goal.id,
        name=orm_goal.name,
        description=orm_goal.description,
        notes=orm_goal.notes,
        target_amount=Decimal(orm_goal.target_amount),
        current_amount=Decimal(orm_goal.current_amount),
        start_date=orm_goal.start_date,
        target_date=orm_goal.target_date,
        status=GoalStatus(orm_goal.status),
        priority=GoalPriority(orm_goal.priority),
        reward_points=orm_goal.reward_points,
        icon=orm_goal.icon,
        color=orm_goal.color,
        completed_at=_aware(orm_goal.completed_at),
        sub_goals=[sub_goal_to_domain(sub) for sub in orm_goal.sub_goals],
    )


def apply_goal(orm_goal: ORMSavingGoal, goal: SavingGoal) -> None:
    """Copy goal state onto its ORM row, including sub-goals."""
    orm_goal.name = goal.name
    orm_goal.description = goal.description
    orm_goal.notes = goal.notes
    orm_goal.target_amount = goal.target_amount
    orm_goal.current_amount = goal.current_amount
    orm_goal.start_date = goal.start_date
    orm_goal.target_date = goal.target_date
    orm_goal.status = goal.status.value
    orm_goal.priority = goal.priority.value
    orm_goal.reward_points = goal.reward_points
    orm_goal.icon = goal.icon
    orm_goal.color = goal.color
    orm_goal.completed_at = goal.completed_at

    existing = {sub.id: sub for sub in orm_goal.sub_goals}
    for sub_goal in goal.sub_goals:
        orm_sub = existing.get(sub_goal.id) if sub_goal.id is not None else None
        if orm_sub is None:
            orm_sub = ORMSubGoal()
            orm_goal.sub_goals.append(orm_sub)
        orm_sub.name = sub_goal.name
        orm_sub.target_amount = sub_goal.target_amount
        orm_sub.target_date = sub_goal.target_date
        orm_sub.is_completed = sub_goal.is_completed
        orm_sub.completed_at = sub_goal.completed_at
        orm_sub.reward_points = sub_goal.reward_points
        orm_sub.order = sub_goal.order


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=Decimal(orm_transaction.amount),
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        description=orm_transaction.description,
        date=orm_transaction.date,
        created_at=_aware(orm_transaction.created_at),
        category=orm_transaction.category,
        notes=orm_transaction.notes,
        period_id=orm_transaction.period_id,
    )


def period_to_domain(orm_period: ORMFinancialPeriod) -> FinancialPeriod:
    """Convert SQLAlchemy FinancialPeriod model to domain FinancialPeriod."""
    return FinancialPeriod(
        id=orm_period.id,
        name=orm_period.name,
        period_type=PeriodType(orm_period.period_type),
        start_date=orm_period.start_date,
        end_date=orm_period.end_date,
        is_active=orm_period.is_active,
        is_closed=orm_period.is_closed,
        is_default=orm_period.is_default,
        saving_goal_amount=(
            Decimal(orm_period.saving_goal_amount)
            if orm_period.saving_goal_amount is not None
            else None
        ),
        max_expense_limit=(
            Decimal(orm_period.max_expense_limit)
            if orm_period.max_expense_limit is not None
            else None
        ),
        transactions=[transaction_to_domain(txn) for txn in orm_period.transactions],
    )
