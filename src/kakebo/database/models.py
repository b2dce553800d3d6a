"""SQLAlchemy models for kakebo database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Profile(Base):
    """Gamification profile model."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    total_points = Column(Integer, default=0, nullable=False)
    current_rank = Column(String, default="novice", nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    longest_streak = Column(Integer, default=0, nullable=False)
    last_streak_date = Column(Date, nullable=True)
    completed_goals_count = Column(Integer, default=0, nullable=False)
    total_transactions_count = Column(Integer, default=0, nullable=False)
    best_saving_rate = Column(Float, default=0.0, nullable=False)
    total_savings_amount = Column(Numeric(12, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    last_activity_at = Column(DateTime, nullable=True)

    # Relationships
    achievements = relationship(
        "UnlockedAchievement", back_populates="profile", cascade="all, delete-orphan"
    )


class UnlockedAchievement(Base):
    """Unlocked achievement record."""

    __tablename__ = "unlocked_achievements"

    id = Column(Integer, primary_key=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False)
    achievement_type = Column(String, nullable=False)
    unlocked_at = Column(DateTime, nullable=False)

    # One unlock per type and profile
    __table_args__ = (
        UniqueConstraint("profile_id", "achievement_type", name="uq_profile_achievement"),
    )

    profile = relationship("Profile", back_populates="achievements")


class SavingGoal(Base):
    """Saving goal model."""

    __tablename__ = "saving_goals"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(Numeric(12, 2), default=0, nullable=False)
    start_date = Column(Date, nullable=False)
    target_date = Column(Date, nullable=False)
    status = Column(String, default="active", nullable=False)
    priority = Column(String, default="medium", nullable=False)
    reward_points = Column(Integer, default=100, nullable=False)
    icon = Column(String, default="target", nullable=False)
    color = Column(String, default="#3B82F6", nullable=False)
    completed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    sub_goals = relationship(
        "SubGoal",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="SubGoal.order",
    )


class SubGoal(Base):
    """Sub-goal (milestone) model."""

    __tablename__ = "sub_goals"

    id = Column(Integer, primary_key=True)
    goal_id = Column(Integer, ForeignKey("saving_goals.id"), nullable=False)
    name = Column(String, nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    target_date = Column(Date, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    reward_points = Column(Integer, default=25, nullable=False)
    order = Column(Integer, default=0, nullable=False)

    goal = relationship("SavingGoal", back_populates="sub_goals")


class FinancialPeriod(Base):
    """Financial period model."""

    __tablename__ = "financial_periods"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    period_type = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    saving_goal_amount = Column(Numeric(12, 2), nullable=True)
    max_expense_limit = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="period")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    transaction_type = Column(String, nullable=False)
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    category = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    period_id = Column(Integer, ForeignKey("financial_periods.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    period = relationship("FinancialPeriod", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
