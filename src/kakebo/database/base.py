"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import domain modules directly; the services in kakebo.domain depend on this module
from kakebo.domain.entities import Transaction, TransactionType
from kakebo.domain.period import FinancialPeriod
from kakebo.domain.profile import GamificationProfile
from kakebo.domain.saving_goal import GoalStatus, SavingGoal


class Database(ABC):
    """Abstract database interface for kakebo."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Profile operations
    @abstractmethod
    def create_profile(self) -> int:
        """Create an empty profile. Returns profile ID."""
        pass

    @abstractmethod
    def get_profile(self, profile_id: Optional[int] = None) -> Optional[GamificationProfile]:
        """Get a profile by ID, or the first profile when no ID is given."""
        pass

    @abstractmethod
    def save_profile(self, profile: GamificationProfile) -> None:
        """Persist profile counters and newly unlocked achievements."""
        pass

    # Saving goal operations
    @abstractmethod
    def create_goal(self, goal: SavingGoal) -> int:
        """Store a new goal with its sub-goals. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[SavingGoal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self, status: Optional[GoalStatus] = None) -> list[SavingGoal]:
        """List goals, optionally filtered by status."""
        pass

    @abstractmethod
    def save_goal(self, goal: SavingGoal) -> None:
        """Persist goal state and its sub-goals."""
        pass

    # Financial period operations
    @abstractmethod
    def create_period(self, period: FinancialPeriod) -> int:
        """Store a new period. Returns period ID."""
        pass

    @abstractmethod
    def get_period(self, period_id: int) -> Optional[FinancialPeriod]:
        """Get period by ID, with its transactions."""
        pass

    @abstractmethod
    def list_periods(self) -> list[FinancialPeriod]:
        """List periods ordered by start date."""
        pass

    @abstractmethod
    def find_open_period(self, day: date) -> Optional[FinancialPeriod]:
        """Get the earliest non-closed period containing ``day``."""
        pass

    @abstractmethod
    def find_previous_closed_period(self, before: date) -> Optional[FinancialPeriod]:
        """Get the latest closed period ending before ``before``."""
        pass

    @abstractmethod
    def save_period(self, period: FinancialPeriod) -> None:
        """Persist period flags and limits."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        amount: Decimal,
        transaction_type: TransactionType,
        description: str,
        date: date,
        category: Optional[str] = None,
        notes: Optional[str] = None,
        period_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        period_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters."""
        pass
