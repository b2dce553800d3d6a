"""Financial periods and their performance scoring."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from kakebo.domain.entities import Transaction, TransactionType

logger = logging.getLogger(__name__)

BASE_POINTS = 10
SAVING_GOAL_POINTS = 50
# (minimum saving rate %, points), highest first; only the first match applies
SAVING_RATE_TIERS = ((20.0, 30), (10.0, 15), (5.0, 5))
EXPENSE_LIMIT_POINTS = 25
POSITIVE_BALANCE_POINTS = 20
EXCELLENT_RATE = 30.0
EXCELLENT_RATE_POINTS = 50
# (minimum improvement %, points), highest first
IMPROVEMENT_TIERS = ((50.0, 100), (25.0, 50), (10.0, 25))
MINIMUM_IMPROVEMENT_POINTS = 10


class PeriodType(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @property
    def duration_in_days(self) -> int:
        """Nominal length; 0 for custom periods."""
        return {
            PeriodType.WEEKLY: 7,
            PeriodType.BIWEEKLY: 14,
            PeriodType.MONTHLY: 30,
            PeriodType.CUSTOM: 0,
        }[self]


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregate totals of a set of transactions."""

    total_income: Decimal
    total_expenses: Decimal
    total_savings: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses - self.total_savings

    @property
    def available_balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def saving_rate(self) -> float:
        """Savings as a percentage of income, 0 without income."""
        if self.total_income <= 0:
            return 0.0
        return float(self.total_savings) / float(self.total_income) * 100

    @property
    def expense_rate(self) -> float:
        if self.total_income <= 0:
            return 0.0
        return float(self.total_expenses) / float(self.total_income) * 100


def summarize(transactions: Iterable[Transaction]) -> PeriodSummary:
    """Sum transaction amounts by type; transfers are left out."""
    totals: dict[TransactionType, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        totals[txn.transaction_type] += txn.amount
    return PeriodSummary(
        total_income=totals[TransactionType.INCOME],
        total_expenses=totals[TransactionType.EXPENSE],
        total_savings=totals[TransactionType.SAVING],
    )


@dataclass
class FinancialPeriod:
    """Date range over which money movements are aggregated."""

    name: str
    period_type: PeriodType
    start_date: date
    end_date: date
    is_active: bool = True
    is_closed: bool = False
    is_default: bool = False
    saving_goal_amount: Optional[Decimal] = None
    max_expense_limit: Optional[Decimal] = None
    transactions: list[Transaction] = field(default_factory=list)
    id: Optional[int] = None

    @property
    def summary(self) -> PeriodSummary:
        return summarize(self.transactions)

    @property
    def total_income(self) -> Decimal:
        return self.summary.total_income

    @property
    def total_expenses(self) -> Decimal:
        return self.summary.total_expenses

    @property
    def total_savings(self) -> Decimal:
        return self.summary.total_savings

    @property
    def balance(self) -> Decimal:
        return self.summary.balance

    @property
    def saving_rate(self) -> float:
        return self.summary.saving_rate

    @property
    def duration(self) -> int:
        return (self.end_date - self.start_date).days

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def days_elapsed(self, today: date) -> int:
        return max(0, min((today - self.start_date).days, self.duration))

    def days_remaining(self, today: date) -> int:
        return max(0, self.duration - self.days_elapsed(today))

    def time_elapsed_percent(self, today: date) -> float:
        if self.duration <= 0:
            return 0.0
        return self.days_elapsed(today) / self.duration * 100

    def is_current(self, today: date) -> bool:
        return self.contains(today)

    def has_ended(self, today: date) -> bool:
        return today > self.end_date

    def average_daily_expense(self, today: date) -> Decimal:
        days = self.days_elapsed(today)
        if days <= 0:
            return Decimal("0")
        return self.total_expenses / Decimal(days)

    def projected_total_expense(self, today: date) -> Decimal:
        if self.days_elapsed(today) <= 0 or self.duration <= 0:
            return Decimal("0")
        return self.average_daily_expense(today) * Decimal(self.duration)

    def is_saving_goal_met(self) -> bool:
        if self.saving_goal_amount is None:
            return False
        return self.total_savings >= self.saving_goal_amount

    def is_over_expense_limit(self) -> bool:
        if self.max_expense_limit is None:
            return False
        return self.total_expenses > self.max_expense_limit

    def covers_every_day(self) -> bool:
        """True when every day of the period has at least one transaction."""
        if self.end_date < self.start_date:
            return False
        active_days = {txn.date for txn in self.transactions}
        day = self.start_date
        while day <= self.end_date:
            if day not in active_days:
                return False
            day += timedelta(days=1)
        return True

    def close(self) -> None:
        self.is_closed = True
        self.is_active = False


def validate_period(period: FinancialPeriod) -> list[str]:
    """Return validation messages for a period, empty when valid."""
    errors = []
    if not period.name or not period.name.strip():
        errors.append("Period name cannot be empty")
    if period.end_date <= period.start_date:
        errors.append("End date must be after the start date")
    if period.saving_goal_amount is not None and period.saving_goal_amount < 0:
        errors.append("Saving goal cannot be negative")
    if period.max_expense_limit is not None and period.max_expense_limit < 0:
        errors.append("Expense limit cannot be negative")
    return errors


@dataclass(frozen=True)
class PeriodScore:
    """Performance points of a period with the bonuses that made them."""

    summary: PeriodSummary
    points: int
    breakdown: tuple[tuple[str, int], ...] = ()

    @property
    def saving_rate(self) -> float:
        return self.summary.saving_rate


@dataclass(frozen=True)
class PeriodComparison:
    """Savings improvement of one period over the previous one."""

    improved_savings: bool
    points: int
    improvement_percent: Optional[float] = None


def score_period(period: FinancialPeriod) -> PeriodScore:
    """Compute the performance points of a period.

    All applicable bonuses stack, except the saving-rate tiers of which
    only the highest matching one counts.
    """
    summary = period.summary
    rate = summary.saving_rate
    breakdown: list[tuple[str, int]] = [("base", BASE_POINTS)]

    if period.saving_goal_amount is not None and summary.total_savings >= period.saving_goal_amount:
        breakdown.append(("saving_goal", SAVING_GOAL_POINTS))

    for minimum, points in SAVING_RATE_TIERS:
        if rate >= minimum:
            breakdown.append((f"saving_rate_{int(minimum)}", points))
            break

    if period.max_expense_limit is not None and summary.total_expenses <= period.max_expense_limit:
        breakdown.append(("expense_limit", EXPENSE_LIMIT_POINTS))

    if summary.balance > 0:
        breakdown.append(("positive_balance", POSITIVE_BALANCE_POINTS))

    if rate >= EXCELLENT_RATE:
        breakdown.append(("excellent_saving_rate", EXCELLENT_RATE_POINTS))

    return PeriodScore(
        summary=summary,
        points=sum(points for _, points in breakdown),
        breakdown=tuple(breakdown),
    )


def compare_with_previous(current: FinancialPeriod, previous: FinancialPeriod) -> PeriodComparison:
    """Reward a savings improvement over the previous period.

    A previous period without savings gives no basis for a percentage, so
    it never counts as an improvement.
    """
    current_savings = current.total_savings
    previous_savings = previous.total_savings
    if current_savings <= previous_savings or previous_savings <= 0:
        return PeriodComparison(improved_savings=False, points=0)

    improvement = float((current_savings - previous_savings) / previous_savings * 100)
    points = MINIMUM_IMPROVEMENT_POINTS
    for minimum, tier_points in IMPROVEMENT_TIERS:
        if improvement >= minimum:
            points = tier_points
            break
    return PeriodComparison(
        improved_savings=True,
        points=points,
        improvement_percent=improvement,
    )


class FinancialPeriodScorer:
    """Thin object wrapper over the scoring functions."""

    def score(self, period: FinancialPeriod) -> PeriodScore:
        return score_period(period)

    def compare_with_previous(
        self, current: FinancialPeriod, previous: FinancialPeriod
    ) -> PeriodComparison:
        return compare_with_previous(current, previous)


def monthly_period(today: date, name: Optional[str] = None) -> FinancialPeriod:
    """Calendar month containing ``today``."""
    start = today.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return FinancialPeriod(
        name=name or f"Month {start.strftime('%Y-%m')}",
        period_type=PeriodType.MONTHLY,
        start_date=start,
        end_date=end,
        is_default=True,
    )


def weekly_period(today: date, name: Optional[str] = None) -> FinancialPeriod:
    """Monday-to-Sunday week containing ``today``."""
    start = today - timedelta(days=today.weekday())
    return FinancialPeriod(
        name=name or f"Week {today.isocalendar()[1]}",
        period_type=PeriodType.WEEKLY,
        start_date=start,
        end_date=start + timedelta(days=6),
    )


def biweekly_period(start_date: date, name: Optional[str] = None) -> FinancialPeriod:
    return FinancialPeriod(
        name=name or f"Fortnight {start_date.isoformat()}",
        period_type=PeriodType.BIWEEKLY,
        start_date=start_date,
        end_date=start_date + timedelta(days=13),
    )


def custom_period(name: str, start_date: date, end_date: date) -> FinancialPeriod:
    return FinancialPeriod(
        name=name,
        period_type=PeriodType.CUSTOM,
        start_date=start_date,
        end_date=end_date,
    )
