"""Financial period domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from kakebo.database.base import Database
from kakebo.domain.clock import Clock, SystemClock
from kakebo.domain.errors import NotFoundError, ValidationError, period_not_found
from kakebo.domain.period import (
    FinancialPeriod,
    PeriodScore,
    PeriodType,
    biweekly_period,
    custom_period,
    monthly_period,
    score_period,
    validate_period,
    weekly_period,
)


class PeriodService:
    """Service for managing financial periods."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize period service.

        Args:
            db: Database instance
            clock: Source of the current time, defaults to the wall clock
        """
        self.db = db
        self.clock = clock or SystemClock()

    def create_period(
        self,
        period_type: PeriodType,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        name: Optional[str] = None,
        saving_goal_amount: Optional[Decimal] = None,
        max_expense_limit: Optional[Decimal] = None,
    ) -> int:
        """Create a period.

        Monthly and weekly periods are the calendar month or week containing
        ``start_date`` (today if not given). Biweekly periods start on
        ``start_date``. Custom periods need both dates and a name.

        Args:
            period_type: Kind of period
            start_date: Reference or start date
            end_date: End date, custom periods only
            name: Optional name (required for custom periods)
            saving_goal_amount: Optional savings target for the period
            max_expense_limit: Optional expense ceiling for the period

        Returns:
            Period ID

        Raises:
            ValidationError: If the period is invalid
        """
        reference = start_date or self.clock.today()

        if period_type == PeriodType.MONTHLY:
            period = monthly_period(reference, name)
        elif period_type == PeriodType.WEEKLY:
            period = weekly_period(reference, name)
        elif period_type == PeriodType.BIWEEKLY:
            period = biweekly_period(reference, name)
        else:
            if start_date is None or end_date is None:
                raise ValidationError("Custom periods need a start and an end date")
            period = custom_period(name or "", start_date, end_date)

        period.saving_goal_amount = saving_goal_amount
        period.max_expense_limit = max_expense_limit

        errors = validate_period(period)
        if errors:
            raise ValidationError("; ".join(errors))

        return self.db.create_period(period)

    def get_period(self, period_id: int) -> Optional[FinancialPeriod]:
        """Get period by ID.

        Args:
            period_id: Period ID

        Returns:
            Period with its transactions, or None if not found
        """
        return self.db.get_period(period_id)

    def require_period(self, period_id: int) -> FinancialPeriod:
        period = self.db.get_period(period_id)
        if period is None:
            raise NotFoundError(period_not_found(period_id))
        return period

    def list_periods(self) -> list[FinancialPeriod]:
        """List all periods ordered by start date."""
        return self.db.list_periods()

    def current_period(self) -> Optional[FinancialPeriod]:
        """Open period containing today, if any."""
        return self.db.find_open_period(self.clock.today())

    def score(self, period_id: int) -> PeriodScore:
        """Score a period as it stands, without closing it."""
        return score_period(self.require_period(period_id))
