"""Clock abstraction used by date-dependent progress logic.

``now()`` is the UTC timestamp that gets stored. ``local_now()`` and
``today()`` are the user's wall-clock time and calendar day.
"""

from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Optional, Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current UTC timestamp."""
        ...

    def local_now(self) -> datetime:
        """Return the current time in the user's time zone."""
        ...

    def today(self) -> date:
        """Return the user's current calendar day."""
        ...


class SystemClock:
    """Clock backed by the wall clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def local_now(self) -> datetime:
        return datetime.now().astimezone()

    def today(self) -> date:
        return self.local_now().date()


class FixedClock:
    """Clock that only moves when told to.

    Useful for replaying a sequence of days deterministically. With ``tz``
    set, local time and the calendar day are read in that zone; otherwise
    they follow the zone of ``current``.
    """

    def __init__(self, current: Optional[datetime] = None, tz: Optional[tzinfo] = None):
        self.current = current or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        self.tz = tz

    def now(self) -> datetime:
        return self.current

    def local_now(self) -> datetime:
        if self.tz is None:
            return self.current
        return self.current.astimezone(self.tz)

    def today(self) -> date:
        return self.local_now().date()

    def advance(self, days: int = 0, hours: int = 0) -> None:
        """Move the clock forward."""
        self.current = self.current + timedelta(days=days, hours=hours)

    def set(self, current: datetime) -> None:
        self.current = current
