"""Consecutive-day streak tracking.

The tracker is a pure state machine over ``StreakState``: it never reads
the wall clock, the caller passes the day the activity happened on.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from kakebo.domain.achievements import STREAK_MILESTONES

logger = logging.getLogger(__name__)

# (first day of tier, points per streak day), highest tier first
STREAK_POINT_TIERS = ((30, 20), (14, 10), (7, 5), (1, 2))


@dataclass(frozen=True)
class StreakState:
    """Streak counters as stored on a profile."""

    current_streak: int = 0
    longest_streak: int = 0
    last_streak_date: Optional[date] = None


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of reporting one day of activity."""

    state: StreakState
    counted: bool
    points: int = 0
    milestone: Optional[int] = None


def streak_points(days: int) -> int:
    """Return points earned for reaching a streak of ``days``."""
    for first_day, per_day in STREAK_POINT_TIERS:
        if days >= first_day:
            return days * per_day
    return 0


class StreakTracker:
    """Applies daily activity to a streak state."""

    def advance(self, state: StreakState, today: date) -> StreakUpdate:
        """Record activity on ``today``.

        Args:
            state: Current streak counters
            today: Calendar day the activity happened on

        Returns:
            StreakUpdate with the new state. ``counted`` is False when the
            day was already credited or lies before the last credited day,
            in which case the state is returned unchanged.
        """
        last = state.last_streak_date
        if last is not None and today <= last:
            if today < last:
                logger.debug("Ignoring activity on %s, before last streak day %s", today, last)
            return StreakUpdate(state=state, counted=False)

        if last is not None and (today - last).days == 1:
            current = state.current_streak + 1
        else:
            if last is not None and state.current_streak > 1:
                logger.info(
                    "Streak broken after %d days (gap of %d days)",
                    state.current_streak,
                    (today - last).days,
                )
            current = 1

        longest = max(state.longest_streak, current)
        new_state = replace(
            state,
            current_streak=current,
            longest_streak=longest,
            last_streak_date=today,
        )
        milestone = current if current in STREAK_MILESTONES else None
        return StreakUpdate(
            state=new_state,
            counted=True,
            points=streak_points(current),
            milestone=milestone,
        )

    def is_active(self, state: StreakState, today: date) -> bool:
        """Return True if the streak can still be continued on ``today``."""
        if state.last_streak_date is None:
            return False
        return (today - state.last_streak_date).days <= 1
