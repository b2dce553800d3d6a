"""Domain layer for kakebo application.

Services (``ProgressService``, ``GoalService``, ``PeriodService``) depend on
the database layer and are imported from their own modules.
"""

from kakebo.domain.achievements import CATALOG, AchievementRarity, AchievementType
from kakebo.domain.clock import FixedClock, SystemClock
from kakebo.domain.engine import GamificationEngine
from kakebo.domain.period import FinancialPeriod, FinancialPeriodScorer, PeriodType
from kakebo.domain.profile import GamificationProfile, ProgressResult
from kakebo.domain.ranks import RankTier
from kakebo.domain.saving_goal import GoalStatus, SavingGoal, SavingGoalTracker, SubGoal
from kakebo.domain.streaks import StreakTracker

__all__ = [
    "CATALOG",
    "AchievementRarity",
    "AchievementType",
    "FixedClock",
    "SystemClock",
    "GamificationEngine",
    "FinancialPeriod",
    "FinancialPeriodScorer",
    "PeriodType",
    "GamificationProfile",
    "ProgressResult",
    "RankTier",
    "GoalStatus",
    "SavingGoal",
    "SavingGoalTracker",
    "SubGoal",
    "StreakTracker",
]
