"""Achievement catalog.

Every achievement a profile can unlock is declared once in ``CATALOG``,
keyed by its type. Unlock triggers live in the profile; this module only
describes what can be unlocked and what it is worth.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AchievementRarity(str, Enum):
    """Rarity tiers, each scaling the base points of an achievement."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def multiplier(self) -> int:
        return RARITY_TABLE[self][0]

    @property
    def color(self) -> str:
        return RARITY_TABLE[self][1]


RARITY_TABLE: dict[AchievementRarity, tuple[int, str]] = {
    AchievementRarity.COMMON: (1, "#9CA3AF"),
    AchievementRarity.UNCOMMON: (2, "#10B981"),
    AchievementRarity.RARE: (3, "#3B82F6"),
    AchievementRarity.EPIC: (5, "#8B5CF6"),
    AchievementRarity.LEGENDARY: (10, "#F59E0B"),
}


class AchievementType(str, Enum):
    """Identity key of an achievement."""

    FIRST_TRANSACTION = "first_transaction"
    FIRST_SAVING = "first_saving"
    FIRST_GOAL = "first_goal"
    STREAK_7 = "streak_7"
    STREAK_30 = "streak_30"
    STREAK_100 = "streak_100"
    BIG_SAVER = "big_saver"
    SAVING_RATE_20 = "saving_rate_20"
    SAVING_RATE_50 = "saving_rate_50"
    TRANSACTIONS_100 = "transactions_100"
    MULTIPLE_GOALS = "multiple_goals"
    PERFECT_WEEK = "perfect_week"
    MONTHLY_COMPLETE = "monthly_complete"
    EARLY_BIRD = "early_bird"
    NIGHT_OWL = "night_owl"


@dataclass(frozen=True)
class AchievementDefinition:
    """Static description of an unlockable achievement."""

    achievement_type: AchievementType
    name: str
    description: str
    rarity: AchievementRarity
    base_points: int
    icon: str = "trophy.fill"

    @property
    def awarded_points(self) -> int:
        return self.base_points * self.rarity.multiplier


@dataclass(frozen=True)
class UnlockedAchievement:
    """An achievement bound to the moment it was unlocked."""

    definition: AchievementDefinition
    unlocked_at: datetime

    @property
    def achievement_type(self) -> AchievementType:
        return self.definition.achievement_type

    @property
    def points(self) -> int:
        return self.definition.awarded_points


def _streak(achievement_type: AchievementType, days: int, name: str,
            rarity: AchievementRarity, icon: str) -> AchievementDefinition:
    return AchievementDefinition(
        achievement_type=achievement_type,
        name=name,
        description=f"Record activity on {days} consecutive days",
        rarity=rarity,
        base_points=days * 2,
        icon=icon,
    )


_DEFINITIONS = (
    AchievementDefinition(
        AchievementType.FIRST_TRANSACTION,
        "First Step",
        "Record your first transaction",
        AchievementRarity.COMMON,
        10,
        "star.fill",
    ),
    AchievementDefinition(
        AchievementType.FIRST_SAVING,
        "First Saving",
        "Put money towards a saving goal for the first time",
        AchievementRarity.COMMON,
        15,
        "banknote.fill",
    ),
    AchievementDefinition(
        AchievementType.FIRST_GOAL,
        "Goal Reached",
        "Complete your first saving goal",
        AchievementRarity.UNCOMMON,
        50,
        "target",
    ),
    _streak(AchievementType.STREAK_7, 7, "7-Day Streak", AchievementRarity.UNCOMMON, "flame.fill"),
    _streak(AchievementType.STREAK_30, 30, "30-Day Streak", AchievementRarity.RARE, "flame.fill"),
    _streak(AchievementType.STREAK_100, 100, "Legendary Streak", AchievementRarity.LEGENDARY, "flame.circle.fill"),
    AchievementDefinition(
        AchievementType.BIG_SAVER,
        "Big Saver",
        "Save more than 1,000 across your goals",
        AchievementRarity.RARE,
        100,
    ),
    AchievementDefinition(
        AchievementType.SAVING_RATE_20,
        "Dedicated Saver",
        "Reach a 20% saving rate",
        AchievementRarity.RARE,
        150,
    ),
    AchievementDefinition(
        AchievementType.SAVING_RATE_50,
        "Saving Master",
        "Reach a 50% saving rate",
        AchievementRarity.LEGENDARY,
        500,
    ),
    AchievementDefinition(
        AchievementType.TRANSACTIONS_100,
        "Compulsive Tracker",
        "Record 100 transactions",
        AchievementRarity.RARE,
        100,
    ),
    AchievementDefinition(
        AchievementType.MULTIPLE_GOALS,
        "Expert Planner",
        "Complete 5 saving goals",
        AchievementRarity.EPIC,
        200,
    ),
    AchievementDefinition(
        AchievementType.PERFECT_WEEK,
        "Perfect Week",
        "Record transactions on every day of a week",
        AchievementRarity.UNCOMMON,
        50,
    ),
    AchievementDefinition(
        AchievementType.MONTHLY_COMPLETE,
        "Full Month",
        "Close a month without exceeding its expense limit",
        AchievementRarity.EPIC,
        200,
    ),
    AchievementDefinition(
        AchievementType.EARLY_BIRD,
        "Early Bird",
        "Record a transaction before 6 AM",
        AchievementRarity.UNCOMMON,
        30,
    ),
    AchievementDefinition(
        AchievementType.NIGHT_OWL,
        "Night Owl",
        "Record a transaction after 11 PM",
        AchievementRarity.UNCOMMON,
        30,
    ),
)

CATALOG: dict[AchievementType, AchievementDefinition] = {
    definition.achievement_type: definition for definition in _DEFINITIONS
}

STREAK_MILESTONES: dict[int, AchievementType] = {
    7: AchievementType.STREAK_7,
    30: AchievementType.STREAK_30,
    100: AchievementType.STREAK_100,
}


def get_definition(achievement_type: AchievementType) -> AchievementDefinition:
    """Return the catalog entry for ``achievement_type``."""
    return CATALOG[achievement_type]
