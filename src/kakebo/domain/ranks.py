"""Rank ladder: tiers reached by cumulative points."""

from enum import Enum
from typing import Optional


class RankTier(str, Enum):
    """Rank tiers in ascending order."""

    NOVICE = "novice"
    APPRENTICE = "apprentice"
    PRACTITIONER = "practitioner"
    EXPERT = "expert"
    MASTER = "master"
    GRAND_MASTER = "grand_master"
    LEGEND = "legend"

    @property
    def minimum_points(self) -> int:
        return RANK_TABLE[self][0]

    @property
    def label(self) -> str:
        return RANK_TABLE[self][1]

    @property
    def color(self) -> str:
        return RANK_TABLE[self][2]

    @property
    def icon(self) -> str:
        return RANK_TABLE[self][3]

    @property
    def next_tier(self) -> Optional["RankTier"]:
        tiers = list(RankTier)
        index = tiers.index(self)
        if index == len(tiers) - 1:
            return None
        return tiers[index + 1]


# tier -> (minimum points, label, color, icon)
RANK_TABLE: dict[RankTier, tuple[int, str, str, str]] = {
    RankTier.NOVICE: (0, "Novice", "#9CA3AF", "star"),
    RankTier.APPRENTICE: (100, "Apprentice", "#10B981", "star.fill"),
    RankTier.PRACTITIONER: (500, "Practitioner", "#3B82F6", "star.leadinghalf.filled"),
    RankTier.EXPERT: (1500, "Expert", "#8B5CF6", "medal"),
    RankTier.MASTER: (3500, "Master", "#F59E0B", "medal.fill"),
    RankTier.GRAND_MASTER: (7500, "Grand Master", "#EF4444", "crown"),
    RankTier.LEGEND: (15000, "Legend", "#EC4899", "crown.fill"),
}


def rank_for(points: int) -> RankTier:
    """Return the highest tier whose minimum is covered by ``points``."""
    for tier in reversed(list(RankTier)):
        if points >= tier.minimum_points:
            return tier
    return RankTier.NOVICE


def next_threshold(tier: RankTier) -> Optional[int]:
    """Return the minimum points of the tier above, or None at the top."""
    next_tier = tier.next_tier
    if next_tier is None:
        return None
    return next_tier.minimum_points


def points_to_next(points: int, tier: RankTier) -> Optional[int]:
    """Return points still missing for the next tier, or None at the top."""
    threshold = next_threshold(tier)
    if threshold is None:
        return None
    return threshold - points


def progress_percent(points: int, tier: RankTier) -> float:
    """Return progress from ``tier`` towards the next one, clamped to 0-100."""
    threshold = next_threshold(tier)
    if threshold is None:
        return 100.0
    span = threshold - tier.minimum_points
    progress = (points - tier.minimum_points) / span * 100
    return min(max(progress, 0.0), 100.0)
