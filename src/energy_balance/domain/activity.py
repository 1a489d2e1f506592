"""Domain models for measured activity."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class ActivityLevel(Enum):
    """Activity level with its fallback TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTRA_ACTIVE = "extra_active"

    @property
    def multiplier(self) -> float:
        """Return the TDEE multiplier applied to BMR."""
        return ACTIVITY_MULTIPLIERS[self]


ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}


@dataclass(frozen=True)
class ActiveEnergySample:
    """Measured active calories for one calendar day."""

    day: date
    active_kcal: float
