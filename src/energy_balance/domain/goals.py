"""Domain models for calorie and macro goals."""

from dataclasses import dataclass
from enum import Enum

MIN_WEEKLY_RATE_KG = 0.25
MAX_WEEKLY_RATE_KG = 1.0


class GoalDirection(Enum):
    """Direction of the user's weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class SafetyTier(Enum):
    """Advisory classification of a target daily deficit."""

    MINIMAL = "minimal"
    SAFE = "safe"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
    TOO_HIGH = "too-high"


@dataclass(frozen=True)
class GoalParameters:
    """User-adjustable goal settings."""

    direction: GoalDirection = GoalDirection.LOSE
    weekly_rate_kg: float = 0.5
    explicit_calorie_goal: float | None = None
    explicit_deficit_goal: float | None = None
    target_weight_kg: float | None = None

    def __post_init__(self) -> None:
        if not MIN_WEEKLY_RATE_KG <= self.weekly_rate_kg <= MAX_WEEKLY_RATE_KG:
            raise ValueError(
                f"weekly_rate_kg must be within [{MIN_WEEKLY_RATE_KG}, "
                f"{MAX_WEEKLY_RATE_KG}], got {self.weekly_rate_kg!r}"
            )
        if self.explicit_calorie_goal is not None and self.explicit_calorie_goal <= 0:
            raise ValueError("explicit_calorie_goal must be positive")
        if self.explicit_deficit_goal is not None and self.explicit_deficit_goal < 0:
            raise ValueError("explicit_deficit_goal must be >= 0")
        if self.target_weight_kg is not None and self.target_weight_kg <= 0:
            raise ValueError("target_weight_kg must be positive")


@dataclass(frozen=True)
class MacroGoals:
    """Daily calorie and macro targets."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    daily_adjustment_kcal: float
