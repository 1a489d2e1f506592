"""Domain models for computed energy balance results."""

from dataclasses import dataclass
from datetime import date

from energy_balance.domain.activity import ActivityLevel
from energy_balance.domain.goals import SafetyTier
from energy_balance.domain.meals import IntakeTotals


@dataclass(frozen=True)
class DayBalance:
    """Maintenance calories against intake for one day."""

    day: date
    maintenance_kcal: float
    intake_kcal: float
    deficit_kcal: float
    has_entries: bool


@dataclass(frozen=True)
class ComputedSnapshot:
    """Everything a nutrition screen needs for one render pass."""

    bmr_kcal: float
    tdee_kcal: float
    activity_level: ActivityLevel
    calorie_goal_kcal: float
    protein_goal_g: float
    carb_goal_g: float
    fat_goal_g: float
    today_intake: IntakeTotals
    calories_remaining_kcal: float
    target_deficit_kcal: float
    realized_deficit_kcal: float
    trailing_7day_avg_deficit_kcal: float | None
    logged_days_in_window: int
    deficit_status: str
    deficit_safety_tier: SafetyTier
    calorie_goal_below_bmr: bool
    projected_weekly_change_kg: float
    estimated_weeks_to_target: int | None
    bmi: float
    bmi_category: str

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return {
            "bmr_kcal": self.bmr_kcal,
            "tdee_kcal": self.tdee_kcal,
            "activity_level": self.activity_level.value,
            "calorie_goal_kcal": self.calorie_goal_kcal,
            "protein_goal_g": self.protein_goal_g,
            "carb_goal_g": self.carb_goal_g,
            "fat_goal_g": self.fat_goal_g,
            "today_intake": self.today_intake.as_dict(),
            "calories_remaining_kcal": self.calories_remaining_kcal,
            "target_deficit_kcal": self.target_deficit_kcal,
            "realized_deficit_kcal": self.realized_deficit_kcal,
            "trailing_7day_avg_deficit_kcal": self.trailing_7day_avg_deficit_kcal,
            "logged_days_in_window": self.logged_days_in_window,
            "deficit_status": self.deficit_status,
            "deficit_safety_tier": self.deficit_safety_tier.value,
            "calorie_goal_below_bmr": self.calorie_goal_below_bmr,
            "projected_weekly_change_kg": self.projected_weekly_change_kg,
            "estimated_weeks_to_target": self.estimated_weeks_to_target,
            "bmi": self.bmi,
            "bmi_category": self.bmi_category,
        }
