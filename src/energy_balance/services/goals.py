"""Daily calorie and macro goal calculation."""

import logging

from energy_balance.domain.goals import GoalDirection, GoalParameters, MacroGoals

# Approximate energy content of 1 kg of body mass; not metabolically exact.
KCAL_PER_KG = 7700.0
DAYS_PER_WEEK = 7

PROTEIN_G_PER_KG_CUT = 2.0
PROTEIN_G_PER_KG = 1.8
FAT_G_PER_KG = 0.9
MIN_CARBS_G = 50.0

KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_FAT = 9.0

_logger = logging.getLogger(__name__)


def daily_energy_adjustment(weekly_rate_kg: float) -> float:
    """Return the daily kcal change that yields the weekly rate."""
    return weekly_rate_kg * KCAL_PER_KG / DAYS_PER_WEEK


def compute_goals(
    tdee: float, bmr: float, weight_kg: float, params: GoalParameters
) -> MacroGoals:
    """Derive calorie and macro targets for a goal.

    A losing goal is never set below BMR. An explicit calorie goal replaces
    the computed value as-is, and an explicit deficit goal replaces the
    rate-derived daily adjustment.
    """
    if params.explicit_deficit_goal is not None:
        adjustment = params.explicit_deficit_goal
    else:
        adjustment = daily_energy_adjustment(params.weekly_rate_kg)

    if params.explicit_calorie_goal is not None:
        calories = params.explicit_calorie_goal
    elif params.direction is GoalDirection.LOSE:
        calories = max(tdee - adjustment, bmr)
    elif params.direction is GoalDirection.GAIN:
        calories = tdee + adjustment
    else:
        calories = tdee

    protein_per_kg = (
        PROTEIN_G_PER_KG_CUT
        if params.direction is GoalDirection.LOSE
        else PROTEIN_G_PER_KG
    )
    protein_g = weight_kg * protein_per_kg
    fat_g = weight_kg * FAT_G_PER_KG
    remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    carbs_g = max(remaining / KCAL_PER_G_CARBS, MIN_CARBS_G)

    _logger.debug(
        "Goals for %s: calories=%s protein=%s carbs=%s fat=%s",
        params.direction.value,
        calories,
        protein_g,
        carbs_g,
        fat_g,
    )
    return MacroGoals(
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        daily_adjustment_kcal=adjustment,
    )
