"""Weight-change projection from a daily energy delta."""

import math

from energy_balance.services.goals import DAYS_PER_WEEK, KCAL_PER_KG


def weekly_projected_change_kg(energy_delta_kcal_per_day: float) -> float:
    """Return expected kg changed per week, never negative.

    For a losing goal pass the deficit; for a gaining goal pass the surplus.
    """
    return max(energy_delta_kcal_per_day * DAYS_PER_WEEK / KCAL_PER_KG, 0.0)


def weeks_to_target(
    current_weight_kg: float, target_weight_kg: float, weekly_change_kg: float
) -> int | None:
    """Return whole weeks until the target, or None when no progress is projected."""
    if weekly_change_kg <= 0:
        return None
    weeks = abs(current_weight_kg - target_weight_kg) / weekly_change_kg
    # Exact divisions can land a few ulps above the whole week.
    return math.ceil(round(weeks, 9))
