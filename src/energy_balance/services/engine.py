"""Single-call energy balance computation for one render pass."""

import logging
from collections.abc import Iterable
from datetime import date, tzinfo

from energy_balance.domain.activity import ActiveEnergySample, ActivityLevel
from energy_balance.domain.goals import GoalDirection, GoalParameters
from energy_balance.domain.meals import MealEntry
from energy_balance.domain.profile import Profile
from energy_balance.domain.snapshot import ComputedSnapshot
from energy_balance.services.deficit import (
    active_kcal_by_day,
    classify_safety,
    daily_balances,
    daily_deficit,
    deficit_status,
    rolling_average_deficit,
    trailing_window,
)
from energy_balance.services.goals import compute_goals
from energy_balance.services.intake import aggregate, aggregate_days
from energy_balance.services.metabolism import (
    activity_level_from_ratio,
    classify_activity_level,
    compute_bmr,
    compute_tdee,
    tdee_from_activity_level,
)
from energy_balance.services.profile import bmi_category, body_mass_index
from energy_balance.services.projection import (
    weekly_projected_change_kg,
    weeks_to_target,
)

_logger = logging.getLogger(__name__)


def compute_snapshot(  # noqa: PLR0913
    profile: Profile,
    params: GoalParameters,
    todays_entries: Iterable[MealEntry],
    trailing_entries: Iterable[MealEntry],
    samples: Iterable[ActiveEnergySample],
    *,
    today: date,
    tz: tzinfo,
    workout_days: int | None = None,
) -> ComputedSnapshot:
    """Compute goals, intake, deficits and projections in one pass.

    Raises InvalidProfileError when the profile cannot produce a BMR.
    """
    bmr = compute_bmr(profile)
    active_by_day = active_kcal_by_day(samples)
    window = trailing_window(today)

    tdee, level = _resolve_tdee(bmr, active_by_day, today, window, workout_days)
    goals = compute_goals(tdee, bmr, profile.weight_kg, params)
    target_deficit = tdee - goals.calories

    today_intake = aggregate(todays_entries, today, tz)
    realized = daily_deficit(tdee, today_intake.calories)

    intake_by_day = aggregate_days(trailing_entries, window, tz)
    balances = daily_balances(bmr, active_by_day, intake_by_day, window)
    trailing_avg = rolling_average_deficit(balances)
    logged_days = sum(1 for balance in balances if balance.has_entries)

    delta = trailing_avg if trailing_avg is not None else target_deficit
    if params.direction is GoalDirection.GAIN:
        delta = -delta
    weekly_change = weekly_projected_change_kg(delta)

    weeks = None
    if (
        params.target_weight_kg is not None
        and params.direction is not GoalDirection.MAINTAIN
    ):
        weeks = weeks_to_target(
            profile.weight_kg, params.target_weight_kg, weekly_change
        )

    bmi = body_mass_index(profile)
    _logger.debug(
        "Snapshot for %s: bmr=%s tdee=%s goal=%s realized=%s avg=%s",
        today,
        bmr,
        tdee,
        goals.calories,
        realized,
        trailing_avg,
    )
    return ComputedSnapshot(
        bmr_kcal=bmr,
        tdee_kcal=tdee,
        activity_level=level,
        calorie_goal_kcal=goals.calories,
        protein_goal_g=goals.protein_g,
        carb_goal_g=goals.carbs_g,
        fat_goal_g=goals.fat_g,
        today_intake=today_intake,
        calories_remaining_kcal=goals.calories - today_intake.calories,
        target_deficit_kcal=target_deficit,
        realized_deficit_kcal=realized,
        trailing_7day_avg_deficit_kcal=trailing_avg,
        logged_days_in_window=logged_days,
        deficit_status=deficit_status(realized),
        deficit_safety_tier=classify_safety(target_deficit),
        calorie_goal_below_bmr=goals.calories < bmr,
        projected_weekly_change_kg=weekly_change,
        estimated_weeks_to_target=weeks,
        bmi=bmi,
        bmi_category=bmi_category(bmi),
    )


def _resolve_tdee(
    bmr: float,
    active_by_day: dict[date, float],
    today: date,
    window: list[date],
    workout_days: int | None,
) -> tuple[float, ActivityLevel]:
    measured = active_by_day.get(today)
    if measured is not None:
        tdee = compute_tdee(bmr, measured)
        return tdee, activity_level_from_ratio(tdee / bmr)
    if workout_days is not None:
        avg_active = sum(active_by_day.get(day, 0.0) for day in window) / len(window)
        level = classify_activity_level(avg_active, workout_days)
        return tdee_from_activity_level(bmr, level), level
    return compute_tdee(bmr, 0.0), ActivityLevel.SEDENTARY
