"""Basal metabolic rate and total daily energy expenditure."""

import logging
import math

from energy_balance.domain.activity import ActivityLevel
from energy_balance.domain.profile import BiologicalSex, InvalidProfileError, Profile

_MALE_OFFSET = 5.0
_FEMALE_OFFSET = -161.0

MODERATE_FALLBACK_KCAL = 400.0
LIGHT_FALLBACK_KCAL = 200.0

# (min kcal inclusive, max kcal exclusive, min workout days, max workout days)
_ACTIVITY_BANDS: tuple[tuple[ActivityLevel, float, float, float, float], ...] = (
    (ActivityLevel.SEDENTARY, 0.0, 200.0, 0, 1),
    (ActivityLevel.LIGHTLY_ACTIVE, 200.0, 400.0, 1, 3),
    (ActivityLevel.MODERATELY_ACTIVE, 400.0, 600.0, 3, 5),
    (ActivityLevel.VERY_ACTIVE, 600.0, 800.0, 5, 7),
    (ActivityLevel.EXTRA_ACTIVE, 800.0, math.inf, 6, math.inf),
)

# Upper bounds of the measured TDEE/BMR ratio for each level.
_RATIO_BOUNDS: tuple[tuple[float, ActivityLevel], ...] = (
    (1.3, ActivityLevel.SEDENTARY),
    (1.45, ActivityLevel.LIGHTLY_ACTIVE),
    (1.65, ActivityLevel.MODERATELY_ACTIVE),
    (1.85, ActivityLevel.VERY_ACTIVE),
)

_logger = logging.getLogger(__name__)


def compute_bmr(profile: Profile) -> float:
    """Return BMR in kcal/day using the Mifflin-St Jeor equation."""
    for name in ("weight_kg", "height_cm", "age_years"):
        value = getattr(profile, name)
        if not math.isfinite(value) or value <= 0:
            raise InvalidProfileError(name, value)
    offset = _MALE_OFFSET if profile.sex is BiologicalSex.MALE else _FEMALE_OFFSET
    bmr = (
        10 * profile.weight_kg
        + 6.25 * profile.height_cm
        - 5 * profile.age_years
        + offset
    )
    if bmr <= 0:
        raise InvalidProfileError("bmr", bmr)
    _logger.debug("BMR calculated: %s", bmr)
    return bmr


def compute_tdee(bmr: float, active_kcal: float) -> float:
    """Return TDEE as BMR plus measured active calories."""
    return bmr + max(active_kcal, 0.0)


def tdee_from_activity_level(bmr: float, level: ActivityLevel) -> float:
    """Return TDEE using the fixed activity multiplier."""
    return bmr * level.multiplier


def classify_activity_level(
    avg_active_kcal: float, workout_days: int
) -> ActivityLevel:
    """Pick an activity level from weekly averages.

    Bands are tried in order of intensity. Combinations that fit no band fall
    back to the active-calorie magnitude alone.
    """
    for level, kcal_low, kcal_high, days_low, days_high in _ACTIVITY_BANDS:
        if kcal_low <= avg_active_kcal < kcal_high and (
            days_low <= workout_days <= days_high
        ):
            return level
    if avg_active_kcal >= MODERATE_FALLBACK_KCAL:
        return ActivityLevel.MODERATELY_ACTIVE
    if avg_active_kcal >= LIGHT_FALLBACK_KCAL:
        return ActivityLevel.LIGHTLY_ACTIVE
    return ActivityLevel.SEDENTARY


def activity_level_from_ratio(ratio: float) -> ActivityLevel:
    """Label a measured TDEE/BMR ratio with the closest activity level."""
    for upper, level in _RATIO_BOUNDS:
        if ratio < upper:
            return level
    return ActivityLevel.EXTRA_ACTIVE
