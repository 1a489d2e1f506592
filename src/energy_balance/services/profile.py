"""Profile resolution from measured, manual and default body attributes."""

import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from energy_balance.domain.profile import BiologicalSex, Profile, ProfileReading

DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 175.0
DEFAULT_AGE_YEARS = 30.0
DEFAULT_SEX = BiologicalSex.MALE

_NUMERIC_DEFAULTS = {
    "weight_kg": DEFAULT_WEIGHT_KG,
    "height_cm": DEFAULT_HEIGHT_CM,
    "age_years": DEFAULT_AGE_YEARS,
}

UNDERWEIGHT_BMI = 18.5
NORMAL_BMI = 25.0
OVERWEIGHT_BMI = 30.0


class ProfileRepository(Protocol):
    """Source of body attributes for a user."""

    def get_profile_reading(self, user_id: UUID) -> ProfileReading | None:
        """Return the latest measured attributes, if any."""

    def get_manual_overrides(self, user_id: UUID) -> ProfileReading | None:
        """Return attributes the user entered by hand, if any."""

    def set_manual_overrides(self, user_id: UUID, reading: ProfileReading) -> None:
        """Replace the attributes the user entered by hand."""


@dataclass
class ProfileService:
    """Service that resolves and edits a user's body profile."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> Profile:
        """Return the resolved profile for a user."""
        return resolve_profile(
            self.repository.get_profile_reading(user_id),
            self.repository.get_manual_overrides(user_id),
        )

    def set_manual_overrides(self, user_id: UUID, reading: ProfileReading) -> Profile:
        """Store hand-entered attributes and return the resolved profile."""
        self.repository.set_manual_overrides(user_id, reading)
        return self.get_profile(user_id)


def resolve_profile(
    measured: ProfileReading | None, manual: ProfileReading | None = None
) -> Profile:
    """Merge manual overrides, measured values and defaults into a profile.

    Manual values win over measured ones. Missing, non-positive or non-finite
    values are skipped so that every resolved field is usable.
    """
    resolved: dict[str, float] = {}
    measured_fields: set[str] = set()
    for name, default in _NUMERIC_DEFAULTS.items():
        manual_value = _usable(getattr(manual, name, None))
        measured_value = _usable(getattr(measured, name, None))
        if manual_value is not None:
            resolved[name] = manual_value
        elif measured_value is not None:
            resolved[name] = measured_value
            measured_fields.add(name)
        else:
            resolved[name] = default

    sex = getattr(manual, "sex", None)
    if sex is None:
        sex = getattr(measured, "sex", None)
        if sex is not None:
            measured_fields.add("sex")

    return Profile(
        weight_kg=resolved["weight_kg"],
        height_cm=resolved["height_cm"],
        age_years=resolved["age_years"],
        sex=sex or DEFAULT_SEX,
        measured_fields=frozenset(measured_fields),
    )


def body_mass_index(profile: Profile) -> float:
    """Return BMI in kg/m^2."""
    height_m = profile.height_cm / 100
    return profile.weight_kg / (height_m * height_m)


def bmi_category(bmi: float) -> str:
    """Return the WHO category label for a BMI value."""
    if bmi < UNDERWEIGHT_BMI:
        return "Underweight"
    if bmi < NORMAL_BMI:
        return "Normal"
    if bmi < OVERWEIGHT_BMI:
        return "Overweight"
    return "Obese"


def _usable(value: float | None) -> float | None:
    if value is None:
        return None
    numeric = float(value)
    if not math.isfinite(numeric) or numeric <= 0:
        return None
    return numeric
