"""Tests for profile resolution."""

import math
from uuid import uuid4

import pytest

from energy_balance.domain.profile import BiologicalSex, ProfileReading
from energy_balance.services.profile import (
    DEFAULT_AGE_YEARS,
    DEFAULT_HEIGHT_CM,
    DEFAULT_SEX,
    DEFAULT_WEIGHT_KG,
    ProfileService,
    body_mass_index,
    bmi_category,
    resolve_profile,
)
from tests.conftest import InMemoryProfileRepository


def test_resolve_profile_defaults_when_nothing_known() -> None:
    profile = resolve_profile(None)

    assert profile.weight_kg == DEFAULT_WEIGHT_KG
    assert profile.height_cm == DEFAULT_HEIGHT_CM
    assert profile.age_years == DEFAULT_AGE_YEARS
    assert profile.sex is DEFAULT_SEX
    assert not profile.measured_fields


def test_resolve_profile_prefers_measured_values() -> None:
    measured = ProfileReading(weight_kg=82.5, sex=BiologicalSex.FEMALE)

    profile = resolve_profile(measured)

    assert profile.weight_kg == 82.5
    assert profile.height_cm == DEFAULT_HEIGHT_CM
    assert profile.sex is BiologicalSex.FEMALE
    assert profile.is_measured("weight_kg")
    assert profile.is_measured("sex")
    assert not profile.is_measured("height_cm")


def test_resolve_profile_manual_overrides_measured() -> None:
    measured = ProfileReading(weight_kg=82.5, height_cm=181)
    manual = ProfileReading(weight_kg=79.0)

    profile = resolve_profile(measured, manual)

    assert profile.weight_kg == 79.0
    assert profile.height_cm == 181
    assert not profile.is_measured("weight_kg")
    assert profile.is_measured("height_cm")


@pytest.mark.parametrize("bad_value", [0.0, -5.0, math.nan, math.inf])
def test_resolve_profile_skips_unusable_readings(bad_value: float) -> None:
    profile = resolve_profile(ProfileReading(weight_kg=bad_value))

    assert profile.weight_kg == DEFAULT_WEIGHT_KG


def test_body_mass_index() -> None:
    profile = resolve_profile(ProfileReading(weight_kg=80, height_cm=200))

    assert body_mass_index(profile) == pytest.approx(20.0)


@pytest.mark.parametrize(
    ("bmi", "label"),
    [(17.0, "Underweight"), (22.0, "Normal"), (27.5, "Overweight"), (31.0, "Obese")],
)
def test_bmi_category(bmi: float, label: str) -> None:
    assert bmi_category(bmi) == label


def test_profile_service_applies_manual_overrides() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository)
    user_id = uuid4()
    repository.measured[user_id] = ProfileReading(weight_kg=82.0, height_cm=181)

    profile = service.set_manual_overrides(user_id, ProfileReading(weight_kg=78.5))

    assert repository.manual[user_id] == ProfileReading(weight_kg=78.5)
    assert profile.weight_kg == 78.5
    assert profile.height_cm == 181
    assert service.get_profile(user_id) == profile
