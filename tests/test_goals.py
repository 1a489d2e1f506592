"""Tests for calorie and macro goal calculation."""

import pytest

from energy_balance.domain.goals import GoalDirection, GoalParameters
from energy_balance.services.goals import compute_goals, daily_energy_adjustment


def test_daily_energy_adjustment_for_half_kilo() -> None:
    assert daily_energy_adjustment(0.5) == pytest.approx(550.0)


def test_lose_goal_subtracts_adjustment() -> None:
    goals = compute_goals(2500.0, 1780.0, 80.0, GoalParameters())

    assert goals.calories == pytest.approx(1950.0)
    assert goals.daily_adjustment_kcal == pytest.approx(550.0)


def test_lose_goal_never_below_bmr() -> None:
    goals = compute_goals(
        2080.0, 1780.0, 80.0, GoalParameters(weekly_rate_kg=1.0)
    )

    assert goals.calories == pytest.approx(1780.0)


def test_gain_goal_adds_adjustment() -> None:
    params = GoalParameters(direction=GoalDirection.GAIN, weekly_rate_kg=0.25)

    goals = compute_goals(2500.0, 1780.0, 80.0, params)

    assert goals.calories == pytest.approx(2775.0)


def test_maintain_goal_equals_tdee() -> None:
    params = GoalParameters(direction=GoalDirection.MAINTAIN)

    goals = compute_goals(2500.0, 1780.0, 80.0, params)

    assert goals.calories == pytest.approx(2500.0)


def test_lose_macros_use_cut_protein() -> None:
    goals = compute_goals(2080.0, 1780.0, 80.0, GoalParameters())

    assert goals.protein_g == pytest.approx(160.0)
    assert goals.fat_g == pytest.approx(72.0)
    assert goals.carbs_g == pytest.approx(123.0)


def test_maintain_macros_use_standard_protein() -> None:
    params = GoalParameters(direction=GoalDirection.MAINTAIN)

    goals = compute_goals(2500.0, 1780.0, 80.0, params)

    assert goals.protein_g == pytest.approx(144.0)


def test_carbs_have_a_floor() -> None:
    params = GoalParameters(explicit_calorie_goal=1000.0)

    goals = compute_goals(2500.0, 1780.0, 120.0, params)

    assert goals.carbs_g == pytest.approx(50.0)


def test_explicit_calorie_goal_overrides_without_floor() -> None:
    params = GoalParameters(explicit_calorie_goal=1200.0)

    goals = compute_goals(2500.0, 1780.0, 80.0, params)

    assert goals.calories == pytest.approx(1200.0)


def test_explicit_deficit_goal_replaces_rate_adjustment() -> None:
    params = GoalParameters(explicit_deficit_goal=300.0)

    goals = compute_goals(2500.0, 1780.0, 80.0, params)

    assert goals.calories == pytest.approx(2200.0)
    assert goals.daily_adjustment_kcal == pytest.approx(300.0)


@pytest.mark.parametrize("rate", [0.1, 1.5])
def test_goal_parameters_reject_out_of_range_rate(rate: float) -> None:
    with pytest.raises(ValueError, match="weekly_rate_kg"):
        GoalParameters(weekly_rate_kg=rate)


def test_goal_parameters_reject_non_positive_calorie_goal() -> None:
    with pytest.raises(ValueError, match="explicit_calorie_goal"):
        GoalParameters(explicit_calorie_goal=0.0)


def test_goal_parameters_reject_negative_deficit_goal() -> None:
    with pytest.raises(ValueError, match="explicit_deficit_goal"):
        GoalParameters(explicit_deficit_goal=-10.0)


@pytest.mark.parametrize("rate", [0.25, 0.5, 0.75, 1.0])
@pytest.mark.parametrize("tdee", [1500.0, 1900.0, 2400.0, 3200.0])
def test_lose_goal_floor_and_carb_floor_hold(rate: float, tdee: float) -> None:
    bmr = 1500.0

    goals = compute_goals(tdee, bmr, 95.0, GoalParameters(weekly_rate_kg=rate))

    assert goals.calories >= bmr
    assert goals.carbs_g >= 50
