"""Realized energy deficit tracking and safety classification."""

from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from energy_balance.domain.activity import ActiveEnergySample
from energy_balance.domain.goals import SafetyTier
from energy_balance.domain.meals import IntakeTotals
from energy_balance.domain.snapshot import DayBalance
from energy_balance.services.metabolism import compute_tdee

WINDOW_DAYS = 7

# Lower bound (inclusive) of each tier above MINIMAL.
_SAFETY_THRESHOLDS: tuple[tuple[float, SafetyTier], ...] = (
    (1000.0, SafetyTier.TOO_HIGH),
    (750.0, SafetyTier.AGGRESSIVE),
    (500.0, SafetyTier.MODERATE),
    (250.0, SafetyTier.SAFE),
)


def daily_deficit(maintenance_kcal: float, intake_kcal: float) -> float:
    """Return maintenance minus intake; positive is a deficit."""
    return maintenance_kcal - intake_kcal


def trailing_window(today: date, days: int = WINDOW_DAYS) -> list[date]:
    """Return the completed calendar days before ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days, 0, -1)]


def active_kcal_by_day(
    samples: Iterable[ActiveEnergySample],
) -> dict[date, float]:
    """Index samples by day, keeping the last sample seen for a day."""
    return {sample.day: sample.active_kcal for sample in samples}


def daily_balances(
    bmr: float,
    active_by_day: Mapping[date, float],
    intake_by_day: Mapping[date, IntakeTotals],
    days: Iterable[date],
) -> list[DayBalance]:
    """Compare each day's maintenance calories with what was eaten.

    Days without an active-energy sample count as zero active calories.
    """
    balances = []
    for day in days:
        maintenance = compute_tdee(bmr, active_by_day.get(day, 0.0))
        intake = intake_by_day.get(day) or IntakeTotals(day=day)
        balances.append(
            DayBalance(
                day=day,
                maintenance_kcal=maintenance,
                intake_kcal=intake.calories,
                deficit_kcal=daily_deficit(maintenance, intake.calories),
                has_entries=intake.has_entries,
            )
        )
    return balances


def rolling_average_deficit(balances: Iterable[DayBalance]) -> float | None:
    """Average the deficit over days with logged meals only.

    Returns None when no day in the window has any logged entry.
    """
    logged = [balance.deficit_kcal for balance in balances if balance.has_entries]
    if not logged:
        return None
    return sum(logged) / len(logged)


def classify_safety(target_deficit_kcal: float) -> SafetyTier:
    """Classify a target daily deficit; advisory only."""
    for lower, tier in _SAFETY_THRESHOLDS:
        if target_deficit_kcal >= lower:
            return tier
    return SafetyTier.MINIMAL


def deficit_status(deficit_kcal: float) -> str:
    """Return "deficit", "surplus" or "maintenance" by sign."""
    if deficit_kcal > 0:
        return "deficit"
    if deficit_kcal < 0:
        return "surplus"
    return "maintenance"
