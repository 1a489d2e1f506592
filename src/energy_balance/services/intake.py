"""Folding meal entries into daily intake totals."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, tzinfo

from energy_balance.domain.meals import IntakeTotals, MacroBreakdown, MealEntry


def local_day(logged_at: datetime, tz: tzinfo) -> date:
    """Return the calendar day of a timestamp in the given timezone."""
    if logged_at.tzinfo is None:
        logged_at = logged_at.replace(tzinfo=UTC)
    return logged_at.astimezone(tz).date()


def aggregate(entries: Iterable[MealEntry], day: date, tz: tzinfo) -> IntakeTotals:
    """Sum every entry logged on ``day`` in the caller's timezone."""
    total = IntakeTotals(day=day)
    for entry in entries:
        if local_day(entry.logged_at, tz) != day:
            continue
        total = _add(total, entry)
    return total


def aggregate_days(
    entries: Iterable[MealEntry], days: Iterable[date], tz: tzinfo
) -> dict[date, IntakeTotals]:
    """Sum entries per requested day in a single pass."""
    totals = {day: IntakeTotals(day=day) for day in days}
    for entry in entries:
        day = local_day(entry.logged_at, tz)
        current = totals.get(day)
        if current is None:
            continue
        totals[day] = _add(current, entry)
    return totals


def macro_breakdown(totals: IntakeTotals) -> MacroBreakdown | None:
    """Return the share of each macro by grams, or None without macros."""
    macro_grams = totals.protein_g + totals.carbs_g + totals.fat_g
    if macro_grams <= 0:
        return None
    return MacroBreakdown(
        protein_pct=int(totals.protein_g / macro_grams * 100),
        carbs_pct=int(totals.carbs_g / macro_grams * 100),
        fat_pct=int(totals.fat_g / macro_grams * 100),
    )


def _add(total: IntakeTotals, entry: MealEntry) -> IntakeTotals:
    return IntakeTotals(
        day=total.day,
        calories=total.calories + entry.calories,
        protein_g=total.protein_g + entry.protein_g,
        carbs_g=total.carbs_g + entry.carbs_g,
        fat_g=total.fat_g + entry.fat_g,
        fiber_g=total.fiber_g + entry.fiber_g,
        sugar_g=total.sugar_g + entry.sugar_g,
        sodium_mg=total.sodium_mg + entry.sodium_mg,
        water_ml=total.water_ml + entry.water_ml,
        entry_count=total.entry_count + 1,
    )
