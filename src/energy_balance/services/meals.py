"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from energy_balance.domain.analysis import NutritionEstimate
from energy_balance.domain.meals import MealEntry, MealSource

_logger = logging.getLogger(__name__)


class MealEntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return entries logged in [start, end), ordered by time."""

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Persist a new meal entry."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry and return True when it existed."""


@dataclass
class MealLogService:
    """Service that creates, lists and deletes meal entries."""

    repository: MealEntryRepository

    def quick_add(  # noqa: PLR0913
        self,
        user_id: UUID,
        calories: float,
        protein_g: float = 0.0,
        carbs_g: float = 0.0,
        fat_g: float = 0.0,
        name: str | None = None,
        logged_at: datetime | None = None,
    ) -> MealEntry:
        """Log a manually entered meal."""
        entry = MealEntry(
            id=uuid4(),
            logged_at=logged_at or datetime.now(tz=UTC),
            calories=calories,
            protein_g=protein_g,
            carbs_g=carbs_g,
            fat_g=fat_g,
            source=MealSource.MANUAL_QUICK_ADD,
            name=name,
        )
        self.repository.add_entry(user_id, entry)
        return entry

    def log_estimate(
        self,
        user_id: UUID,
        estimate: NutritionEstimate,
        source: MealSource,
        logged_at: datetime | None = None,
    ) -> MealEntry:
        """Log a meal from an analyzer estimate."""
        entry = MealEntry(
            id=uuid4(),
            logged_at=logged_at or datetime.now(tz=UTC),
            calories=estimate.calories,
            protein_g=estimate.protein_g,
            carbs_g=estimate.carbs_g,
            fat_g=estimate.fat_g,
            fiber_g=estimate.fiber_g,
            sugar_g=estimate.sugar_g,
            sodium_mg=estimate.sodium_mg,
            water_ml=estimate.water_ml,
            source=source,
            name=estimate.name,
        )
        self.repository.add_entry(user_id, entry)
        return entry

    def list_day(self, user_id: UUID, day: date, timezone_name: str) -> list[MealEntry]:
        """Return entries logged on a local calendar day."""
        start, end = day_bounds(day, timezone_name)
        return self.repository.list_entries(user_id, start, end)

    def list_range(
        self, user_id: UUID, first_day: date, last_day: date, timezone_name: str
    ) -> list[MealEntry]:
        """Return entries logged from ``first_day`` through ``last_day``."""
        start, _ = day_bounds(first_day, timezone_name)
        _, end = day_bounds(last_day, timezone_name)
        return self.repository.list_entries(user_id, start, end)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete a logged entry."""
        deleted = self.repository.delete_entry(user_id, entry_id)
        if not deleted:
            _logger.info("Meal entry %s not found for deletion", entry_id)
        return deleted


def day_bounds(day: date, timezone_name: str) -> tuple[datetime, datetime]:
    """Return UTC bounds of a local calendar day."""
    tz = ZoneInfo(timezone_name)
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(UTC), end.astimezone(UTC)
