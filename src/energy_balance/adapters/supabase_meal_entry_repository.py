"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from energy_balance.domain.meals import MealEntry, MealSource
from energy_balance.services.meals import MealEntryRepository

_COLUMNS = (
    "id, logged_at, name, source, calories, protein_g, carbs_g, fat_g, "
    "fiber_g, sugar_g, sodium_mg, water_ml"
)


@dataclass
class SupabaseMealEntryRepository(MealEntryRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        """Return entries in the time range."""
        response = (
            self.client.table("meal_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        """Insert a meal entry row."""
        response = (
            self.client.table("meal_entries")
            .insert(
                {
                    "id": str(entry.id),
                    "user_id": str(user_id),
                    "logged_at": entry.logged_at.isoformat(),
                    "name": entry.name,
                    "source": entry.source.value,
                    "calories": entry.calories,
                    "protein_g": entry.protein_g,
                    "carbs_g": entry.carbs_g,
                    "fat_g": entry.fat_g,
                    "fiber_g": entry.fiber_g,
                    "sugar_g": entry.sugar_g,
                    "sodium_mg": entry.sodium_mg,
                    "water_ml": entry.water_ml,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal entry")

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry owned by the user."""
        response = (
            self.client.table("meal_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> MealEntry:
    return MealEntry(
        id=UUID(str(row["id"])),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        name=row.get("name"),
        source=MealSource(row.get("source") or MealSource.MANUAL_QUICK_ADD.value),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        fiber_g=float(row.get("fiber_g") or 0.0),
        sugar_g=float(row.get("sugar_g") or 0.0),
        sodium_mg=float(row.get("sodium_mg") or 0.0),
        water_ml=float(row.get("water_ml") or 0.0),
    )
