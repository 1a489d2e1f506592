"""Supabase repository for body profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from energy_balance.domain.profile import BiologicalSex, ProfileReading
from energy_balance.services.profile import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for measured and manual body attributes."""

    client: Client

    def get_profile_reading(self, user_id: UUID) -> ProfileReading | None:
        """Return the latest attributes synced from the health provider."""
        return self._get(user_id, "measured")

    def get_manual_overrides(self, user_id: UUID) -> ProfileReading | None:
        """Return attributes the user typed in."""
        return self._get(user_id, "manual")

    def set_manual_overrides(self, user_id: UUID, reading: ProfileReading) -> None:
        """Replace the attributes the user typed in."""
        self.client.table("body_profiles").upsert(
            {
                "user_id": str(user_id),
                "origin": "manual",
                "weight_kg": reading.weight_kg,
                "height_cm": reading.height_cm,
                "age_years": reading.age_years,
                "sex": reading.sex.value if reading.sex else None,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,origin",
        ).execute()

    def _get(self, user_id: UUID, origin: str) -> ProfileReading | None:
        response = (
            self.client.table("body_profiles")
            .select("weight_kg, height_cm, age_years, sex")
            .eq("user_id", str(user_id))
            .eq("origin", origin)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> ProfileReading:
    sex_raw = row.get("sex")
    return ProfileReading(
        weight_kg=_optional_float(row.get("weight_kg")),
        height_cm=_optional_float(row.get("height_cm")),
        age_years=_optional_float(row.get("age_years")),
        sex=BiologicalSex(sex_raw) if sex_raw in {"male", "female"} else None,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
