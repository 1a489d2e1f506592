"""Supabase repository for daily active energy."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from energy_balance.domain.activity import ActiveEnergySample
from energy_balance.services.energy import ActiveEnergyRepository


@dataclass
class SupabaseActiveEnergyRepository(ActiveEnergyRepository):
    """Supabase implementation over the synced daily health metrics."""

    client: Client

    def list_samples(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> list[ActiveEnergySample]:
        """Return one sample per day that has active calories recorded."""
        response = (
            self.client.table("daily_health_metrics")
            .select("day, active_kcal")
            .eq("user_id", str(user_id))
            .gte("day", first_day.isoformat())
            .lte("day", last_day.isoformat())
            .order("day", desc=False)
            .execute()
        )
        samples: dict[date, ActiveEnergySample] = {}
        for row in response.data or []:
            if row.get("active_kcal") is None:
                continue
            day = date.fromisoformat(str(row["day"]))
            samples[day] = ActiveEnergySample(
                day=day, active_kcal=float(row["active_kcal"])
            )
        return list(samples.values())

    def count_workout_days(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> int | None:
        """Return days in the range with at least one workout."""
        response = (
            self.client.table("daily_health_metrics")
            .select("day, workout_count")
            .eq("user_id", str(user_id))
            .gte("day", first_day.isoformat())
            .lte("day", last_day.isoformat())
            .execute()
        )
        rows = response.data or []
        if not rows:
            return None
        return sum(1 for row in rows if int(row.get("workout_count") or 0) > 0)
