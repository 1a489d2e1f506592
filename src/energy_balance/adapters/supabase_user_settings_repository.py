"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from energy_balance.domain.goals import GoalDirection, GoalParameters
from energy_balance.services.user_settings import UserSettingsRepository

_GOAL_COLUMNS = (
    "goal_direction, weekly_rate_kg, explicit_calorie_goal, "
    "explicit_deficit_goal, target_weight_kg"
)


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        response = (
            self.client.table("user_settings")
            .select("timezone")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("timezone")

    def set_timezone(self, user_id: UUID, timezone_name: str) -> None:
        """Update the user's timezone."""
        self._upsert(user_id, {"timezone": timezone_name})

    def get_goal_parameters(self, user_id: UUID) -> GoalParameters | None:
        """Return stored goal parameters for a user."""
        response = (
            self.client.table("user_settings")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("goal_direction"):
            return None
        return GoalParameters(
            direction=GoalDirection(row["goal_direction"]),
            weekly_rate_kg=float(row.get("weekly_rate_kg") or 0.5),
            explicit_calorie_goal=_optional_float(row.get("explicit_calorie_goal")),
            explicit_deficit_goal=_optional_float(row.get("explicit_deficit_goal")),
            target_weight_kg=_optional_float(row.get("target_weight_kg")),
        )

    def set_goal_parameters(self, user_id: UUID, params: GoalParameters) -> None:
        """Persist goal parameters for a user."""
        self._upsert(
            user_id,
            {
                "goal_direction": params.direction.value,
                "weekly_rate_kg": params.weekly_rate_kg,
                "explicit_calorie_goal": params.explicit_calorie_goal,
                "explicit_deficit_goal": params.explicit_deficit_goal,
                "target_weight_kg": params.target_weight_kg,
            },
        )

    def _upsert(self, user_id: UUID, values: dict[str, object]) -> None:
        self.client.table("user_settings").upsert(
            {
                "user_id": str(user_id),
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
