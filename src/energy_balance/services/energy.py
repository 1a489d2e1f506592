"""Energy balance service resolving stored inputs for the engine."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from energy_balance.domain.activity import ActiveEnergySample
from energy_balance.domain.snapshot import ComputedSnapshot
from energy_balance.services.deficit import trailing_window
from energy_balance.services.engine import compute_snapshot
from energy_balance.services.meals import MealLogService
from energy_balance.services.profile import ProfileService
from energy_balance.services.user_settings import UserSettingsService

_logger = logging.getLogger(__name__)


class ActiveEnergyRepository(Protocol):
    """Source of measured daily active calories."""

    def list_samples(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> list[ActiveEnergySample]:
        """Return at most one sample per day in the inclusive range."""

    def count_workout_days(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> int | None:
        """Return days with a recorded workout, or None if unknown."""


@dataclass
class EnergyBalanceService:
    """Service that loads a user's data and computes their snapshot."""

    profile_service: ProfileService
    activity_repository: ActiveEnergyRepository
    meal_log_service: MealLogService
    user_settings_service: UserSettingsService

    def get_snapshot(
        self, user_id: UUID, now: datetime | None = None
    ) -> ComputedSnapshot:
        """Return today's snapshot in the user's timezone."""
        timezone_name = self.user_settings_service.get_timezone(user_id)
        tz = ZoneInfo(timezone_name)
        today = (now or datetime.now(tz=UTC)).astimezone(tz).date()
        window = trailing_window(today)

        profile = self.profile_service.get_profile(user_id)
        params = self.user_settings_service.get_goal_parameters(user_id)
        todays_entries = self.meal_log_service.list_day(user_id, today, timezone_name)
        trailing_entries = self.meal_log_service.list_range(
            user_id, window[0], window[-1], timezone_name
        )
        samples = self.activity_repository.list_samples(user_id, window[0], today)
        workout_days = self.activity_repository.count_workout_days(
            user_id, window[0], window[-1]
        )
        _logger.info(
            "Computing snapshot for user %s: entries=%s trailing=%s samples=%s",
            user_id,
            len(todays_entries),
            len(trailing_entries),
            len(samples),
        )
        return compute_snapshot(
            profile,
            params,
            todays_entries,
            trailing_entries,
            samples,
            today=today,
            tz=tz,
            workout_days=workout_days,
        )
