"""User settings service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from energy_balance.domain.goals import GoalParameters

_logger = logging.getLogger(__name__)


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""

    def get_goal_parameters(self, user_id: UUID) -> GoalParameters | None:
        """Return the user's stored goal parameters if set."""

    def set_goal_parameters(self, user_id: UUID, params: GoalParameters) -> None:
        """Persist the user's goal parameters."""


def is_known_timezone(timezone: str) -> bool:
    """Return True when the IANA timezone name can be loaded."""
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the default if unset or unknown."""
        timezone = self.repository.get_timezone(user_id)
        if not timezone:
            return self.default_timezone
        if not is_known_timezone(timezone):
            _logger.warning(
                "Unknown timezone %r stored for user %s, using %s",
                timezone,
                user_id,
                self.default_timezone,
            )
            return self.default_timezone
        return timezone

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        self.repository.set_timezone(user_id, timezone)

    def get_goal_parameters(self, user_id: UUID) -> GoalParameters:
        """Return stored goal parameters or the suggested defaults."""
        try:
            params = self.repository.get_goal_parameters(user_id)
        except ValueError as exc:
            _logger.warning("Invalid goal parameters for user %s: %s", user_id, exc)
            return GoalParameters()
        return params or GoalParameters()

    def set_goal_parameters(self, user_id: UUID, params: GoalParameters) -> None:
        """Persist goal parameters chosen by the user."""
        self.repository.set_goal_parameters(user_id, params)
