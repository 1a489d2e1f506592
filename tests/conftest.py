"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

import pytest

from energy_balance.config import Settings
from energy_balance.containers import AppContainer
from energy_balance.domain.activity import ActiveEnergySample
from energy_balance.domain.goals import GoalParameters
from energy_balance.domain.meals import MealEntry
from energy_balance.domain.profile import ProfileReading
from energy_balance.services.analysis import MealAnalysisService, MealAnalyzerClient
from energy_balance.services.energy import ActiveEnergyRepository, EnergyBalanceService
from energy_balance.services.meals import MealEntryRepository, MealLogService
from energy_balance.services.profile import ProfileRepository, ProfileService
from energy_balance.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)


@dataclass
class InMemoryMealEntryRepository(MealEntryRepository):
    """In-memory meal entry repository for tests."""

    entries: dict[UUID, list[MealEntry]] = field(default_factory=dict)

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealEntry]:
        return sorted(
            (
                entry
                for entry in self.entries.get(user_id, [])
                if start <= entry.logged_at < end
            ),
            key=lambda entry: entry.logged_at,
        )

    def add_entry(self, user_id: UUID, entry: MealEntry) -> None:
        self.entries.setdefault(user_id, []).append(entry)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        existing = self.entries.get(user_id, [])
        remaining = [entry for entry in existing if entry.id != entry_id]
        self.entries[user_id] = remaining
        return len(remaining) != len(existing)


@dataclass
class InMemoryActiveEnergyRepository(ActiveEnergyRepository):
    """In-memory active energy repository for tests."""

    samples: dict[UUID, list[ActiveEnergySample]] = field(default_factory=dict)
    workout_days: dict[UUID, int] = field(default_factory=dict)

    def list_samples(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> list[ActiveEnergySample]:
        return [
            sample
            for sample in self.samples.get(user_id, [])
            if first_day <= sample.day <= last_day
        ]

    def count_workout_days(
        self, user_id: UUID, first_day: date, last_day: date
    ) -> int | None:
        return self.workout_days.get(user_id)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    measured: dict[UUID, ProfileReading] = field(default_factory=dict)
    manual: dict[UUID, ProfileReading] = field(default_factory=dict)

    def get_profile_reading(self, user_id: UUID) -> ProfileReading | None:
        return self.measured.get(user_id)

    def get_manual_overrides(self, user_id: UUID) -> ProfileReading | None:
        return self.manual.get(user_id)

    def set_manual_overrides(self, user_id: UUID, reading: ProfileReading) -> None:
        self.manual[user_id] = reading


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)
    goals: dict[UUID, GoalParameters] = field(default_factory=dict)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone

    def get_goal_parameters(self, user_id: UUID) -> GoalParameters | None:
        return self.goals.get(user_id)

    def set_goal_parameters(self, user_id: UUID, params: GoalParameters) -> None:
        self.goals[user_id] = params


@dataclass
class FakeMealAnalyzerClient(MealAnalyzerClient):
    """Fake analyzer returning a canned payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "items": [
                {
                    "name": "Oatmeal with banana",
                    "confidence": 0.8,
                    "calories": 350,
                    "protein_g": 10,
                    "carbs_g": 60,
                    "fat_g": 7,
                    "fiber_g": 8,
                    "sugar_g": 15,
                    "sodium_mg": 120,
                    "water_ml": 200,
                    "notes": None,
                }
            ]
        }
    )
    prompts: list[str] = field(default_factory=list)
    image_urls: list[str | None] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        self.image_urls.append(image_data_url)
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealEntryRepository:
    return InMemoryMealEntryRepository()


@pytest.fixture
def activity_repository() -> InMemoryActiveEnergyRepository:
    return InMemoryActiveEnergyRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def analyzer_client() -> FakeMealAnalyzerClient:
    return FakeMealAnalyzerClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_repository: InMemoryMealEntryRepository,
    activity_repository: InMemoryActiveEnergyRepository,
    profile_repository: InMemoryProfileRepository,
    settings_repository: InMemoryUserSettingsRepository,
    analyzer_client: FakeMealAnalyzerClient,
) -> AppContainer:
    user_settings_service = UserSettingsService(settings_repository)
    profile_service = ProfileService(profile_repository)
    meal_log_service = MealLogService(meal_repository)
    meal_analysis_service = MealAnalysisService(
        client=analyzer_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    energy_balance_service = EnergyBalanceService(
        profile_service=profile_service,
        activity_repository=activity_repository,
        meal_log_service=meal_log_service,
        user_settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_settings_service=user_settings_service,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        meal_analysis_service=meal_analysis_service,
        energy_balance_service=energy_balance_service,
        close_resources=close_resources,
    )
