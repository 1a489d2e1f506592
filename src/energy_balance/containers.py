"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from energy_balance.adapters.openai_meal_analyzer import OpenAIMealAnalyzer
from energy_balance.adapters.supabase_active_energy_repository import (
    SupabaseActiveEnergyRepository,
)
from energy_balance.adapters.supabase_meal_entry_repository import (
    SupabaseMealEntryRepository,
)
from energy_balance.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from energy_balance.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from energy_balance.config import Settings
from energy_balance.services.analysis import MealAnalysisService
from energy_balance.services.energy import EnergyBalanceService
from energy_balance.services.meals import MealLogService
from energy_balance.services.profile import ProfileService
from energy_balance.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_settings_service: UserSettingsService
    profile_service: ProfileService
    meal_log_service: MealLogService
    meal_analysis_service: MealAnalysisService
    energy_balance_service: EnergyBalanceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_settings_service = UserSettingsService(
        SupabaseUserSettingsRepository(supabase_client),
        default_timezone=resolved_settings.default_timezone,
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    meal_log_service = MealLogService(SupabaseMealEntryRepository(supabase_client))
    analyzer = OpenAIMealAnalyzer.create(resolved_settings.openai_api_key)
    meal_analysis_service = MealAnalysisService(
        client=analyzer,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    energy_balance_service = EnergyBalanceService(
        profile_service=profile_service,
        activity_repository=SupabaseActiveEnergyRepository(supabase_client),
        meal_log_service=meal_log_service,
        user_settings_service=user_settings_service,
    )

    async def close_resources() -> None:
        await analyzer.close()

    return AppContainer(
        settings=resolved_settings,
        user_settings_service=user_settings_service,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        meal_analysis_service=meal_analysis_service,
        energy_balance_service=energy_balance_service,
        close_resources=close_resources,
    )
