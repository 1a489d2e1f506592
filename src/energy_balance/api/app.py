"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from energy_balance.api.models import (
    AnalyzeRequest,
    GoalParametersPayload,
    ProfileUpdateRequest,
    QuickAddRequest,
    SnapshotRequest,
    TimezoneRequest,
)
from energy_balance.app_logging import configure_logging
from energy_balance.containers import AppContainer
from energy_balance.domain.analysis import NutritionEstimate
from energy_balance.domain.meals import MealEntry, MealSource
from energy_balance.domain.profile import InvalidProfileError, Profile
from energy_balance.services.engine import compute_snapshot
from energy_balance.services.intake import aggregate, macro_breakdown
from energy_balance.services.profile import (
    bmi_category,
    body_mass_index,
    resolve_profile,
)

HTTP_422_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InvalidProfileError)
    async def invalid_profile_handler(
        request: Request, exc: InvalidProfileError
    ) -> JSONResponse:
        logger.warning("Invalid profile on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE,
            content={
                "detail": str(exc),
                "field": exc.field_name,
                "action": "profile_setup",
            },
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/snapshot")
    async def snapshot(payload: SnapshotRequest) -> dict[str, object]:
        """Compute a snapshot from inputs supplied in the request."""
        entries = [entry.to_domain() for entry in payload.entries]
        result = compute_snapshot(
            resolve_profile(payload.profile.to_domain()),
            payload.goals.to_domain(),
            entries,
            entries,
            [sample.to_domain() for sample in payload.samples],
            today=payload.today,
            tz=ZoneInfo(payload.timezone),
            workout_days=payload.workout_days,
        )
        return result.as_dict()

    @app.get("/users/{user_id}/snapshot")
    async def user_snapshot(user_id: UUID, request: Request) -> dict[str, object]:
        """Compute today's snapshot from the user's stored data."""
        state_container: AppContainer = request.app.state.container
        result = state_container.energy_balance_service.get_snapshot(user_id)
        return result.as_dict()

    @app.get("/users/{user_id}/goals")
    async def get_goals(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's goal parameters."""
        state_container: AppContainer = request.app.state.container
        params = state_container.user_settings_service.get_goal_parameters(user_id)
        return GoalParametersPayload.from_domain(params).model_dump(mode="json")

    @app.put("/users/{user_id}/goals")
    async def put_goals(
        user_id: UUID, payload: GoalParametersPayload, request: Request
    ) -> dict[str, object]:
        """Replace the user's goal parameters."""
        state_container: AppContainer = request.app.state.container
        state_container.user_settings_service.set_goal_parameters(
            user_id, payload.to_domain()
        )
        return payload.model_dump(mode="json")

    @app.get("/users/{user_id}/meals")
    async def list_meals(
        user_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return a day's entries and totals in the user's timezone."""
        state_container: AppContainer = request.app.state.container
        timezone_name = state_container.user_settings_service.get_timezone(user_id)
        tz = ZoneInfo(timezone_name)
        resolved_day = day or datetime.now(tz=tz).date()
        entries = state_container.meal_log_service.list_day(
            user_id, resolved_day, timezone_name
        )
        totals = aggregate(entries, resolved_day, tz)
        breakdown = macro_breakdown(totals)
        return {
            "day": resolved_day.isoformat(),
            "entries": [_entry_to_dict(entry) for entry in entries],
            "totals": totals.as_dict(),
            "macro_breakdown": breakdown.label() if breakdown else None,
        }

    @app.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
    async def quick_add(
        user_id: UUID, payload: QuickAddRequest, request: Request
    ) -> dict[str, object]:
        """Log a manually entered meal."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.meal_log_service.quick_add(
            user_id,
            calories=payload.calories,
            protein_g=payload.protein_g,
            carbs_g=payload.carbs_g,
            fat_g=payload.fat_g,
            name=payload.name,
            logged_at=payload.logged_at,
        )
        return _entry_to_dict(entry)

    @app.post("/users/{user_id}/meals/analyze", status_code=status.HTTP_201_CREATED)
    async def analyze_meal(
        user_id: UUID, payload: AnalyzeRequest, request: Request
    ) -> dict[str, object]:
        """Estimate a described meal and log it."""
        state_container: AppContainer = request.app.state.container
        estimate = await state_container.meal_analysis_service.analyze_text(
            payload.description
        )
        return _log_estimate(
            state_container,
            user_id,
            estimate,
            MealSource.AI_DESCRIPTION,
            payload.logged_at,
        )

    @app.post(
        "/users/{user_id}/meals/analyze-image",
        status_code=status.HTTP_201_CREATED,
    )
    async def analyze_meal_image(
        user_id: UUID, image: UploadFile, request: Request
    ) -> dict[str, object]:
        """Estimate a meal photo and log it."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await image.read()
        if not image_bytes:
            raise HTTPException(
                status_code=HTTP_422_UNPROCESSABLE, detail="Image upload is empty"
            )
        estimate = await state_container.meal_analysis_service.analyze_image(
            image_bytes
        )
        return _log_estimate(
            state_container, user_id, estimate, MealSource.AI_IMAGE, None
        )

    @app.delete(
        "/users/{user_id}/meals/{entry_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def delete_meal(user_id: UUID, entry_id: UUID, request: Request) -> None:
        """Delete a logged meal."""
        state_container: AppContainer = request.app.state.container
        if not state_container.meal_log_service.delete_entry(user_id, entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.put("/users/{user_id}/timezone")
    async def put_timezone(
        user_id: UUID, payload: TimezoneRequest, request: Request
    ) -> dict[str, str]:
        """Set the timezone that defines the user's calendar days."""
        state_container: AppContainer = request.app.state.container
        state_container.user_settings_service.set_timezone(user_id, payload.timezone)
        logger.info("Timezone for user %s set to %s", user_id, payload.timezone)
        return {"timezone": payload.timezone}

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the resolved body profile."""
        state_container: AppContainer = request.app.state.container
        return _profile_to_dict(state_container.profile_service.get_profile(user_id))

    @app.put("/users/{user_id}/profile")
    async def put_profile(
        user_id: UUID, payload: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Replace hand-entered body attributes."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.set_manual_overrides(
            user_id, payload.to_domain()
        )
        return _profile_to_dict(profile)

    return app


def _log_estimate(
    container: AppContainer,
    user_id: UUID,
    estimate: NutritionEstimate | None,
    source: MealSource,
    logged_at: datetime | None,
) -> dict[str, object]:
    if estimate is None:
        raise HTTPException(
            status_code=HTTP_422_UNPROCESSABLE,
            detail="Meal analysis returned no result",
        )
    entry = container.meal_log_service.log_estimate(
        user_id, estimate, source=source, logged_at=logged_at
    )
    return {
        "entry": _entry_to_dict(entry),
        "confidence": estimate.confidence,
        "notes": estimate.notes,
    }


def _profile_to_dict(profile: Profile) -> dict[str, object]:
    bmi = body_mass_index(profile)
    return {
        "weight_kg": profile.weight_kg,
        "height_cm": profile.height_cm,
        "age_years": profile.age_years,
        "sex": profile.sex.value,
        "measured_fields": sorted(profile.measured_fields),
        "bmi": bmi,
        "bmi_category": bmi_category(bmi),
    }


def _entry_to_dict(entry: MealEntry) -> dict[str, object]:
    logged_at = entry.logged_at
    if logged_at.tzinfo is None:
        logged_at = logged_at.replace(tzinfo=UTC)
    return {
        "id": str(entry.id),
        "logged_at": logged_at.isoformat(),
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
