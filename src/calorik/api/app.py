"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, date, datetime
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from calorik.api.schemas import (
    FoodItemUpdate,
    FoodLogRequest,
    PresetLogRequest,
    ProfileCreate,
    ProfileUpdate,
    TextEstimateRequest,
    WeightIn,
)
from calorik.app_logging import configure_logging
from calorik.containers import AppContainer
from calorik.domain.errors import (
    EstimationError,
    FoodItemNotFoundError,
    InvalidProfileError,
    PresetNotFoundError,
    ProfileNotFoundError,
    StorageSchemaError,
)
from calorik.domain.presets import COMMON_FOODS
from calorik.services.goals import (
    bmi_category,
    calculate_goals,
    daily_deficit,
    round_half_up,
)

NO_FOOD_MESSAGE = "No food recognised"

_ERROR_STATUS: dict[type[Exception], int] = {
    InvalidProfileError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    FoodItemNotFoundError: status.HTTP_404_NOT_FOUND,
    PresetNotFoundError: status.HTTP_404_NOT_FOUND,
    EstimationError: status.HTTP_502_BAD_GATEWAY,
    StorageSchemaError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Calorik", lifespan=lifespan)
    app.state.container = container

    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for error_type in _ERROR_STATUS:
        app.add_exception_handler(error_type, handle_domain_error)

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profiles")
    async def list_profiles(request: Request) -> dict[str, object]:
        """Return every profile."""
        return {"profiles": _container(request).profile_store.list()}

    @app.post("/profiles", status_code=status.HTTP_201_CREATED)
    async def create_profile(payload: ProfileCreate, request: Request) -> object:
        """Create a profile at onboarding."""
        return _container(request).profile_store.create(payload.to_draft())

    @app.get("/profiles/{profile_id}")
    async def get_profile(profile_id: UUID, request: Request) -> object:
        """Return a single profile."""
        return _container(request).profile_store.get(profile_id)

    @app.patch("/profiles/{profile_id}")
    async def update_profile(
        profile_id: UUID, payload: ProfileUpdate, request: Request
    ) -> object:
        """Apply a partial profile update."""
        changes = payload.model_dump(exclude_unset=True)
        return _container(request).profile_store.update(profile_id, changes)

    @app.delete("/profiles/{profile_id}")
    async def delete_profile(
        profile_id: UUID, request: Request, confirm: bool = False
    ) -> dict[str, str]:
        """Delete a profile and its logs once the caller confirms."""
        if not confirm:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Deleting a profile requires confirm=true",
            )
        _container(request).profile_store.delete(profile_id)
        return {"status": "deleted"}

    @app.get("/profiles/{profile_id}/goals")
    async def profile_goals(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return calorie and macro targets with BMI."""
        profile = _container(request).profile_store.get(profile_id)
        goals = calculate_goals(profile)
        return {
            "goals": goals,
            "bmi_category": bmi_category(goals.bmi),
            "daily_deficit": round_half_up(daily_deficit(profile)),
        }

    @app.get("/profiles/{profile_id}/summary")
    async def daily_summary(
        profile_id: UUID, request: Request, day: date | None = None
    ) -> object:
        """Return a day's intake against goals."""
        state = _container(request)
        profile = state.profile_store.get(profile_id)
        return state.progress_service.daily_summary(profile, day or _today())

    @app.get("/profiles/{profile_id}/week")
    async def week_summary(
        profile_id: UUID, request: Request, day: date | None = None
    ) -> object:
        """Return the week containing a day."""
        state = _container(request)
        profile = state.profile_store.get(profile_id)
        return state.progress_service.week_summary(profile, day or _today())

    @app.get("/profiles/{profile_id}/trend")
    async def trend(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return weight and calorie intake per date."""
        state = _container(request)
        profile = state.profile_store.get(profile_id)
        return {"points": state.progress_service.trend(profile)}

    @app.get("/profiles/{profile_id}/progress")
    async def weight_progress(profile_id: UUID, request: Request) -> object:
        """Return progress toward the target weight."""
        state = _container(request)
        profile = state.profile_store.get(profile_id)
        return state.progress_service.weight_progress(profile)

    @app.get("/profiles/{profile_id}/foods")
    async def list_foods(
        profile_id: UUID, request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return a day's food log, newest first."""
        state = _container(request)
        state.profile_store.get(profile_id)
        resolved_day = day or _today()
        return {
            "day": resolved_day,
            "items": state.food_log.list_for_date(profile_id, resolved_day),
        }

    @app.post("/profiles/{profile_id}/foods", status_code=status.HTTP_201_CREATED)
    async def log_foods(
        profile_id: UUID, payload: FoodLogRequest, request: Request
    ) -> dict[str, object]:
        """Append manually entered or estimated items."""
        state = _container(request)
        state.profile_store.get(profile_id)
        items = [item.to_new_item() for item in payload.items]
        created = state.food_log.append(profile_id, payload.day or _today(), items)
        return {"items": created}

    @app.post(
        "/profiles/{profile_id}/foods/presets", status_code=status.HTTP_201_CREATED
    )
    async def log_presets(
        profile_id: UUID, payload: PresetLogRequest, request: Request
    ) -> dict[str, object]:
        """Append preset foods by name."""
        state = _container(request)
        state.profile_store.get(profile_id)
        created = state.food_log.log_presets(
            profile_id, payload.day or _today(), payload.names
        )
        return {"items": created}

    @app.patch("/profiles/{profile_id}/foods/{item_id}")
    async def update_food(
        profile_id: UUID, item_id: UUID, payload: FoodItemUpdate, request: Request
    ) -> object:
        """Edit a logged item's name or nutrition."""
        state = _container(request)
        state.profile_store.get(profile_id)
        existing = state.food_log.get(profile_id, item_id)
        edited = replace(existing, **payload.model_dump(exclude_none=True))
        return state.food_log.update(profile_id, edited)

    @app.delete("/profiles/{profile_id}/foods/{item_id}")
    async def delete_food(
        profile_id: UUID, item_id: UUID, request: Request
    ) -> dict[str, str]:
        """Remove a logged item."""
        state = _container(request)
        state.profile_store.get(profile_id)
        state.food_log.remove(profile_id, item_id)
        return {"status": "deleted"}

    @app.get("/presets")
    async def list_presets() -> dict[str, object]:
        """Return the common foods available for quick add."""
        return {"presets": list(COMMON_FOODS)}

    @app.get("/profiles/{profile_id}/weights")
    async def list_weights(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return the weight series, oldest first."""
        entries = _container(request).profile_service.list_weights(profile_id)
        return {"entries": entries}

    @app.put("/profiles/{profile_id}/weights/{day}")
    async def record_weight(
        profile_id: UUID, day: date, payload: WeightIn, request: Request
    ) -> object:
        """Record or overwrite a day's weight."""
        return _container(request).profile_service.record_weight(
            profile_id, day, payload.weight_kg
        )

    @app.post("/estimate/text")
    async def estimate_text(
        payload: TextEstimateRequest, request: Request
    ) -> dict[str, object]:
        """Estimate nutrition for a free-text meal description."""
        service = _container(request).estimation_service
        item = await service.from_text(payload.description)
        if item is None:
            return {"item": None, "detail": NO_FOOD_MESSAGE}
        return {"item": item}

    @app.post("/estimate/image")
    async def estimate_image(request: Request) -> dict[str, object]:
        """Estimate nutrition for food items in an uploaded image body."""
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Request body must contain image bytes",
            )
        service = _container(request).estimation_service
        items = await service.from_image(image_bytes)
        if not items:
            return {"items": [], "detail": NO_FOOD_MESSAGE}
        return {"items": items}

    return app


def _status_for(exc: Exception) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _today() -> date:
    return datetime.now(tz=UTC).date()
