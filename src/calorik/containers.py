"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorik.adapters.json_file_store import JsonFileKeyValueStore
from calorik.adapters.openai_estimator_client import OpenAIEstimatorClient
from calorik.adapters.supabase_key_value_store import SupabaseKeyValueStore
from calorik.config import Settings, resolve_storage_backend
from calorik.services.estimation import EstimationService
from calorik.services.food_log import FoodLogStore
from calorik.services.migrations import migrate_store
from calorik.services.profiles import ProfileService, ProfileStore
from calorik.services.progress import ProgressService
from calorik.services.storage import KeyValueStore
from calorik.services.weight_log import WeightLogStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    profile_store: ProfileStore
    food_log: FoodLogStore
    weight_log: WeightLogStore
    profile_service: ProfileService
    progress_service: ProgressService
    estimation_service: EstimationService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by settings."""
    if resolve_storage_backend(settings) == "supabase":
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    return JsonFileKeyValueStore(settings.storage_path)


def build_services(
    settings: Settings, store: KeyValueStore, estimation_service: EstimationService
) -> AppContainer:
    """Wire stores and services around an existing store and estimator."""
    migrate_store(store)
    food_log = FoodLogStore(store)
    weight_log = WeightLogStore(store)
    profile_store = ProfileStore(store, food_log=food_log, weight_log=weight_log)

    async def close_resources() -> None:
        close = getattr(estimation_service.client, "close", None)
        if close is not None:
            await close()

    return AppContainer(
        settings=settings,
        store=store,
        profile_store=profile_store,
        food_log=food_log,
        weight_log=weight_log,
        profile_service=ProfileService(profile_store, weight_log),
        progress_service=ProgressService(food_log, weight_log),
        estimation_service=estimation_service,
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    estimator_client = OpenAIEstimatorClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    estimation_service = EstimationService(
        client=estimator_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        language=resolved_settings.estimation_language,
    )
    return build_services(
        resolved_settings, build_store(resolved_settings), estimation_service
    )
