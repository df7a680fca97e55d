"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from calorik.config import Settings
from calorik.containers import AppContainer, build_services
from calorik.domain.profiles import (
    ActivityLevel,
    Goal,
    ProfileDraft,
    Sex,
    UserProfile,
)
from calorik.services.estimation import EstimationService, EstimatorClient
from calorik.services.food_log import FoodLogStore
from calorik.services.profiles import ProfileStore
from calorik.services.storage import KeyValueStore
from calorik.services.weight_log import WeightLogStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    data: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        return copy.deepcopy(self.data.get(key))

    def set(self, key: str, value: object) -> None:
        self.data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

    def list_keys(self, prefix: str) -> list[str]:
        return sorted(key for key in self.data if key.startswith(prefix))


@dataclass
class FakeEstimatorClient(EstimatorClient):
    """Fake estimator client returning fixed payloads and recording calls."""

    image_payload: dict[str, object] = field(
        default_factory=lambda: {
            "items": [
                {
                    "name": "rice",
                    "calories": 205,
                    "protein": 4.3,
                    "carbs": 45,
                    "fat": 0.4,
                },
                {
                    "name": "grilled chicken",
                    "calories": 165,
                    "protein": 31,
                    "carbs": 0,
                    "fat": 3.6,
                },
            ]
        }
    )
    text_payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "oatmeal with banana",
            "calories": 320,
            "protein": 9,
            "carbs": 58,
            "fat": 6,
        }
    )
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {"prompt": prompt, "schema": schema, "image_data_url": image_data_url}
        )
        if self.error is not None:
            raise self.error
        if image_data_url is not None:
            return self.image_payload
        return self.text_payload


def make_draft(**overrides: object) -> ProfileDraft:
    values: dict[str, object] = {
        "name": "Dana",
        "sex": Sex.MALE,
        "age": 30,
        "height_cm": 180.0,
        "weight_kg": 90.0,
        "target_weight_kg": 80.0,
        "activity_level": ActivityLevel.MEDIUM,
        "goal": Goal.LOSE,
        "target_duration_weeks": 10,
    }
    values.update(overrides)
    return ProfileDraft(**values)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def food_log(kv_store: InMemoryKeyValueStore) -> FoodLogStore:
    return FoodLogStore(kv_store)


@pytest.fixture
def weight_log(kv_store: InMemoryKeyValueStore) -> WeightLogStore:
    return WeightLogStore(kv_store)


@pytest.fixture
def profile_store(
    kv_store: InMemoryKeyValueStore,
    food_log: FoodLogStore,
    weight_log: WeightLogStore,
) -> ProfileStore:
    return ProfileStore(kv_store, food_log=food_log, weight_log=weight_log)


@pytest.fixture
def profile(profile_store: ProfileStore) -> UserProfile:
    return profile_store.create(make_draft())


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_path=tmp_path / "calorik.json",
    )


@pytest.fixture
def estimator_client() -> FakeEstimatorClient:
    return FakeEstimatorClient()


@pytest.fixture
def container(
    settings: Settings,
    kv_store: InMemoryKeyValueStore,
    estimator_client: FakeEstimatorClient,
) -> AppContainer:
    estimation_service = EstimationService(
        client=estimator_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    return build_services(settings, kv_store, estimation_service)
