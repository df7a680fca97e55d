"""Tests for progress aggregates."""

from datetime import UTC, date, datetime

import pytest

from calorik.domain.foods import NewFoodItem
from calorik.domain.profiles import Goal, UserProfile
from calorik.services.food_log import FoodLogStore
from calorik.services.profiles import ProfileStore
from calorik.services.progress import ProgressService
from calorik.services.weight_log import WeightLogStore
from tests.conftest import make_draft


@pytest.fixture
def progress_service(
    food_log: FoodLogStore, weight_log: WeightLogStore
) -> ProgressService:
    return ProgressService(food_log, weight_log)


def _food(name: str, calories: float, day: date, hour: int = 12) -> NewFoodItem:
    return NewFoodItem(
        name=name,
        calories=calories,
        protein=10,
        carbs=20,
        fat=5,
        timestamp=datetime(day.year, day.month, day.day, hour, tzinfo=UTC),
    )


def test_daily_summary_subtracts_consumed_from_goals(
    progress_service: ProgressService, food_log: FoodLogStore, profile: UserProfile
) -> None:
    day = date(2024, 5, 1)
    food_log.append(profile.id, day, [_food("a", 500, day, 8), _food("b", 314, day, 9)])
    food_log.append(profile.id, date(2024, 5, 2), [_food("c", 999, date(2024, 5, 2))])

    summary = progress_service.daily_summary(profile, day)

    assert summary.goals.calories == 1814
    assert summary.consumed.calories == 814
    assert summary.consumed.protein_g == 20
    assert summary.remaining_calories == 1000
    assert summary.remaining_protein_g == 136 - 20
    assert [item.name for item in summary.items] == ["b", "a"]


def test_week_summary_starts_on_monday(
    progress_service: ProgressService, food_log: FoodLogStore, profile: UserProfile
) -> None:
    wednesday = date(2024, 5, 1)
    monday = date(2024, 4, 29)
    food_log.append(profile.id, monday, [_food("a", 700, monday)])
    food_log.append(profile.id, wednesday, [_food("b", 700, wednesday)])

    week = progress_service.week_summary(profile, wednesday)

    assert week.start == monday
    assert len(week.daily) == 7
    assert week.daily[0].calories == 700
    assert week.daily[2].calories == 700
    assert week.avg_calories == pytest.approx(200)
    assert week.calorie_goal == 1814


def test_trend_merges_weights_and_calories(
    progress_service: ProgressService,
    food_log: FoodLogStore,
    weight_log: WeightLogStore,
    profile: UserProfile,
) -> None:
    weight_log.upsert(profile.id, date(2024, 5, 1), 90.0)
    weight_log.upsert(profile.id, date(2024, 5, 3), 89.2)
    food_log.append(profile.id, date(2024, 5, 2), [_food("a", 400, date(2024, 5, 2))])
    food_log.append(profile.id, date(2024, 5, 3), [_food("b", 600, date(2024, 5, 3))])

    points = progress_service.trend(profile)

    assert [(p.day.day, p.weight_kg, p.calories) for p in points] == [
        (1, 90.0, None),
        (2, None, 400),
        (3, 89.2, 600),
    ]


def test_weight_progress_for_loss(
    progress_service: ProgressService,
    weight_log: WeightLogStore,
    profile_store: ProfileStore,
    profile: UserProfile,
) -> None:
    weight_log.upsert(profile.id, date(2024, 4, 1), 94.0)
    weight_log.upsert(profile.id, date(2024, 5, 1), 90.0)

    progress = progress_service.weight_progress(profile)

    assert progress.starting_weight_kg == 94.0
    assert progress.weight_to_go_kg == 10.0
    assert progress.progress_percent == pytest.approx(4 / 14 * 100)
    assert progress.weight_change_kg == -4.0


def test_weight_progress_for_gain_is_clamped(
    progress_service: ProgressService,
    weight_log: WeightLogStore,
    profile_store: ProfileStore,
) -> None:
    profile = profile_store.create(
        make_draft(
            goal=Goal.GAIN,
            weight_kg=75.0,
            target_weight_kg=72.0,
            target_duration_weeks=None,
        )
    )
    weight_log.upsert(profile.id, date(2024, 4, 1), 70.0)

    progress = progress_service.weight_progress(profile)

    assert progress.weight_to_go_kg == -3.0
    assert progress.progress_percent == 100.0


def test_weight_progress_without_entries_uses_current_weight(
    progress_service: ProgressService, profile: UserProfile
) -> None:
    progress = progress_service.weight_progress(profile)

    assert progress.starting_weight_kg == profile.weight_kg
    assert progress.progress_percent == 0.0
    assert progress.weight_change_kg == 0.0
