"""Conversion between domain objects and persisted JSON records."""

from datetime import UTC, date, datetime
from uuid import UUID

from calorik.domain.foods import FoodItem, WeightEntry
from calorik.domain.profiles import ActivityLevel, Goal, Sex, UserProfile


def profile_to_record(profile: UserProfile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "name": profile.name,
        "avatar": profile.avatar,
        "sex": profile.sex.value,
        "age": profile.age,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "target_weight_kg": profile.target_weight_kg,
        "activity_level": profile.activity_level.value,
        "goal": profile.goal.value,
        "target_duration_weeks": profile.target_duration_weeks,
    }


def profile_from_record(record: dict[str, object]) -> UserProfile:
    weeks = record.get("target_duration_weeks")
    return UserProfile(
        id=UUID(str(record["id"])),
        name=str(record["name"]),
        avatar=record.get("avatar"),
        sex=Sex(record["sex"]),
        age=int(record["age"]),
        height_cm=float(record["height_cm"]),
        weight_kg=float(record["weight_kg"]),
        target_weight_kg=float(record["target_weight_kg"]),
        activity_level=ActivityLevel(record["activity_level"]),
        goal=Goal(record["goal"]),
        target_duration_weeks=int(weeks) if weeks is not None else None,
    )


def food_to_record(item: FoodItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fat": item.fat,
        "timestamp": item.timestamp.isoformat(),
    }


def food_from_record(record: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=UUID(str(record["id"])),
        name=str(record.get("name", "")),
        calories=float(record.get("calories", 0.0)),
        protein=float(record.get("protein", 0.0)),
        carbs=float(record.get("carbs", 0.0)),
        fat=float(record.get("fat", 0.0)),
        timestamp=as_utc(datetime.fromisoformat(str(record["timestamp"]))),
    )


def as_utc(value: datetime) -> datetime:
    """Return a UTC datetime; values without a timezone are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def weight_to_record(entry: WeightEntry) -> dict[str, object]:
    return {"date": entry.date.isoformat(), "weight_kg": entry.weight_kg}


def weight_from_record(record: dict[str, object]) -> WeightEntry:
    return WeightEntry(
        date=date.fromisoformat(str(record["date"])),
        weight_kg=float(record["weight_kg"]),
    )
