"""Per-user, per-day food log storage."""

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from calorik.domain.errors import FoodItemNotFoundError, PresetNotFoundError
from calorik.domain.foods import FoodItem, NewFoodItem
from calorik.domain.presets import find_preset
from calorik.services.records import as_utc, food_from_record, food_to_record
from calorik.services.storage import KeyValueStore, food_log_key


@dataclass
class FoodLogStore:
    """Food entries partitioned by user and day."""

    store: KeyValueStore

    def append(
        self, user_id: UUID, day: date, items: list[NewFoodItem]
    ) -> list[FoodItem]:
        """Assign ids and timestamps to new items and add them to a day."""
        now = datetime.now(tz=UTC)
        created = [
            FoodItem(
                id=uuid4(),
                name=item.name,
                calories=item.calories,
                protein=item.protein,
                carbs=item.carbs,
                fat=item.fat,
                timestamp=as_utc(item.timestamp) if item.timestamp else now,
            )
            for item in items
        ]
        if not created:
            return []
        log = self._load(user_id)
        log.setdefault(day.isoformat(), []).extend(
            food_to_record(item) for item in created
        )
        self._save(user_id, log)
        return created

    def log_presets(
        self, user_id: UUID, day: date, names: list[str]
    ) -> list[FoodItem]:
        """Append preset foods selected by name."""
        items = []
        for name in names:
            preset = find_preset(name)
            if preset is None:
                raise PresetNotFoundError(f"Unknown preset food: {name}")
            items.append(preset.to_new_item())
        return self.append(user_id, day, items)

    def remove(self, user_id: UUID, item_id: UUID) -> None:
        """Delete a single food item."""
        log = self._load(user_id)
        day_key, index = _locate(log, item_id)
        del log[day_key][index]
        if not log[day_key]:
            del log[day_key]
        self._save(user_id, log)

    def update(self, user_id: UUID, item: FoodItem) -> FoodItem:
        """Replace the stored nutrition fields of an existing item."""
        log = self._load(user_id)
        day_key, index = _locate(log, item.id)
        existing = food_from_record(log[day_key][index])
        updated = replace(
            existing,
            name=item.name,
            calories=item.calories,
            protein=item.protein,
            carbs=item.carbs,
            fat=item.fat,
        )
        log[day_key][index] = food_to_record(updated)
        self._save(user_id, log)
        return updated

    def get(self, user_id: UUID, item_id: UUID) -> FoodItem:
        """Return a single food item."""
        log = self._load(user_id)
        day_key, index = _locate(log, item_id)
        return food_from_record(log[day_key][index])

    def list_for_date(self, user_id: UUID, day: date) -> list[FoodItem]:
        """Return a day's items, newest first."""
        records = self._load(user_id).get(day.isoformat(), [])
        items = [food_from_record(record) for record in records]
        return sorted(items, key=lambda item: item.timestamp, reverse=True)

    def list_all(self, user_id: UUID) -> dict[date, list[FoodItem]]:
        """Return every logged item grouped by day."""
        return {
            date.fromisoformat(day_key): [food_from_record(r) for r in records]
            for day_key, records in self._load(user_id).items()
        }

    def delete_all(self, user_id: UUID) -> None:
        """Drop the user's whole food log."""
        self.store.delete(food_log_key(user_id))

    def _load(self, user_id: UUID) -> dict[str, list[dict[str, object]]]:
        raw = self.store.get(food_log_key(user_id))
        if not isinstance(raw, dict):
            return {}
        return {day_key: list(records) for day_key, records in raw.items()}

    def _save(self, user_id: UUID, log: dict[str, list[dict[str, object]]]) -> None:
        self.store.set(food_log_key(user_id), log)


def _locate(
    log: dict[str, list[dict[str, object]]], item_id: UUID
) -> tuple[str, int]:
    wanted = str(item_id)
    for day_key, records in log.items():
        for index, record in enumerate(records):
            if record.get("id") == wanted:
                return day_key, index
    raise FoodItemNotFoundError(f"Food item {item_id} not found")
