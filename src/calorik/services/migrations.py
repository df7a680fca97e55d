"""Upgrade persisted records to the current storage schema.

Unversioned stores come from earlier releases that kept camelCase profile
records. The oldest of them wrote one food-log key per profile and day
(``calorik-foodlog-<id>-<YYYY-MM-DD>``); later ones embedded ``foodLog`` and
``weightLog`` arrays inside each profile record. Both layouts are rewritten to
the canonical one: snake_case profiles, one food-log key per profile mapping
days to items, and one weight-log key per profile.
"""

import logging
import re
from datetime import UTC, date, datetime, time
from uuid import NAMESPACE_URL, UUID, uuid5

from calorik.domain.errors import StorageSchemaError
from calorik.domain.profiles import ActivityLevel, Goal, Sex
from calorik.services.storage import (
    CURRENT_SCHEMA_VERSION,
    FOOD_LOG_PREFIX,
    PROFILES_KEY,
    SCHEMA_VERSION_KEY,
    KeyValueStore,
    food_log_key,
    weight_log_key,
)

_logger = logging.getLogger(__name__)

_LEGACY_NAMESPACE = uuid5(NAMESPACE_URL, "calorik:legacy")
_DAY_KEY_PATTERN = re.compile(
    rf"^{re.escape(FOOD_LOG_PREFIX)}(?P<profile>.+)-(?P<day>\d{{4}}-\d{{2}}-\d{{2}})$"
)

# canonical name -> accepted legacy names, canonical first
_PROFILE_FIELDS: dict[str, tuple[str, ...]] = {
    "name": ("name",),
    "sex": ("sex", "gender"),
    "age": ("age",),
    "height_cm": ("height_cm", "height"),
    "weight_kg": ("weight_kg", "weight"),
    "target_weight_kg": ("target_weight_kg", "targetWeight"),
    "activity_level": ("activity_level", "activityLevel"),
    "goal": ("goal",),
}


def migrate_store(store: KeyValueStore) -> int:
    """Bring a store up to the current schema and return the version."""
    version = _read_version(store)
    if version > CURRENT_SCHEMA_VERSION:
        raise StorageSchemaError(
            f"Storage schema {version} is newer than supported "
            f"{CURRENT_SCHEMA_VERSION}"
        )
    if version == CURRENT_SCHEMA_VERSION:
        return version

    _logger.info(
        "Migrating storage schema %s -> %s", version, CURRENT_SCHEMA_VERSION
    )
    id_map = _upgrade_profiles(store)
    _merge_day_keys(store, id_map)
    store.set(SCHEMA_VERSION_KEY, CURRENT_SCHEMA_VERSION)
    return CURRENT_SCHEMA_VERSION


def _read_version(store: KeyValueStore) -> int:
    raw = store.get(SCHEMA_VERSION_KEY)
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise StorageSchemaError(f"Invalid schema version: {raw!r}")
    return raw


def _upgrade_profiles(store: KeyValueStore) -> dict[str, UUID]:
    """Rewrite profile records and split out embedded logs."""
    raw = store.get(PROFILES_KEY)
    if raw is None:
        return {}
    if not isinstance(raw, list):
        raise StorageSchemaError("Profile collection is not a list")

    id_map: dict[str, UUID] = {}
    upgraded = []
    for record in raw:
        if not isinstance(record, dict) or "id" not in record:
            raise StorageSchemaError(f"Unreadable profile record: {record!r}")
        legacy_id = str(record["id"])
        profile_id = _canonical_id(legacy_id)
        id_map[legacy_id] = profile_id
        upgraded.append(_canonical_profile(record, profile_id))

        food_log = record.get("foodLog")
        if isinstance(food_log, list) and food_log:
            _merge_food(store, profile_id, _group_by_day(profile_id, food_log))
        weight_log = record.get("weightLog")
        if isinstance(weight_log, list) and weight_log:
            _merge_weights(store, profile_id, weight_log)

    store.set(PROFILES_KEY, upgraded)
    return id_map


def _merge_day_keys(store: KeyValueStore, id_map: dict[str, UUID]) -> None:
    """Fold per-day food-log keys into the per-profile key."""
    for key in store.list_keys(FOOD_LOG_PREFIX):
        match = _DAY_KEY_PATTERN.match(key)
        if match is None:
            continue
        profile_id = id_map.get(match["profile"])
        items = store.get(key)
        if profile_id is None:
            _logger.warning("Dropping food log %s of a deleted profile", key)
        elif isinstance(items, list):
            day = match["day"]
            records = [
                _canonical_food(profile_id, day, index, record)
                for index, record in enumerate(items)
            ]
            _merge_food(store, profile_id, {day: records})
        else:
            raise StorageSchemaError(f"Food log {key} is not a list")
        store.delete(key)


def _canonical_profile(
    record: dict[str, object], profile_id: UUID
) -> dict[str, object]:
    values: dict[str, object] = {}
    for field_name, candidates in _PROFILE_FIELDS.items():
        value = next(
            (record[name] for name in candidates if record.get(name) is not None),
            None,
        )
        if value is None:
            raise StorageSchemaError(
                f"Profile {record.get('id')!r} is missing {field_name}"
            )
        values[field_name] = value
    try:
        Sex(values["sex"])
        ActivityLevel(values["activity_level"])
        Goal(values["goal"])
    except ValueError as exc:
        raise StorageSchemaError(f"Profile {record.get('id')!r}: {exc}") from exc

    weeks = record.get("target_duration_weeks", record.get("loseWeightWeeks"))
    return {
        "id": str(profile_id),
        "name": str(values["name"]),
        "avatar": record.get("avatar"),
        "sex": values["sex"],
        "age": int(values["age"]),
        "height_cm": float(values["height_cm"]),
        "weight_kg": float(values["weight_kg"]),
        "target_weight_kg": float(values["target_weight_kg"]),
        "activity_level": values["activity_level"],
        "goal": values["goal"],
        "target_duration_weeks": int(weeks) if weeks else None,
    }


def _group_by_day(
    profile_id: UUID, items: list[object]
) -> dict[str, list[dict[str, object]]]:
    grouped: dict[str, list[dict[str, object]]] = {}
    for index, record in enumerate(items):
        if not isinstance(record, dict) or "timestamp" not in record:
            raise StorageSchemaError(f"Unreadable food record: {record!r}")
        day = datetime.fromisoformat(str(record["timestamp"])).date().isoformat()
        grouped.setdefault(day, []).append(
            _canonical_food(profile_id, day, index, record)
        )
    return grouped


def _canonical_food(
    profile_id: UUID, day: str, index: int, record: object
) -> dict[str, object]:
    if not isinstance(record, dict) or "name" not in record:
        raise StorageSchemaError(f"Unreadable food record: {record!r}")
    timestamp = record.get("timestamp")
    if timestamp is None:
        timestamp = datetime.combine(date.fromisoformat(day), time(12), tzinfo=UTC)
    else:
        timestamp = datetime.fromisoformat(str(timestamp))
    raw_id = record.get("id") or f"{profile_id}:{day}:{index}:{timestamp}"
    return {
        "id": str(_canonical_id(str(raw_id))),
        "name": str(record["name"]),
        "calories": float(record.get("calories", 0.0)),
        "protein": float(record.get("protein", 0.0)),
        "carbs": float(record.get("carbs", 0.0)),
        "fat": float(record.get("fat", 0.0)),
        "timestamp": timestamp.isoformat(),
    }


def _merge_food(
    store: KeyValueStore,
    profile_id: UUID,
    grouped: dict[str, list[dict[str, object]]],
) -> None:
    key = food_log_key(profile_id)
    existing = store.get(key)
    log = dict(existing) if isinstance(existing, dict) else {}
    for day, records in grouped.items():
        known = {r.get("id") for r in log.get(day, [])}
        log[day] = list(log.get(day, [])) + [
            r for r in records if r["id"] not in known
        ]
    store.set(key, log)


def _merge_weights(
    store: KeyValueStore, profile_id: UUID, entries: list[object]
) -> None:
    key = weight_log_key(profile_id)
    existing = store.get(key)
    by_date = {
        r["date"]: r for r in (existing if isinstance(existing, list) else [])
    }
    for entry in entries:
        if not isinstance(entry, dict) or "date" not in entry:
            raise StorageSchemaError(f"Unreadable weight record: {entry!r}")
        weight = entry.get("weight_kg", entry.get("weight"))
        if weight is None:
            raise StorageSchemaError(f"Weight record without a value: {entry!r}")
        day = date.fromisoformat(str(entry["date"])[:10]).isoformat()
        by_date[day] = {"date": day, "weight_kg": float(weight)}
    store.set(key, [by_date[day] for day in sorted(by_date)])


def _canonical_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        return uuid5(_LEGACY_NAMESPACE, raw)
