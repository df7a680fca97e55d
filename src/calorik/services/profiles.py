"""Profile storage and lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from calorik.domain.errors import InvalidProfileError, ProfileNotFoundError
from calorik.domain.foods import WeightEntry
from calorik.domain.profiles import (
    ActivityLevel,
    Goal,
    ProfileDraft,
    Sex,
    UserProfile,
    validate_profile,
)
from calorik.services.food_log import FoodLogStore
from calorik.services.records import profile_from_record, profile_to_record
from calorik.services.storage import PROFILES_KEY, KeyValueStore
from calorik.services.weight_log import WeightLogStore

_logger = logging.getLogger(__name__)

_ENUM_FIELDS = {"sex": Sex, "activity_level": ActivityLevel, "goal": Goal}
_UPDATABLE_FIELDS = frozenset(f.name for f in fields(UserProfile)) - {"id"}


@dataclass
class ProfileStore:
    """Profile collection; deleting a profile removes its logs."""

    store: KeyValueStore
    food_log: FoodLogStore
    weight_log: WeightLogStore

    def create(self, draft: ProfileDraft) -> UserProfile:
        """Validate and persist a new profile."""
        validate_profile(draft)
        profile = UserProfile(id=uuid4(), **_draft_values(draft))
        records = self._load()
        records.append(profile_to_record(profile))
        self._save(records)
        _logger.info("Created profile %s", profile.id)
        return profile

    def get(self, profile_id: UUID) -> UserProfile:
        """Return a profile by id."""
        for record in self._load():
            if record.get("id") == str(profile_id):
                return profile_from_record(record)
        raise ProfileNotFoundError(f"Profile {profile_id} not found")

    def update(self, profile_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Apply a partial update and return the stored profile."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise InvalidProfileError(
                f"Cannot update fields: {', '.join(sorted(unknown))}"
            )
        records = self._load()
        index = _index_of(records, profile_id)
        updated = replace(profile_from_record(records[index]), **_coerce(changes))
        validate_profile(updated)
        records[index] = profile_to_record(updated)
        self._save(records)
        return updated

    def delete(self, profile_id: UUID) -> None:
        """Remove a profile together with its food and weight logs."""
        records = self._load()
        index = _index_of(records, profile_id)
        del records[index]
        self.food_log.delete_all(profile_id)
        self.weight_log.delete_all(profile_id)
        self._save(records)
        _logger.info("Deleted profile %s and its logs", profile_id)

    def list(self) -> list[UserProfile]:
        """Return all profiles in creation order."""
        return [profile_from_record(record) for record in self._load()]

    def _load(self) -> list[dict[str, object]]:
        raw = self.store.get(PROFILES_KEY)
        return list(raw) if isinstance(raw, list) else []

    def _save(self, records: list[dict[str, object]]) -> None:
        self.store.set(PROFILES_KEY, records)


@dataclass
class ProfileService:
    """Application service for profile-scoped actions spanning stores."""

    profiles: ProfileStore
    weight_log: WeightLogStore

    def record_weight(
        self,
        profile_id: UUID,
        day: date,
        weight_kg: float,
        today: date | None = None,
    ) -> WeightEntry:
        """Upsert a weight entry; today's entry also becomes the current weight."""
        if weight_kg <= 0:
            raise InvalidProfileError("weight_kg must be a positive number")
        self.profiles.get(profile_id)
        entry = self.weight_log.upsert(profile_id, day, weight_kg)
        current_day = today or datetime.now(tz=UTC).date()
        if day == current_day:
            self.profiles.update(profile_id, {"weight_kg": weight_kg})
        return entry

    def list_weights(self, profile_id: UUID) -> list[WeightEntry]:
        """Return a profile's weight series, oldest first."""
        self.profiles.get(profile_id)
        return self.weight_log.list(profile_id)


def _draft_values(draft: ProfileDraft) -> dict[str, object]:
    return {f.name: getattr(draft, f.name) for f in fields(ProfileDraft)}


def _coerce(changes: dict[str, object]) -> dict[str, object]:
    coerced = dict(changes)
    for name, enum_type in _ENUM_FIELDS.items():
        if name in coerced and not isinstance(coerced[name], enum_type):
            try:
                coerced[name] = enum_type(coerced[name])
            except ValueError as exc:
                raise InvalidProfileError(
                    f"Invalid {name}: {coerced[name]!r}"
                ) from exc
    return coerced


def _index_of(records: list[dict[str, object]], profile_id: UUID) -> int:
    wanted = str(profile_id)
    for index, record in enumerate(records):
        if record.get("id") == wanted:
            return index
    raise ProfileNotFoundError(f"Profile {profile_id} not found")
