"""Key-value persistence interface and storage keys."""

from typing import Protocol
from uuid import UUID

KEY_PREFIX = "calorik-"
SCHEMA_VERSION_KEY = "calorik-schema-version"
PROFILES_KEY = "calorik-profiles"
FOOD_LOG_PREFIX = "calorik-foodlog-"
WEIGHT_LOG_PREFIX = "calorik-weightlog-"

CURRENT_SCHEMA_VERSION = 2


class KeyValueStore(Protocol):
    """Persistence interface for JSON-serialisable values under string keys."""

    def get(self, key: str) -> object | None:
        """Return the value stored under a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Store a value under a key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""

    def list_keys(self, prefix: str) -> list[str]:
        """Return all keys starting with a prefix."""


def food_log_key(user_id: UUID | str) -> str:
    return f"{FOOD_LOG_PREFIX}{user_id}"


def weight_log_key(user_id: UUID | str) -> str:
    return f"{WEIGHT_LOG_PREFIX}{user_id}"
