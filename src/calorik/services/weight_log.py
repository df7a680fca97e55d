"""Per-user weight series storage."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from calorik.domain.foods import WeightEntry
from calorik.services.records import weight_from_record, weight_to_record
from calorik.services.storage import KeyValueStore, weight_log_key


@dataclass
class WeightLogStore:
    """Weight entries with at most one value per date."""

    store: KeyValueStore

    def upsert(self, user_id: UUID, day: date, weight_kg: float) -> WeightEntry:
        """Record a weight, overwriting any entry for the same date."""
        entries = {entry.date: entry for entry in self.list(user_id)}
        entry = WeightEntry(date=day, weight_kg=weight_kg)
        entries[day] = entry
        self.store.set(
            weight_log_key(user_id),
            [weight_to_record(e) for e in sorted(entries.values(), key=_by_date)],
        )
        return entry

    def list(self, user_id: UUID) -> list[WeightEntry]:
        """Return entries sorted by date ascending."""
        raw = self.store.get(weight_log_key(user_id))
        if not isinstance(raw, list):
            return []
        return sorted((weight_from_record(r) for r in raw), key=_by_date)

    def delete_all(self, user_id: UUID) -> None:
        """Drop the user's weight series."""
        self.store.delete(weight_log_key(user_id))


def _by_date(entry: WeightEntry) -> date:
    return entry.date
