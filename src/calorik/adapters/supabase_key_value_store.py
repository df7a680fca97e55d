"""Supabase-backed key-value store."""

from dataclasses import dataclass

from supabase import Client

from calorik.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing JSON values in a key/value table."""

    client: Client
    table: str = "kv_entries"

    def get(self, key: str) -> object | None:
        """Return the value stored under a key, if present."""
        response = (
            self.client.table(self.table)
            .select("key, value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Insert or replace the row for a key."""
        response = (
            self.client.table(self.table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store key {key} in Supabase")

    def delete(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table).delete().eq("key", key).execute()

    def list_keys(self, prefix: str) -> list[str]:
        """Return keys starting with a prefix."""
        response = (
            self.client.table(self.table)
            .select("key")
            .like("key", f"{prefix}%")
            .order("key", desc=False)
            .execute()
        )
        return [str(row["key"]) for row in response.data or []]
