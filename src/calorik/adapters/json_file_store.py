"""JSON-file-backed key-value store."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorik.services.storage import KeyValueStore


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in a single JSON document on disk."""

    path: Path

    def get(self, key: str) -> object | None:
        """Return the value stored under a key, if present."""
        return self._read().get(key)

    def set(self, key: str, value: object) -> None:
        """Store a value and rewrite the document."""
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def list_keys(self, prefix: str) -> list[str]:
        """Return stored keys starting with a prefix."""
        return sorted(key for key in self._read() if key.startswith(prefix))

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise RuntimeError(f"Storage file {self.path} is not a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
