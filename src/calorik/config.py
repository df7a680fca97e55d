"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = frozenset({"json", "supabase"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "json"
    storage_path: Path = Path("calorik-data.json")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_entries"
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    openai_timeout_seconds: float = 30.0
    estimation_language: str = "English"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_storage_backend(settings: Settings) -> str:
    """Return the configured backend, checking its required settings."""
    backend = settings.storage_backend.strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend {settings.storage_backend!r}; "
            f"expected one of {', '.join(sorted(STORAGE_BACKENDS))}"
        )
    if backend == "supabase" and not (
        settings.supabase_url and settings.supabase_service_key
    ):
        raise ValueError("Supabase storage requires SUPABASE_URL and key")
    return backend
