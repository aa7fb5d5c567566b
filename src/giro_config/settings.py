"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. GIRO_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path (for fints_institute.csv, etc.)."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. GIRO_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("GIRO_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "giro"

    # Bank lookup (BANK_LOOKUP_ prefix)
    bank_lookup_provider: Literal["directory", "ollama", "none"] = "directory"
    bank_lookup_debounce_ms: int = 800

    # Institute directory
    institute_csv_path: Path | None = None
    institute_csv_encoding: str = "cp1252"

    # Ollama (OLLAMA_ prefix)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen2.5:1.5b"
    ollama_timeout: float = 20.0

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("bank_lookup_debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: int) -> int:
        if v < 0:
            msg = "bank_lookup_debounce_ms must not be negative"
            raise ValueError(msg)
        return v

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def bank_lookup_debounce_seconds(self) -> float:
        return self.bank_lookup_debounce_ms / 1000

    @computed_field  # type: ignore[prop-decorator]
    @property
    def resolved_institute_csv_path(self) -> Path:
        """CSV path from settings, or config/fints_institute.csv."""
        return self.institute_csv_path or (get_config_dir() / "fints_institute.csv")


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
