"""Settings loaded from environment variables.

Values are read from (in priority order):
1. OS environment variables (WARDEN_ prefix)
2. The .env file named by WARDEN_ENV_FILE, or ./.env
3. Default values

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from warden.cipher import PBKDF2_ITERATIONS


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path, if one exists."""
    env_file_path = os.environ.get("WARDEN_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if path.exists():
            return path

    default = Path.cwd() / ".env"
    if default.exists():
        return default

    return None


class WardenSettings(BaseSettings):
    """Token subsystem configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WARDEN_",
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set)
    secret: SecretStr  # Passphrase for encrypting tokens
    previous_secrets: str = ""  # JSON list, or comma-separated when no secret contains a comma

    kdf_iterations: int = PBKDF2_ITERATIONS
    max_token_age_hours: float | None = None  # None = callers enforce expiry

    @field_validator("secret")
    @classmethod
    def _validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret must not be empty")
        return v

    @field_validator("previous_secrets", mode="before")
    @classmethod
    def _validate_previous_secrets(cls, v: Any) -> str:
        """Store a list as JSON so secrets containing commas survive."""
        if isinstance(v, list):
            return json.dumps(v)
        return str(v) if v else ""

    @field_validator("previous_secrets")
    @classmethod
    def _validate_previous_secrets_json(cls, v: str) -> str:
        if v.lstrip().startswith("["):
            try:
                parsed = json.loads(v)
            except ValueError as e:
                raise ValueError(f"previous_secrets is not a valid JSON list: {e}") from e
            if not isinstance(parsed, list) or not all(isinstance(s, str) for s in parsed):
                raise ValueError("previous_secrets JSON must be a list of strings")
        return v

    @field_validator("kdf_iterations")
    @classmethod
    def _validate_iterations(cls, v: int) -> int:
        if v < 1:
            raise ValueError("kdf_iterations must be >= 1")
        return v

    @field_validator("max_token_age_hours")
    @classmethod
    def _validate_max_age(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("max_token_age_hours must be positive")
        return v

    @property
    def previous_secret_list(self) -> list[str]:
        """Parse previous secrets from a JSON list or a comma-separated string."""
        if self.previous_secrets.lstrip().startswith("["):
            return [s for s in json.loads(self.previous_secrets) if s]
        return [s.strip() for s in self.previous_secrets.split(",") if s.strip()]


@lru_cache()
def get_settings() -> WardenSettings:
    """Return cached settings. WARDEN_SECRET must be provided."""
    return WardenSettings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
