"""Application configuration."""

import os

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PROFILE_IMAGE_MAX_BYTES = 2 * 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str | None = None
    supabase_anon_key: str | None = None
    profile_image_max_bytes: int = PROFILE_IMAGE_MAX_BYTES
    profile_batch_size: int = 10
    class_code_attempts: int = 5
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_a_key(self) -> "Settings":
        if not has_value(self.supabase_service_key) and not has_value(
            self.supabase_anon_key
        ):
            raise ValueError(
                "Either SUPABASE_SERVICE_KEY or SUPABASE_ANON_KEY must be set"
            )
        return self

    @property
    def privileged(self) -> bool:
        """Return True when service-role credentials are configured."""
        return has_value(self.supabase_service_key)


def has_value(raw: str | None) -> bool:
    """Return True for a non-blank env value."""
    return raw is not None and raw.strip() != ""
