"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from attendly.config import Settings


@pytest.fixture(autouse=True)
def _clear_supabase_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SUPABASE_SERVICE_KEY", "SUPABASE_ANON_KEY"):
        monkeypatch.delenv(name, raising=False)


def test_service_key_selects_privileged_mode() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        _env_file=None,
    )

    assert settings.privileged is True
    assert settings.profile_batch_size == 10
    assert settings.profile_image_max_bytes == 2 * 1024 * 1024


def test_blank_service_key_is_not_privileged() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="  ",
        supabase_anon_key="anon-key",
        _env_file=None,
    )

    assert settings.privileged is False


def test_settings_require_some_key() -> None:
    with pytest.raises(ValidationError):
        Settings(supabase_url="https://example.supabase.co", _env_file=None)
