"""Test that settings are the single source for limits and endpoints."""

import pytest

from backend.app.config import MAX_UPLOAD_BYTES, Settings, get_settings


def test_settings_accessible() -> None:
    """Test that Settings can be imported and accessed."""
    settings = get_settings()
    assert settings is not None


def test_upload_limit_is_ten_megabytes() -> None:
    """Test the default upload limit."""
    assert MAX_UPLOAD_BYTES == 10 * 1024 * 1024
    assert Settings().max_upload_bytes == MAX_UPLOAD_BYTES


def test_timeout_is_bounded() -> None:
    """Test the outbound timeout is configured and positive."""
    settings = get_settings()
    assert settings.validation_service_timeout_seconds > 0
    assert settings.healthcheck_timeout_seconds > 0


def test_service_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the validation service URL is read from the environment."""
    monkeypatch.setenv("VALIDATION_SERVICE_URL", "http://validator.internal/validate")

    assert Settings().validation_service_url == "http://validator.internal/validate"


def test_default_service_url(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the default points at the local validation service."""
    monkeypatch.delenv("VALIDATION_SERVICE_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.validation_service_url == "http://localhost:5000/hackathon/validate-docs"


def test_settings_fields_are_all_in_use() -> None:
    """Test no leftover UI origin setting remains."""
    assert "ui_origin" not in Settings.model_fields
