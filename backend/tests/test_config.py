import pytest
from pydantic import ValidationError

from farmhub.config import Settings


def test_cors_origins_are_split(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test ,")
    assert Settings().cors_origins == ["http://a.test", "http://b.test"]


def test_blank_cors_origins_fall_back_to_default(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " ")
    assert Settings().cors_origins == ["http://localhost:3000"]


def test_due_soon_days_must_not_be_negative(monkeypatch):
    monkeypatch.setenv("DUE_SOON_DAYS", "-1")
    with pytest.raises(ValidationError):
        Settings()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FROST_ALERT_F", "32")
    monkeypatch.setenv("SCHEDULER_ENABLED", "false")
    settings = Settings()
    assert settings.frost_alert_f == 32.0
    assert settings.scheduler_enabled is False
