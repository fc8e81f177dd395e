from __future__ import annotations

from facility_store.domain.services.device_type_assembly import MissingTypePolicy
from facility_store.main.config import AppSettings, get_settings
from facility_store.shared.consts import EnumEnvironment


def test_get_settings_loads_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DB_ADDRESS", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    settings = get_settings()
    assert settings.database.address.startswith("http://")
    assert settings.database.missing_type_policy is MissingTypePolicy.OMIT
    assert settings.cascade.max_workers == 4
    assert settings.environment == EnumEnvironment.DEVELOPMENT


def test_settings_respect_environment_variables(monkeypatch) -> None:
    monkeypatch.setenv("DB_ADDRESS", "http://couch:5984")
    monkeypatch.setenv("DB_MISSING_TYPE_POLICY", "fail")
    monkeypatch.setenv("CASCADE_MAX_WORKERS", "8")
    monkeypatch.setenv("EVENTS_REDIS_URL", "redis://redis:6379/1")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = AppSettings()

    assert settings.database.address == "http://couch:5984"
    assert settings.database.missing_type_policy is MissingTypePolicy.FAIL
    assert settings.cascade.max_workers == 8
    assert settings.events.redis_url == "redis://redis:6379/1"
    assert settings.logging.level.value == "DEBUG"


def test_get_settings_reads_secret_files(tmp_path, monkeypatch) -> None:
    secret = tmp_path / "db_password"
    secret.write_text("hunter2\n", encoding="utf-8")
    monkeypatch.setenv("DB_PASSWORD", "")
    monkeypatch.delenv("DB_PASSWORD")
    monkeypatch.setenv("DB_PASSWORD_FILE", str(secret))

    settings = get_settings()

    assert settings.database.password == "hunter2"
