"""Startup configuration checks."""

import logging

import pytest

from restaurant_cms.core.config import INSECURE_JWT_SECRET, Settings, settings
from restaurant_cms.db.session import engine_options
from restaurant_cms.main import check_secret_configuration


def test_production_refuses_development_secret(monkeypatch) -> None:
    monkeypatch.setattr(settings, "app_env", "production")
    monkeypatch.setattr(settings, "jwt_secret_key", INSECURE_JWT_SECRET)

    with pytest.raises(RuntimeError):
        check_secret_configuration()


def test_development_secret_only_warns_outside_production(monkeypatch, caplog) -> None:
    monkeypatch.setattr(settings, "app_env", "dev")
    monkeypatch.setattr(settings, "jwt_secret_key", INSECURE_JWT_SECRET)

    with caplog.at_level(logging.WARNING):
        check_secret_configuration()

    assert "JWT_SECRET_KEY not set" in caplog.text


def test_configured_secret_passes_in_production(monkeypatch) -> None:
    monkeypatch.setattr(settings, "app_env", "prod")
    monkeypatch.setattr(settings, "jwt_secret_key", "a-real-secret")

    check_secret_configuration()


def test_settings_production_flag() -> None:
    assert Settings(app_env="Production").is_production is True
    assert Settings(app_env="staging").is_production is False


def test_engine_options_per_backend() -> None:
    assert engine_options("sqlite:///./cms.db") == {"echo": False, "connect_args": {"check_same_thread": False}}
    assert engine_options("postgresql://cms@db/cms", debug=True) == {"echo": True, "pool_pre_ping": True}
