"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from src.config import Settings


def test_jwt_secret_is_required(monkeypatch):
    """Start-up aborts when JWT_SECRET is absent."""
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "abc")
    settings = Settings(_env_file=None)
    assert settings.jwt_expiration_minutes == 7 * 24 * 60
    assert settings.jwt_algorithm == "HS256"
    assert settings.is_development


def test_production_rejects_short_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "short")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db.internal/shop")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_production_rejects_localhost_database(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * 40)
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/shop")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_production_settings(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * 40)
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db.internal/shop")
    assert Settings(_env_file=None).is_production
