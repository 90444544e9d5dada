import logging

from app.core.config import Settings
from app.core.logging_config import configure_logging


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("API_PREFIX", "/v2")
    monkeypatch.setenv("ENFORCE_MOVIE_REFERENCE", "true")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000"]')

    settings = Settings()
    assert settings.api_prefix == "/v2"
    assert settings.enforce_movie_reference is True
    assert settings.cors_origins == ["http://localhost:3000"]


def test_settings_defaults(monkeypatch):
    for name in ("DATABASE_URL", "API_PREFIX", "ENFORCE_MOVIE_REFERENCE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    assert settings.database_url.startswith("sqlite")
    assert settings.api_prefix == "/api"
    assert settings.enforce_movie_reference is False


def test_configure_logging_adjusts_root_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_settings_document_route_prefix():
    assert "API_PREFIX" in Settings.__doc__
    assert "/api" in Settings.__doc__
