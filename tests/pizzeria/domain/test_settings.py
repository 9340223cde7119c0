"""Tests for environment-driven settings and log levels."""

from decimal import Decimal

import structlog
from pizzeria.config import Settings
from pizzeria.utils.logging import get_log_dir, get_log_level, log_context


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for name in (
            "PIZZERIA_MARKUP",
            "PIZZERIA_MIN_PASSWORD_LENGTH",
            "PIZZERIA_PHOTO_EXTENSIONS",
            "PIZZERIA_SNAPSHOT_SUFFIX",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.markup == Decimal("1.4")
        assert settings.min_password_length == 8
        assert settings.photo_extensions == (".png", ".jpg", ".jpeg")
        assert settings.snapshot_suffix == ".dat"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PIZZERIA_MARKUP", "1.5")
        monkeypatch.setenv("PIZZERIA_MIN_PASSWORD_LENGTH", "12")
        monkeypatch.setenv("PIZZERIA_PHOTO_EXTENSIONS", ".PNG, .webp,")

        settings = Settings.from_env()

        assert settings.markup == Decimal("1.5")
        assert settings.min_password_length == 12
        assert settings.photo_extensions == (".png", ".webp")


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        monkeypatch.setenv("ENV", "development")
        assert get_log_level() == "ERROR"

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENV", "production")
        assert get_log_level() == "INFO"

    def test_unknown_environment_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENV", "qa")
        assert get_log_level() == "INFO"

    def test_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PIZZERIA_LOG_DIR", str(tmp_path))
        assert get_log_dir() == tmp_path


class TestLogContext:
    def test_binds_only_inside_block(self):
        with log_context(snapshot="shop.dat"):
            assert structlog.contextvars.get_contextvars()["snapshot"] == "shop.dat"
        assert "snapshot" not in structlog.contextvars.get_contextvars()
