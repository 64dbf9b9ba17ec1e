"""
Tests for centralized configuration module.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from hush.core.config import HushSettings, get_settings, is_debug_enabled, reset_settings


class TestHushSettings:
    """Test HushSettings class."""

    def test_default_values(self):
        settings = HushSettings()

        assert settings.log_level == "WARNING"
        assert settings.debug is False
        assert settings.log_json is False
        assert settings.user_name is None
        assert settings.rules_file is None
        assert settings.snooze_minutes == 30

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("HUSH_LOG_LEVEL", "debug")
        settings = HushSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_level_int == logging.DEBUG

    def test_debug_legacy_flag(self, monkeypatch):
        monkeypatch.setenv("HUSH_DEBUG", "1")
        settings = HushSettings()
        assert settings.effective_log_level == "DEBUG"

    def test_debug_legacy_does_not_override_explicit_level(self, monkeypatch):
        monkeypatch.setenv("HUSH_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("HUSH_DEBUG", "1")
        assert HushSettings().effective_log_level == "ERROR"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("HUSH_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            HushSettings()

    def test_user_name_and_rules_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HUSH_USER_NAME", "alice")
        monkeypatch.setenv("HUSH_RULES_FILE", str(tmp_path / "rules.yaml"))
        settings = HushSettings()
        assert settings.user_name == "alice"
        assert settings.rules_file == Path(tmp_path / "rules.yaml")

    def test_blank_user_name_is_unset(self, monkeypatch):
        monkeypatch.setenv("HUSH_USER_NAME", "   ")
        assert HushSettings().user_name is None

    def test_snooze_minutes_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("HUSH_SNOOZE_MINUTES", "0")
        with pytest.raises(ValidationError):
            HushSettings()


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reset_reloads(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("HUSH_USER_NAME", "bob")
        reset_settings()
        second = get_settings()
        assert second is not first
        assert second.user_name == "bob"

    def test_is_debug_enabled(self, monkeypatch):
        assert is_debug_enabled() is False
        monkeypatch.setenv("HUSH_LOG_LEVEL", "DEBUG")
        reset_settings()
        assert is_debug_enabled() is True
