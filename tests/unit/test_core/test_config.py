#!/usr/bin/env python3
"""
Unit tests for configuration loading.

The autouse fixture in conftest.py points every directory at tmp_path and
forces the test environment, so these tests only vary individual settings.
"""

from pathlib import Path

import pytest

from expense_tracker.core.config import Config, Environment, get_config, get_output_dir, reload_config


@pytest.mark.unit
class TestConfigLoading:
    """Test configuration loading from environment variables."""

    def test_test_environment_is_selected(self, tmp_path):
        """Test the conftest environment reaches the config."""
        config = get_config()

        assert config.environment is Environment.TEST
        assert config.data_dir == tmp_path / "data"
        assert get_output_dir() == tmp_path / "exports"
        assert config.data_dir.exists()
        assert config.output_dir.exists()

    def test_export_defaults(self):
        """Test export settings fall back to their defaults."""
        config = get_config()

        assert config.export.delay_ms == 0
        assert config.export.history_limit == 50
        assert config.export.share_origin == "http://localhost:3000"

    def test_overrides_are_read(self, monkeypatch):
        """Test export settings can be overridden and origins lose trailing slashes."""
        monkeypatch.setenv("EXPORT_HISTORY_LIMIT", "5")
        monkeypatch.setenv("SHARE_ORIGIN", "https://expenses.example.com/")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = reload_config()

        assert config.export.history_limit == 5
        assert config.export.share_origin == "https://expenses.example.com"
        assert config.log_level == "DEBUG"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_to_dict_is_json_friendly(self):
        data = get_config().to_dict()

        assert data["environment"] == "test"
        assert isinstance(data["data_dir"], str)
        assert isinstance(data["export"]["output_dir"], str)
        assert data["export"]["history_limit"] == 50


@pytest.mark.unit
class TestConfigValidation:
    """Test configuration validation."""

    @pytest.mark.parametrize(
        "variable,value,message",
        [
            ("EXPORT_DELAY_MS", "-1", "EXPORT_DELAY_MS"),
            ("EXPORT_HISTORY_LIMIT", "0", "EXPORT_HISTORY_LIMIT"),
            ("SHARE_ORIGIN", "localhost:3000", "SHARE_ORIGIN"),
        ],
    )
    def test_invalid_settings_are_reported(self, monkeypatch, variable, value, message):
        monkeypatch.setenv(variable, value)

        errors = Config.from_environment().validate()

        assert any(message in e for e in errors)

    def test_get_config_raises_on_invalid_settings(self, monkeypatch):
        monkeypatch.setenv("EXPORT_HISTORY_LIMIT", "0")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            reload_config()

    def test_missing_directory_is_reported(self, tmp_path):
        config = Config.from_environment()
        config.data_dir = Path(tmp_path / "does-not-exist")

        assert any("data_dir" in e for e in config.validate())
