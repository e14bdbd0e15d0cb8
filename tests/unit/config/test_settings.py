"""Tests for logging settings and configure_logging."""

import logging

import pytest
import structlog

from bigdecimal import DEFAULT_SETTINGS, BigDecimal, Settings, configure_logging
from bigdecimal.config import JSON_LOGS_ENV, LOG_LEVEL_ENV


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_defaults(self):
        """Defaults log warnings to the console."""
        assert DEFAULT_SETTINGS.log_level == "WARNING"
        assert DEFAULT_SETTINGS.json_logs is False
        assert DEFAULT_SETTINGS.level == logging.WARNING

    def test_from_env(self):
        """Environment variables override the defaults."""
        settings = Settings.from_env({LOG_LEVEL_ENV: "debug", JSON_LOGS_ENV: "Yes"})
        assert settings.log_level == "DEBUG"
        assert settings.json_logs is True
        assert settings.level == logging.DEBUG

    def test_from_env_empty(self):
        """Unset variables keep the defaults."""
        assert Settings.from_env({}) == DEFAULT_SETTINGS

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("no", False), ("", False)])
    def test_json_flag(self, value: str, expected: bool):
        """Only true, 1 and yes enable JSON output."""
        assert Settings.from_env({JSON_LOGS_ENV: value}).json_logs is expected

    def test_from_os_environ(self, monkeypatch):
        """Without a mapping the process environment is read."""
        monkeypatch.setenv(LOG_LEVEL_ENV, "info")
        monkeypatch.delenv(JSON_LOGS_ENV, raising=False)
        assert Settings.from_env() == Settings(log_level="INFO")

    def test_unknown_level(self):
        """Unknown level names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            Settings(log_level="LOUD").level

    def test_frozen(self):
        """Settings are immutable."""
        with pytest.raises(AttributeError):
            DEFAULT_SETTINGS.log_level = "DEBUG"  # type: ignore


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output(self, capsys):
        """JSON mode renders events as JSON lines."""
        configure_logging(Settings(log_level="DEBUG", json_logs=True))
        with pytest.raises(ValueError):
            BigDecimal("not a number")
        out = capsys.readouterr().out
        assert '"event": "decimal_parse_rejected"' in out
        assert '"level": "debug"' in out

    def test_level_filters_debug(self, capsys):
        """Events below the configured level are dropped."""
        configure_logging(Settings(log_level="WARNING"))
        with pytest.raises(ValueError):
            BigDecimal("not a number")
        assert "decimal_parse_rejected" not in capsys.readouterr().out

    def test_silent_until_configured(self, capsys):
        """Nothing is printed while structlog still has its default configuration."""
        structlog.reset_defaults()
        with pytest.raises(ValueError):
            BigDecimal("not a number")
        with pytest.raises(ArithmeticError):
            BigDecimal(1).divide(BigDecimal(3))
        assert capsys.readouterr().out == ""

    def test_configures_structlog(self):
        """configure_logging installs a filtering wrapper class."""
        configure_logging(Settings(log_level="ERROR"))
        assert structlog.is_configured()
