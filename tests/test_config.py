"""Tests for settings, logging setup and the exception hierarchy."""

import logging

import pytest
from pydantic import ValidationError

from cipherlab.core.config import Settings, get_settings
from cipherlab.core.exceptions import (
    CiphertextTooLongError,
    CryptanalysisError,
    EngineNotFoundError,
    InvalidKeyError,
    ValidationError as CipherValidationError,
)
from cipherlab.core.logging import LOGGER_NAME, _ConsoleHandler, configure_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.max_results == 10
        assert settings.default_method_confidence == 0.3
        assert settings.quick_score_threshold == 0.5
        assert settings.enigma_seed == 1940

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CIPHERLAB_MAX_RESULTS", "3")
        monkeypatch.setenv("CIPHERLAB_LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.max_results == 3
        assert settings.log_level == "DEBUG"

    def test_invalid_value_rejected(self, monkeypatch):
        monkeypatch.setenv("CIPHERLAB_MAX_RESULTS", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Test the package logger setup."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger(LOGGER_NAME)
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def _own_handlers(self, logger):
        return [h for h in logger.handlers if isinstance(h, _ConsoleHandler)]

    def test_adds_one_handler(self):
        logger = configure_logging("DEBUG")
        configure_logging("INFO")

        assert len(self._own_handlers(logger)) == 1
        assert logger.level == logging.INFO

    def test_default_level_from_settings(self):
        logger = configure_logging()
        assert logger.level == logging.getLevelName(get_settings().log_level.upper())

    def test_lowercase_level(self):
        assert configure_logging("error").level == logging.ERROR

    def test_root_logger_untouched(self):
        root_handlers = list(logging.getLogger().handlers)
        configure_logging("DEBUG")
        assert logging.getLogger().handlers == root_handlers


class TestExceptions:
    """Test the exception hierarchy."""

    def test_invalid_key_details(self):
        error = InvalidKeyError("Caesar", "abc", "not a number")

        assert isinstance(error, CipherValidationError)
        assert isinstance(error, CryptanalysisError)
        assert error.details["cipher"] == "Caesar"
        assert "not a number" in error.message

    def test_too_long(self):
        error = CiphertextTooLongError(20, 10)
        assert error.details == {"length": 20, "max_length": 10}

    def test_engine_not_found(self):
        error = EngineNotFoundError("playfair")
        assert "playfair" in str(error)
