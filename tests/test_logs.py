"""Tests for logging setup."""

import logging

import pytest

from welch_psd.logs import parse_log_level, set_log_level, setup_logging


class TestParseLogLevel:
    """Level name parsing."""

    def test_names(self) -> None:
        """Level names are case and whitespace insensitive."""
        assert parse_log_level("debug") == logging.DEBUG
        assert parse_log_level(" Warning ") == logging.WARNING

    def test_numeric_passthrough(self) -> None:
        """Integer levels pass through unchanged."""
        assert parse_log_level(15) == 15

    def test_unknown(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown log level"):
            parse_log_level("verbose")


class TestSetupLogging:
    """Root logger configuration."""

    def test_single_handler(self, restore_root_logger) -> None:
        """Repeated setup keeps exactly one handler."""
        setup_logging("INFO")
        setup_logging("DEBUG")

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.DEBUG

    def test_set_log_level(self, restore_root_logger) -> None:
        """The package logger level can be changed alone."""
        set_log_level("error")
        assert logging.getLogger("welch_psd").level == logging.ERROR
