# tests/test_config.py
"""Tests for environment-driven settings."""
import logging

import pytest

from notes_core import config


class TestLogLevel:
    @pytest.mark.parametrize("value, expected", [
        (None, "INFO"),
        ("debug", "DEBUG"),
        ("WARNING", "WARNING"),
    ])
    def test_valid(self, value, expected):
        assert config.parse_log_level(value) == expected

    def test_invalid_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert config.parse_log_level("verbose") == "INFO"
        assert "LOG_LEVEL" in caplog.text

    def test_result_is_accepted_by_logging(self):
        logging.getLogger("notes-config-test").setLevel(config.parse_log_level("verbose"))


class TestErrorStatusMode:
    @pytest.mark.parametrize("value, expected", [
        (None, "uniform"),
        ("Typed", "typed"),
        ("uniform", "uniform"),
    ])
    def test_valid(self, value, expected):
        assert config.parse_error_status_mode(value) == expected

    def test_unknown_mode_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert config.parse_error_status_mode("strict") == "uniform"
        assert "ERROR_STATUS_MODE" in caplog.text
