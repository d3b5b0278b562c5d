"""Tests for configuration loading."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from pingate.config import Config


class TestConfig:
    def test_defaults(self, config):
        assert config.token_ttl == timedelta(hours=8)
        assert config.rate_limit_window == timedelta(minutes=15)
        assert config.sweep_interval_seconds == 60
        assert config.rate_limit_max_attempts == 5

    def test_environment_prefix(self, monkeypatch, fast_salt):
        monkeypatch.setenv("PINGATE_PIN", "1234")
        monkeypatch.setenv("PINGATE_PIN_SALT", fast_salt)
        monkeypatch.setenv("PINGATE_TOKEN_TTL_MS", "1000")

        config = Config(_env_file=None)

        assert config.pin == "1234"
        assert config.token_ttl == timedelta(seconds=1)

    def test_pin_source_required(self, monkeypatch):
        monkeypatch.delenv("PINGATE_PIN", raising=False)
        monkeypatch.delenv("PINGATE_PIN_HASH", raising=False)
        with pytest.raises(ValidationError, match="PINGATE_PIN"):
            Config(_env_file=None)

    def test_raw_pin_must_be_four_digits(self, make_config):
        with pytest.raises(ValidationError, match="4 digits"):
            make_config(pin="12345")

    @pytest.mark.parametrize("field", ["token_ttl_ms", "rate_limit_window_ms", "rate_limit_max_attempts"])
    def test_non_positive_values_rejected(self, make_config, field):
        with pytest.raises(ValidationError):
            make_config(**{field: 0})
