"""Tests for supervisor PIN verification."""

import bcrypt
import pytest

from pingate.core.modules.pin.service import PinService, hash_pin
from pingate.core.modules.pin.validators import validate_pin_format
from pingate.errors import InvalidCredentialError, InvalidFormatError


class TestValidatePinFormat:
    """Tests for the 4-digit shape check."""

    @pytest.mark.parametrize("pin", ["0000", "4698", "9999", "0123"])
    def test_four_digits_accepted(self, pin):
        validate_pin_format(pin)

    @pytest.mark.parametrize("pin", ["", "123", "12345", "12a4", "abcd", " 123", "123 ", "12.4", "-123", "１２３４", "12\n4"])
    def test_other_shapes_rejected(self, pin):
        """Test that anything but exactly 4 ASCII digits is rejected."""
        with pytest.raises(InvalidFormatError):
            validate_pin_format(pin)


class TestPinService:
    """Tests for PinService.verify."""

    def test_correct_pin_accepted(self, config):
        PinService(config).verify("4698")

    @pytest.mark.parametrize("pin", ["0000", "4697", "4699", "8964", "9999"])
    def test_wrong_pin_rejected(self, config, pin):
        """Test that any other 4-digit PIN is an invalid credential."""
        with pytest.raises(InvalidCredentialError, match="Invalid PIN"):
            PinService(config).verify(pin)

    def test_malformed_pin_never_hashed(self, config, monkeypatch):
        """Test that format errors are raised before any hash comparison."""
        service = PinService(config)

        def fail_checkpw(*_args):
            raise AssertionError("hash compared for malformed PIN")

        monkeypatch.setattr(bcrypt, "checkpw", fail_checkpw)
        with pytest.raises(InvalidFormatError):
            service.verify("12a4")

    def test_preconfigured_hash(self, make_config, fast_salt):
        """Test that a configured bcrypt hash is used directly."""
        config = make_config(pin=None, pin_hash=hash_pin("1357", fast_salt))
        service = PinService(config)

        service.verify("1357")
        with pytest.raises(InvalidCredentialError):
            service.verify("4698")

    def test_hash_pin_uses_given_salt(self, fast_salt):
        """Test that hashing is deterministic for a fixed salt."""
        assert hash_pin("4698", fast_salt) == hash_pin("4698", fast_salt)
        assert hash_pin("4698", fast_salt).startswith(fast_salt)

    def test_raw_pin_without_salt(self, make_config):
        """Test that a fresh salt is generated when none is configured."""
        service = PinService(make_config(pin_salt=None))
        service.verify("4698")
