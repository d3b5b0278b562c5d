from pingate.errors import InvalidFormatError
from pingate.utils import is_pin


def validate_pin_format(pin: str) -> None:
    """Validate that a PIN is exactly 4 ASCII digits.

    Raises:
        InvalidFormatError: If the PIN has any other shape
    """
    if not is_pin(pin):
        raise InvalidFormatError
