import re
from datetime import UTC, datetime

PIN_RE = re.compile(r"^[0-9]{4}$")


def is_pin(value: str) -> bool:
    return bool(PIN_RE.fullmatch(value))


def now() -> datetime:
    return datetime.now(UTC)
