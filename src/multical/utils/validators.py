import re
from typing import Any, Optional

from multical.exceptions import InvalidArgumentError

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")
CLOCK_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")
OFFSET_RE = re.compile(r"^([+-])?\d{2}:\d{2}(:\d{2})?$")


def is_date(text: Optional[str]) -> bool:
    """`YYYY-MM-DD`, digits only."""
    return bool(text) and bool(DATE_RE.match(text))


def is_time(text: Optional[str]) -> bool:
    """A strict `HH:mm:ss` clock reading or a signed `±HH:mm[:ss]` offset."""
    if not text:
        return False
    return bool(CLOCK_RE.match(text) or OFFSET_RE.match(text))


def is_date_time(text: Optional[str]) -> bool:
    """`YYYY-MM-DDTHH:MM:SS`, digits only."""
    return bool(text) and bool(DATE_TIME_RE.match(text))


def require_not_none(value: Any, name: str) -> Any:
    if value is None:
        raise InvalidArgumentError(f"{name} should not be None")
    return value


def require_not_empty(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{name} should not be empty or None")
    return value
