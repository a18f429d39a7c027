import re
from dataclasses import dataclass
from datetime import date as GDate, datetime, time as GTime
from typing import Literal, Optional, Union

from multical.exceptions import InvalidArgumentError, InvalidFormatError
from multical.utils.format_utils import normalize_digits
from multical.utils.validators import is_date, is_date_time, require_not_empty

DayShift = Literal[-1, 0, 1]

_LOCALE_RE = re.compile(r"^(?P<lang>[A-Za-z]{2,3})(?:[_-](?P<region>[A-Za-z]{2}))?$")


@dataclass(frozen=True)
class CivilDate:
    """(year, month, day) read within some calendar system; months are 1-based."""

    year: int
    month: int
    day: int

    @classmethod
    def parse(cls, text: str) -> "CivilDate":
        t = normalize_digits(require_not_empty(text, "date").strip())
        if not is_date(t):
            raise InvalidFormatError(f"date {text!r} is not in YYYY-MM-DD format")
        y, m, d = (int(p) for p in t.split("-"))
        return cls(y, m, d)

    @classmethod
    def from_date(cls, d: GDate) -> "CivilDate":
        return cls(d.year, d.month, d.day)

    def at(self, t: GTime) -> "CivilDateTime":
        return CivilDateTime(self.year, self.month, self.day, t.hour, t.minute, t.second)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class CivilDateTime:
    """A CivilDate plus a wall-clock time (second precision)."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self):
        if not (0 <= self.hour < 24 and 0 <= self.minute < 60 and 0 <= self.second < 60):
            raise InvalidArgumentError(
                f"time {self.hour:02d}:{self.minute:02d}:{self.second:02d} is out of range"
            )

    @classmethod
    def parse(cls, text: str) -> "CivilDateTime":
        t = normalize_digits(require_not_empty(text, "date-time").strip())
        if not is_date_time(t):
            raise InvalidFormatError(f"date-time {text!r} is not in YYYY-MM-DDTHH:MM:SS format")
        d, clock = t.split("T")
        y, mo, da = (int(p) for p in d.split("-"))
        h, mi, s = (int(p) for p in clock.split(":"))
        return cls(y, mo, da, h, mi, s)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CivilDateTime":
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    @classmethod
    def combine(cls, d: CivilDate, t: GTime) -> "CivilDateTime":
        return d.at(t)

    def date(self) -> CivilDate:
        return CivilDate(self.year, self.month, self.day)

    def time(self) -> GTime:
        return GTime(self.hour, self.minute, self.second)

    def isoformat(self) -> str:
        return f"{self.date().isoformat()}T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class LocaleTag:
    """Language plus optional region. Only selects names and digits when formatting."""

    language: str
    region: Optional[str] = None

    @classmethod
    def parse(cls, value: Union[str, "LocaleTag", None]) -> "LocaleTag":
        if isinstance(value, LocaleTag):
            return value
        text = require_not_empty(value, "locale").strip()
        m = _LOCALE_RE.match(text)
        if not m:
            raise InvalidArgumentError(f"locale {value!r} is not a language[_REGION] tag")
        region = m.group("region")
        return cls(m.group("lang").lower(), region.upper() if region else None)

    def __str__(self) -> str:
        return f"{self.language}_{self.region}" if self.region else self.language


CivilValue = Union[CivilDate, CivilDateTime]
LocaleLike = Union[str, LocaleTag]
