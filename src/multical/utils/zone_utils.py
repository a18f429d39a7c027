import logging
from datetime import date as GDate, datetime, time, timezone, tzinfo
from typing import Dict, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from multical.exceptions import InvalidArgumentError, InvalidFormatError
from multical.types.calendar_types import DayShift
from multical.utils.validators import is_time, require_not_empty, require_not_none

logger = logging.getLogger(__name__)

ZoneLike = Union[str, tzinfo]

UTC = ZoneInfo("UTC")
SECONDS_PER_DAY = 24 * 3600


# -----------------------------
# Zones & offsets
# -----------------------------

def resolve_zone(zone: Optional[ZoneLike]) -> tzinfo:
    """Accept an IANA name or a tzinfo; anything unresolvable is an InvalidArgumentError."""
    require_not_none(zone, "zone")
    if isinstance(zone, tzinfo):
        return zone
    name = require_not_empty(zone, "zone").strip()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidArgumentError(f"unknown time zone {name!r}") from exc


def offset_seconds_at(zone: ZoneLike, at: Optional[datetime] = None) -> int:
    """
    UTC offset of `zone` in whole seconds.

    `at` may be None (now), an aware datetime (that instant) or a naive
    datetime (that wall-clock reading in `zone`). A wall-clock reading that
    falls in a DST gap takes the offset in force after the transition.
    """
    tz = resolve_zone(zone)
    if at is None:
        aware = datetime.now(tz)
    elif at.tzinfo is None:
        aware = at.replace(tzinfo=tz).astimezone(timezone.utc).astimezone(tz)
    else:
        aware = at.astimezone(tz)
    return int(aware.utcoffset().total_seconds())


def format_offset(seconds: int) -> str:
    """
    Render a signed offset as `±HH:mm`.

    Zero is sign-less (`00:00`). A non-zero seconds part is appended as
    `:ss`; hours are not folded into a day.
    """
    sign = "+" if seconds > 0 else "-" if seconds < 0 else ""
    h, rem = divmod(abs(int(seconds)), 3600)
    m, s = divmod(rem, 60)
    text = f"{sign}{h:02d}:{m:02d}"
    if s:
        text += f":{s:02d}"
    return text


def to_seconds(text: Optional[str]) -> int:
    """
    `HH:mm:ss` or `±HH:mm[:ss]` -> signed seconds.

    The sign of the whole value is the explicit sign of the first field, so
    `-00:30` is -1800.
    """
    require_not_empty(text, "time")
    if not is_time(text):
        raise InvalidFormatError(f"time {text!r} is not in HH:mm:ss or ±HH:mm[:ss] format")
    sign = -1 if text.startswith("-") else 1
    parts = text.lstrip("+-").split(":")
    h, m = int(parts[0]), int(parts[1])
    s = int(parts[2]) if len(parts) > 2 else 0
    return sign * (h * 3600 + m * 60 + s)


def calculate_offset(zone_a: ZoneLike, zone_b: ZoneLike, at: Optional[datetime] = None) -> str:
    """
    Offset of `zone_b` relative to `zone_a` (b - a), as `±HH:mm`.

    Historical local-mean-time offsets are not whole minutes; those render
    as `±HH:mm:ss` (Tehran before mid-1935 is `+03:25:44` from UTC).
    """
    tz_a, tz_b = resolve_zone(zone_a), resolve_zone(zone_b)
    if at is None:
        at = datetime.now(timezone.utc)
    diff = offset_seconds_at(tz_b, at) - offset_seconds_at(tz_a, at)
    return format_offset(diff)


def all_zone_offsets(zone: ZoneLike, at: Optional[datetime] = None) -> Dict[str, str]:
    """Offset from `zone` to every zone the host database knows."""
    tz = resolve_zone(zone)
    if at is None:
        at = datetime.now(timezone.utc)
    names = sorted(available_timezones())
    logger.debug("🌍 all_zone_offsets: %d zones relative to %s", len(names), tz)
    return {name: calculate_offset(tz, name, at) for name in names}


# -----------------------------
# Zone conversion
# -----------------------------

def change_zone(
    value: Union[datetime, GDate],
    from_zone: ZoneLike,
    to_zone: ZoneLike,
) -> Union[datetime, GDate]:
    """
    Re-express a local date-time of `from_zone` as local time of `to_zone`,
    keeping the instant. A bare date is read at 00:00:00 and only the
    converted date is returned.
    """
    require_not_none(value, "date")
    src, dst = resolve_zone(from_zone), resolve_zone(to_zone)
    if isinstance(value, datetime):
        out = value.replace(tzinfo=src).astimezone(dst).replace(tzinfo=None)
        logger.debug("🕒 change_zone: %s [%s] → %s [%s]", value.isoformat(), src, out.isoformat(), dst)
        return out
    if isinstance(value, GDate):
        return change_zone(datetime.combine(value, time.min), src, dst).date()
    raise InvalidArgumentError(f"expected a date or datetime, got {type(value).__name__}")


def change_zone_right_now(value: GDate, from_zone: ZoneLike, to_zone: ZoneLike) -> GDate:
    """Like `change_zone` for a date, but read at the current wall-clock time of `from_zone`."""
    require_not_none(value, "date")
    src = resolve_zone(from_zone)
    if isinstance(value, datetime):
        value = value.date()
    now = datetime.now(src).time()
    return change_zone(datetime.combine(value, now), src, to_zone).date()


# -----------------------------
# Day-boundary correction
# -----------------------------

def _seconds_of_day(t: time) -> float:
    return t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1_000_000


def day_shift(
    d: GDate,
    current_time: time,
    current_zone: ZoneLike,
    next_time: time,
    next_zone: ZoneLike,
) -> DayShift:
    """
    Whether moving `current_time` (in `current_zone`) to `next_time` (in
    `next_zone`) on the nominal date `d` also moves the calendar day.

    The offset difference between the zones is the boundary. Going east the
    day advances only if the new time is before the boundary and the old
    time is after midnight minus the boundary; going west is the mirror case.
    Both comparisons are strict: a time exactly on the boundary does not
    shift. Zones a whole day or more apart cannot be corrected by a single
    day and raise InvalidArgumentError.
    """
    require_not_none(d, "date")
    require_not_none(current_time, "current time")
    require_not_none(next_time, "next time")

    offset_a = calculate_offset(UTC, current_zone, datetime.combine(d, current_time))
    offset_b = calculate_offset(UTC, next_zone, datetime.combine(d, next_time))
    diff = to_seconds(offset_b) - to_seconds(offset_a)
    boundary = abs(diff)
    if boundary >= SECONDS_PER_DAY:
        raise InvalidArgumentError(
            f"zones {current_zone} ({offset_a}) and {next_zone} ({offset_b}) are "
            f"{format_offset(diff)} apart; a day shift cannot exceed one day"
        )
    cur, nxt = _seconds_of_day(current_time), _seconds_of_day(next_time)

    shift: DayShift = 0
    if diff > 0:
        shift = 1 if nxt < boundary and cur > SECONDS_PER_DAY - boundary else 0
    elif diff < 0:
        shift = -1 if cur < boundary and nxt > SECONDS_PER_DAY - boundary else 0

    logger.debug(
        "📆 day_shift: %s %s[%s %s] → %s[%s %s] diff=%+ds shift=%+d",
        d, current_time, current_zone, offset_a, next_time, next_zone, offset_b, diff, shift,
    )
    return shift
