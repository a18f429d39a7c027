import logging
from datetime import datetime
from typing import Optional, Tuple, Union

from multical.calendars import CalendarSystem
from multical.exceptions import InvalidArgumentError
from multical.profiles import CalendarProfile, CalendarProfileRegistry
from multical.types.calendar_types import (
    CivilDate,
    CivilDateTime,
    CivilValue,
    LocaleLike,
    LocaleTag,
)
from multical.utils.format_utils import format_civil
from multical.utils.validators import require_not_none
from multical.utils.zone_utils import ZoneLike, change_zone, day_shift, resolve_zone

logger = logging.getLogger(__name__)

# ───────────────────────────  Orchestrator  ──────────────────────────────


class CalendarConverter:
    """
    Converts dates and date-times between (calendar, locale, zone) triples.

    The profile registry is injected; calendar arithmetic is delegated to the
    calendar system each profile names. Every cross-calendar step goes through
    the Gregorian calendar.
    """

    def __init__(self, registry: Optional[CalendarProfileRegistry] = None):
        self.registry = registry if registry is not None else CalendarProfileRegistry.default()

    # ---- resolution helpers

    def _resolve(self, calendar_id: str) -> Tuple[CalendarProfile, CalendarSystem]:
        return self.registry.resolve(calendar_id), self.registry.system_for(calendar_id)

    # ---- public API

    def format(self, value: CivilValue, calendar_id: str, locale: LocaleLike, pattern: str) -> str:
        """Render a civil date or date-time of `calendar_id` with any supported pattern."""
        require_not_none(value, "date")
        loc = LocaleTag.parse(locale)
        _, system = self._resolve(calendar_id)
        return format_civil(value, system, loc, pattern)

    def add(
        self,
        d: CivilDate,
        calendar_id: str,
        locale: LocaleLike,
        years: int = 0,
        months: int = 0,
        days: int = 0,
    ) -> CivilDate:
        """Add years, months and days to a date within its own calendar."""
        require_not_none(d, "date")
        LocaleTag.parse(locale)
        _, system = self._resolve(calendar_id)
        return system.add_years_months_days(d, years, months, days)

    def is_leap(self, year: int, calendar_id: str, locale: LocaleLike) -> bool:
        """True iff the calendar's year holding (year, 2, 1) has 366 days."""
        require_not_none(year, "year")
        LocaleTag.parse(locale)
        _, system = self._resolve(calendar_id)
        return system.max_day_of_year(CivilDate(year, 2, 1)) == 366

    def convert_date(
        self,
        d: CivilDate,
        current_id: str, current_locale: LocaleLike, current_zone: ZoneLike,
        next_id: str, next_locale: LocaleLike, next_zone: ZoneLike,
    ) -> Tuple[CivilDate, str]:
        """
        Translate a calendar date from one calendar to another.

        Zones are validated but do not move a bare date: without a time of
        day there is no instant to shift.
        """
        require_not_none(d, "date")
        LocaleTag.parse(current_locale)
        resolve_zone(current_zone)
        resolve_zone(next_zone)
        loc = LocaleTag.parse(next_locale)
        _, src = self._resolve(current_id)
        profile, dst = self._resolve(next_id)

        out = dst.from_gregorian(src.to_gregorian(d))
        text = format_civil(out, dst, loc, profile.date_pattern_2)
        logger.debug("📅 convert_date: %s [%s] → %s [%s]", d, current_id, out, next_id)
        return out, text

    def convert_date_time(
        self,
        dt: CivilDateTime,
        current_id: str, current_locale: LocaleLike, current_zone: ZoneLike,
        next_id: str, next_locale: LocaleLike, next_zone: ZoneLike,
    ) -> Tuple[CivilDateTime, str]:
        """
        Translate a date-time across calendars and zones.

        The time is moved between zones through the Gregorian pivot of the
        date, and the day shift that move implies is applied to the target
        date inside the target calendar.
        """
        require_not_none(dt, "date-time")
        LocaleTag.parse(current_locale)
        loc = LocaleTag.parse(next_locale)
        src_zone, dst_zone = resolve_zone(current_zone), resolve_zone(next_zone)
        _, src = self._resolve(current_id)
        profile, dst = self._resolve(next_id)

        current_date, current_time = dt.date(), dt.time()
        pivot = src.to_gregorian(current_date)
        next_time = change_zone(datetime.combine(pivot, current_time), src_zone, dst_zone).time()
        naive_next = dst.from_gregorian(pivot)

        shift = day_shift(pivot, current_time, src_zone, next_time, dst_zone)
        next_date = dst.add_years_months_days(naive_next, days=shift)

        out = CivilDateTime.combine(next_date, next_time)
        text = format_civil(out, dst, loc, profile.date_time_pattern_2)
        logger.debug(
            "📅 convert_date_time: %s [%s %s] → %s [%s %s] (shift %+d)",
            dt, current_id, src_zone, out, next_id, dst_zone, shift,
        )
        return out, text

    def convert(
        self,
        value: CivilValue,
        current_id: str, current_locale: LocaleLike, current_zone: ZoneLike,
        next_id: str, next_locale: LocaleLike, next_zone: ZoneLike,
    ) -> Union[Tuple[CivilDate, str], Tuple[CivilDateTime, str]]:
        args = (current_id, current_locale, current_zone, next_id, next_locale, next_zone)
        if isinstance(value, CivilDateTime):
            return self.convert_date_time(value, *args)
        if isinstance(value, CivilDate):
            return self.convert_date(value, *args)
        raise InvalidArgumentError(
            f"expected CivilDate or CivilDateTime, got {type(value).__name__}"
        )

    def current_date_time(
        self, calendar_id: str, locale: LocaleLike, zone: ZoneLike
    ) -> Tuple[CivilDateTime, str]:
        """Now, as wall-clock time of `zone`, expressed in `calendar_id`."""
        loc = LocaleTag.parse(locale)
        tz = resolve_zone(zone)
        profile, system = self._resolve(calendar_id)
        now = datetime.now(tz)
        d = system.from_gregorian(now.date())
        out = CivilDateTime.combine(d, now.time().replace(microsecond=0))
        return out, format_civil(out, system, loc, profile.date_time_pattern_2)
