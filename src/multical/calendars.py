"""
Calendar systems: the per-calendar date-arithmetic capability.

Every system maps its own (year, month, day) triples to and from the Gregorian
calendar, which the converter uses as the common proleptic pivot. Arithmetic
and month lengths are delegated to the calendar libraries:

  * gregorian         -> datetime / calendar / dateutil.relativedelta
  * persian           -> jdatetime (Solar Hijri, "khorshidi")
  * islamic-umalqura  -> hijri_converter (lunar Hijri, Umm al-Qura tables)
"""

import calendar
import logging
from abc import ABC, abstractmethod
from datetime import date as GDate, timedelta
from typing import Dict, List

import jdatetime as jd
from dateutil.relativedelta import relativedelta
from hijri_converter import Gregorian, Hijri

from multical.exceptions import InvalidArgumentError
from multical.types.calendar_types import CivilDate

logger = logging.getLogger(__name__)

GREGORIAN_MONTH_NAMES: Dict[str, List[str]] = {
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    "fa": [
        "ژانویه", "فوریه", "مارس", "آوریل", "مه", "ژوئن",
        "ژوئیه", "اوت", "سپتامبر", "اکتبر", "نوامبر", "دسامبر",
    ],
    "ar": [
        "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
        "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
    ],
}

# Monday first, matching date.weekday()
WEEKDAY_NAMES: Dict[str, List[str]] = {
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    "fa": ["دوشنبه", "سه‌شنبه", "چهارشنبه", "پنج‌شنبه", "جمعه", "شنبه", "یکشنبه"],
    "ar": ["الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"],
}


class CalendarSystem(ABC):
    """One calendar's rules, expressed against the Gregorian pivot."""

    kind: str = ""
    months_in_year: int = 12

    @abstractmethod
    def to_gregorian(self, d: CivilDate) -> GDate:
        """Raise InvalidArgumentError if `d` does not exist in this calendar."""

    @abstractmethod
    def from_gregorian(self, g: GDate) -> CivilDate:
        ...

    @abstractmethod
    def month_length(self, year: int, month: int) -> int:
        ...

    @abstractmethod
    def month_name(self, d: CivilDate, language: str) -> str:
        ...

    def validate(self, d: CivilDate) -> CivilDate:
        self.to_gregorian(d)
        return d

    def weekday_name(self, d: CivilDate, language: str) -> str:
        names = WEEKDAY_NAMES.get(language, WEEKDAY_NAMES["en"])
        return names[self.to_gregorian(d).weekday()]

    def days_in_year(self, year: int) -> int:
        return sum(self.month_length(year, m) for m in range(1, self.months_in_year + 1))

    def max_day_of_year(self, anchor: CivilDate) -> int:
        """Actual maximum day-of-year of the year `anchor` falls in."""
        self.validate(anchor)
        return self.days_in_year(anchor.year)

    def day_of_year(self, d: CivilDate) -> int:
        self.validate(d)
        return sum(self.month_length(d.year, m) for m in range(1, d.month)) + d.day

    def plus_days(self, d: CivilDate, days: int) -> CivilDate:
        if not days:
            return self.validate(d)
        try:
            g = self.to_gregorian(d) + timedelta(days=days)
        except OverflowError as exc:
            raise InvalidArgumentError(f"{d} + {days} day(s) is out of range") from exc
        return self.from_gregorian(g)

    def _plus_months(self, d: CivilDate, months: int) -> CivilDate:
        if not months:
            return d
        y, m0 = divmod(d.year * self.months_in_year + (d.month - 1) + months, self.months_in_year)
        m = m0 + 1
        return self.validate(CivilDate(y, m, min(d.day, self.month_length(y, m))))

    def add_years_months_days(self, d: CivilDate, years: int = 0, months: int = 0, days: int = 0) -> CivilDate:
        """
        Add years, then months, then days. The day-of-month is pinned to the
        month length after each of the first two steps (31 Jan + 1 month ->
        end of February).
        """
        self.validate(d)
        out = self._plus_months(d, years * self.months_in_year)
        out = self._plus_months(out, months)
        out = self.plus_days(out, days)
        logger.debug("➕ %s %s %+dy %+dm %+dd → %s", self.kind, d, years, months, days, out)
        return out


class GregorianCalendar(CalendarSystem):
    kind = "gregorian"

    def to_gregorian(self, d: CivilDate) -> GDate:
        try:
            return GDate(d.year, d.month, d.day)
        except (ValueError, TypeError) as exc:
            raise InvalidArgumentError(f"{d} is not a valid gregorian date: {exc}") from exc

    def from_gregorian(self, g: GDate) -> CivilDate:
        return CivilDate(g.year, g.month, g.day)

    def month_length(self, year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]

    def month_name(self, d: CivilDate, language: str) -> str:
        names = GREGORIAN_MONTH_NAMES.get(language, GREGORIAN_MONTH_NAMES["en"])
        return names[d.month - 1]

    def add_years_months_days(self, d: CivilDate, years: int = 0, months: int = 0, days: int = 0) -> CivilDate:
        g = self.to_gregorian(d)
        try:
            g = g + relativedelta(years=years)
            g = g + relativedelta(months=months)
            g = g + timedelta(days=days)
        except (ValueError, OverflowError) as exc:
            raise InvalidArgumentError(f"{d} {years:+d}y {months:+d}m {days:+d}d is out of range") from exc
        out = self.from_gregorian(g)
        logger.debug("➕ %s %s %+dy %+dm %+dd → %s", self.kind, d, years, months, days, out)
        return out


class PersianCalendar(CalendarSystem):
    """Solar Hijri (Jalali / khorshidi) calendar backed by jdatetime."""

    kind = "persian"

    def to_gregorian(self, d: CivilDate) -> GDate:
        try:
            return jd.date(d.year, d.month, d.day).togregorian()
        except (ValueError, TypeError) as exc:
            raise InvalidArgumentError(f"{d} is not a valid solar hijri date: {exc}") from exc

    def from_gregorian(self, g: GDate) -> CivilDate:
        try:
            j = jd.date.fromgregorian(date=g)
        except ValueError as exc:
            raise InvalidArgumentError(f"{g} has no solar hijri equivalent: {exc}") from exc
        return CivilDate(j.year, j.month, j.day)

    def month_length(self, year: int, month: int) -> int:
        if month <= 6:
            return 31
        if month <= 11:
            return 30
        return 30 if jd.date(year, 1, 1).isleap() else 29

    def month_name(self, d: CivilDate, language: str) -> str:
        loc = "fa_IR" if language == "fa" else "en_US"
        return jd.date(d.year, d.month, d.day, locale=loc).strftime("%B")


class HijriCalendar(CalendarSystem):
    """Lunar Hijri calendar (Umm al-Qura) backed by hijri_converter."""

    kind = "islamic-umalqura"

    @staticmethod
    def _hijri(d: CivilDate) -> Hijri:
        try:
            return Hijri(d.year, d.month, d.day)
        except (ValueError, OverflowError, TypeError) as exc:
            raise InvalidArgumentError(f"{d} is not a supported hijri date: {exc}") from exc

    def to_gregorian(self, d: CivilDate) -> GDate:
        g = self._hijri(d).to_gregorian()
        return GDate(g.year, g.month, g.day)

    def from_gregorian(self, g: GDate) -> CivilDate:
        try:
            h = Gregorian(g.year, g.month, g.day).to_hijri()
        except (ValueError, OverflowError) as exc:
            raise InvalidArgumentError(f"{g} has no supported hijri equivalent: {exc}") from exc
        return CivilDate(h.year, h.month, h.day)

    def month_length(self, year: int, month: int) -> int:
        return self._hijri(CivilDate(year, month, 1)).month_length()

    def month_name(self, d: CivilDate, language: str) -> str:
        return self._hijri(d).month_name("ar" if language == "ar" else "en")


CALENDAR_SYSTEMS: Dict[str, CalendarSystem] = {
    s.kind: s for s in (GregorianCalendar(), PersianCalendar(), HijriCalendar())
}


def system_for_kind(kind: str) -> CalendarSystem:
    try:
        return CALENDAR_SYSTEMS[kind]
    except KeyError:
        raise InvalidArgumentError(
            f"unknown calendar kind {kind!r}; expected one of {sorted(CALENDAR_SYSTEMS)}"
        ) from None
