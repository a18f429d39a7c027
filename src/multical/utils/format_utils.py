import re
from typing import TYPE_CHECKING, Union

from multical.exceptions import InvalidArgumentError, InvalidFormatError

if TYPE_CHECKING:
    from multical.calendars import CalendarSystem
    from multical.types.calendar_types import CivilDate, CivilDateTime, LocaleTag

# Language & digit normalization

PERSIAN_DIGITS = dict(zip("۰۱۲۳۴۵۶۷۸۹", "0123456789"))
ARABIC_INDIC_DIGITS = dict(zip("٠١٢٣٤٥٦٧٨٩", "0123456789"))

NATIVE_DIGITS = {
    "fa": {v: k for k, v in PERSIAN_DIGITS.items()},
    "ar": {v: k for k, v in ARABIC_INDIC_DIGITS.items()},
}

SUPPORTED_DIRECTIVES = frozenset("YymdHMSjBA%")

_DIRECTIVE_RE = re.compile(r"%(.?)", re.DOTALL)


def normalize_digits(s: str) -> str:
    if not s:
        return s
    out = []
    for ch in s:
        if ch in PERSIAN_DIGITS:
            out.append(PERSIAN_DIGITS[ch])
        elif ch in ARABIC_INDIC_DIGITS:
            out.append(ARABIC_INDIC_DIGITS[ch])
        else:
            out.append(ch)
    return "".join(out)


def localize_digits(s: str, language: str) -> str:
    """Render ASCII digits with the native digit set of `language`, if it has one."""
    table = NATIVE_DIGITS.get(language)
    if not table:
        return s
    return "".join(table.get(ch, ch) for ch in s)


def check_pattern(pattern: str) -> str:
    if not pattern:
        raise InvalidArgumentError("pattern should not be empty or None")
    for m in _DIRECTIVE_RE.finditer(pattern):
        if m.group(1) not in SUPPORTED_DIRECTIVES:
            raise InvalidFormatError(
                f"pattern {pattern!r} uses unsupported directive %{m.group(1)}"
            )
    return pattern


def format_civil(
    value: Union["CivilDate", "CivilDateTime"],
    system: "CalendarSystem",
    locale: "LocaleTag",
    pattern: str,
) -> str:
    """
    Render a civil date or date-time of `system` with a strftime-style pattern.

    Names (%B month, %A weekday) come from the calendar system in the locale's
    language; every digit is rendered in the language's native digit set.
    Date-only values render time directives as 00.
    """
    check_pattern(pattern)
    lang = locale.language
    d = value.date() if hasattr(value, "hour") else value
    hour = getattr(value, "hour", 0)
    minute = getattr(value, "minute", 0)
    second = getattr(value, "second", 0)

    def _sub(m: "re.Match[str]") -> str:
        code = m.group(1)
        if code == "Y":
            return localize_digits(f"{d.year:04d}", lang)
        if code == "y":
            return localize_digits(f"{d.year % 100:02d}", lang)
        if code == "m":
            return localize_digits(f"{d.month:02d}", lang)
        if code == "d":
            return localize_digits(f"{d.day:02d}", lang)
        if code == "H":
            return localize_digits(f"{hour:02d}", lang)
        if code == "M":
            return localize_digits(f"{minute:02d}", lang)
        if code == "S":
            return localize_digits(f"{second:02d}", lang)
        if code == "j":
            return localize_digits(f"{system.day_of_year(d):03d}", lang)
        if code == "B":
            return system.month_name(d, lang)
        if code == "A":
            return system.weekday_name(d, lang)
        return "%"

    return _DIRECTIVE_RE.sub(_sub, pattern)
