# test_calendars.py
# Calendar systems on their own, without profiles or zones.

from datetime import date

import pytest

from multical.calendars import (
    CALENDAR_SYSTEMS,
    GregorianCalendar,
    HijriCalendar,
    PersianCalendar,
    system_for_kind,
)
from multical.exceptions import InvalidArgumentError
from multical.types.calendar_types import CivilDate

GREG = GregorianCalendar()
PERSIAN = PersianCalendar()
HIJRI = HijriCalendar()


# --------------------------- PIVOT ---------------------------

@pytest.mark.parametrize("system,d,g", [
    (GREG, CivilDate(2021, 3, 20), date(2021, 3, 20)),
    (PERSIAN, CivilDate(1399, 12, 30), date(2021, 3, 20)),
    (PERSIAN, CivilDate(1400, 1, 1), date(2021, 3, 21)),
    (PERSIAN, CivilDate(1392, 2, 15), date(2013, 5, 5)),
    (HIJRI, CivilDate(1444, 9, 1), date(2023, 3, 23)),
    (HIJRI, CivilDate(1445, 9, 1), date(2024, 3, 11)),
])
def test_to_and_from_gregorian(system, d, g):
    assert system.to_gregorian(d) == g
    assert system.from_gregorian(g) == d


@pytest.mark.parametrize("system,d", [
    (GREG, CivilDate(2021, 2, 29)),
    (GREG, CivilDate(2021, 13, 1)),
    (PERSIAN, CivilDate(1400, 12, 30)),
    (PERSIAN, CivilDate(1400, 7, 31)),
    (HIJRI, CivilDate(1444, 9, 31)),
    (HIJRI, CivilDate(1200, 1, 1)),
])
def test_invalid_dates_are_rejected(system, d):
    with pytest.raises(InvalidArgumentError):
        system.to_gregorian(d)
    with pytest.raises(InvalidArgumentError):
        system.validate(d)


def test_hijri_out_of_supported_range():
    with pytest.raises(InvalidArgumentError):
        HIJRI.from_gregorian(date(1800, 1, 1))


# --------------------------- MONTHS & YEARS ---------------------------

@pytest.mark.parametrize("system,year,month,length", [
    (GREG, 2024, 2, 29),
    (GREG, 2023, 2, 28),
    (GREG, 2023, 4, 30),
    (PERSIAN, 1400, 1, 31),
    (PERSIAN, 1400, 7, 30),
    (PERSIAN, 1399, 12, 30),
    (PERSIAN, 1400, 12, 29),
])
def test_month_length(system, year, month, length):
    assert system.month_length(year, month) == length


def test_hijri_months_are_29_or_30_days():
    lengths = [HIJRI.month_length(1445, m) for m in range(1, 13)]
    assert set(lengths) <= {29, 30}
    assert HIJRI.days_in_year(1445) in (354, 355)


@pytest.mark.parametrize("system,year,days", [
    (GREG, 2000, 366),
    (GREG, 1900, 365),
    (PERSIAN, 1399, 366),
    (PERSIAN, 1400, 365),
])
def test_days_in_year(system, year, days):
    assert system.days_in_year(year) == days
    assert system.max_day_of_year(CivilDate(year, 2, 1)) == days


@pytest.mark.parametrize("system,d,doy", [
    (GREG, CivilDate(2021, 3, 20), 79),
    (GREG, CivilDate(2020, 12, 31), 366),
    (PERSIAN, CivilDate(1400, 1, 31), 31),
    (PERSIAN, CivilDate(1399, 12, 30), 366),
    (HIJRI, CivilDate(1445, 1, 1), 1),
])
def test_day_of_year(system, d, doy):
    assert system.day_of_year(d) == doy


# --------------------------- NAMES ---------------------------

@pytest.mark.parametrize("system,d,lang,name", [
    (GREG, CivilDate(2021, 3, 20), "en", "March"),
    (GREG, CivilDate(2021, 4, 20), "fa", "آوریل"),
    (GREG, CivilDate(2021, 4, 20), "xx", "April"),
    (PERSIAN, CivilDate(1400, 1, 1), "fa", "فروردین"),
    (PERSIAN, CivilDate(1400, 1, 1), "en", "Farvardin"),
    (PERSIAN, CivilDate(1399, 12, 30), "fa", "اسفند"),
    (HIJRI, CivilDate(1444, 9, 1), "ar", "رمضان"),
])
def test_month_name(system, d, lang, name):
    assert system.month_name(d, lang) == name


def test_weekday_name_follows_gregorian_weekday():
    # 2021-03-20 was a Saturday
    assert GREG.weekday_name(CivilDate(2021, 3, 20), "en") == "Saturday"
    assert PERSIAN.weekday_name(CivilDate(1399, 12, 30), "fa") == "شنبه"
    assert HIJRI.weekday_name(CivilDate(1444, 9, 1), "ar") == "الخميس"


# --------------------------- ARITHMETIC ---------------------------

@pytest.mark.parametrize("system,d,ymd,expected", [
    (GREG, CivilDate(2021, 9, 4), (2, 3, 5), CivilDate(2023, 12, 9)),
    (GREG, CivilDate(2021, 12, 31), (0, 2, 0), CivilDate(2022, 2, 28)),
    (GREG, CivilDate(2021, 3, 31), (0, -1, 0), CivilDate(2021, 2, 28)),
    (PERSIAN, CivilDate(1399, 12, 30), (1, 0, 0), CivilDate(1400, 12, 29)),
    (PERSIAN, CivilDate(1400, 6, 31), (0, 6, 0), CivilDate(1400, 12, 29)),
    (PERSIAN, CivilDate(1400, 1, 1), (0, -1, 0), CivilDate(1399, 12, 1)),
    (PERSIAN, CivilDate(1399, 12, 29), (0, 0, 2), CivilDate(1400, 1, 1)),
    (HIJRI, CivilDate(1444, 9, 1), (1, 0, 0), CivilDate(1445, 9, 1)),
    (HIJRI, CivilDate(1444, 12, 1), (0, 1, 0), CivilDate(1445, 1, 1)),
])
def test_add_years_months_days(system, d, ymd, expected):
    assert system.add_years_months_days(d, *ymd) == expected


def test_add_is_sequential_not_combined():
    # 31 Farvardin + 6 months clamps to 30 Mehr, then + 1 day is 1 Aban
    assert PERSIAN.add_years_months_days(CivilDate(1400, 1, 31), months=6, days=1) == CivilDate(1400, 8, 1)


@pytest.mark.parametrize("days", [-400, -1, 0, 1, 45, 366])
def test_plus_days_matches_gregorian_arithmetic(days):
    start = CivilDate(1400, 1, 1)
    moved = PERSIAN.plus_days(start, days)
    assert (PERSIAN.to_gregorian(moved) - PERSIAN.to_gregorian(start)).days == days


def test_add_out_of_range():
    with pytest.raises(InvalidArgumentError):
        GREG.add_years_months_days(CivilDate(9999, 12, 31), days=1)


# --------------------------- LOOKUP ---------------------------

def test_system_for_kind():
    assert set(CALENDAR_SYSTEMS) == {"gregorian", "persian", "islamic-umalqura"}
    assert isinstance(system_for_kind("persian"), PersianCalendar)
    with pytest.raises(InvalidArgumentError):
        system_for_kind("julian")


def test_hijri_library_rename_notice_is_filtered(pytestconfig):
    assert any("hijri" in f and "DeprecationWarning" in f for f in pytestconfig.getini("filterwarnings"))
