"""
calaxis.engines.hebrew
----------------------
Arithmetic Hebrew calendar (Dershowitz/Reingold, "Calendrical Calculations").

Months are numbered in civil order starting with Tishri. ADAR_I only exists
in leap years; in common years ADAR_II is the single month of Adar.
"""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache
from typing import Tuple

from calaxis.core.errors import InvalidDateError, OutOfRangeError
from calaxis.core.types import CalendarDate, DayCount, Era, HebrewEra

from .base import BaseCalendar

# JDN of 1 Tishri AM 1 (Julian -3760-10-07)
HEBREW_EPOCH = 347998

MIN_YEAR = 1
MAX_YEAR = 9999

# mean year length in days as the fraction 35975351/98496
_YEAR_NUM = 35975351
_YEAR_DEN = 98496


class HebrewMonth(IntEnum):
    TISHRI = 1
    HESHVAN = 2
    KISLEV = 3
    TEVET = 4
    SHEVAT = 5
    ADAR_I = 6
    ADAR_II = 7
    NISAN = 8
    IYAR = 9
    SIVAN = 10
    TAMUZ = 11
    AV = 12
    ELUL = 13

    def biblical_value(self, leap_year: bool) -> int:
        """Month number counted from Nisan (1) as in the Torah."""
        if self >= HebrewMonth.NISAN:
            return self.value - 7
        if self <= HebrewMonth.SHEVAT:
            return self.value + 6
        if self is HebrewMonth.ADAR_I:
            return 12
        return 13 if leap_year else 12

    @staticmethod
    def of_biblical(value: int, leap_year: bool) -> "HebrewMonth":
        if 1 <= value <= 6:
            return HebrewMonth(value + 7)
        if 7 <= value <= 11:
            return HebrewMonth(value - 6)
        if value == 12:
            return HebrewMonth.ADAR_I if leap_year else HebrewMonth.ADAR_II
        if value == 13 and leap_year:
            return HebrewMonth.ADAR_II
        raise InvalidDateError(f"Biblical month out of range: {value} (leap year: {leap_year})")


def is_leap_year(year: int) -> bool:
    return (7 * year + 1) % 19 < 7


def _elapsed_days(year: int) -> int:
    """Days from the epoch to the molad-based new year, with the first postponement."""
    months = (235 * year - 234) // 19
    parts = 12084 + 13753 * months
    days = 29 * months + parts // 25920
    if (3 * (days + 1)) % 7 < 3:
        days += 1
    return days


def _year_length_correction(year: int) -> int:
    ny0 = _elapsed_days(year - 1)
    ny1 = _elapsed_days(year)
    ny2 = _elapsed_days(year + 1)
    if ny2 - ny1 == 356:
        return 2
    if ny1 - ny0 == 382:
        return 1
    return 0


@lru_cache(maxsize=4096)
def new_year_jdn(year: int) -> int:
    """JDN of 1 Tishri of the given year."""
    return HEBREW_EPOCH + _elapsed_days(year) + _year_length_correction(year)


def days_in_year(year: int) -> int:
    return new_year_jdn(year + 1) - new_year_jdn(year)


def months_of(year: int) -> Tuple[int, ...]:
    if is_leap_year(year):
        return tuple(range(1, 14))
    return (1, 2, 3, 4, 5, 7, 8, 9, 10, 11, 12, 13)


def month_length(year: int, month: int) -> int:
    """Length of a month without range checks (ADAR_I of a common year has 0 days)."""
    if month == HebrewMonth.HESHVAN:
        return 30 if days_in_year(year) % 10 == 5 else 29
    if month == HebrewMonth.KISLEV:
        return 29 if days_in_year(year) % 10 == 3 else 30
    if month == HebrewMonth.ADAR_I:
        return 30 if is_leap_year(year) else 0
    if month in (HebrewMonth.TEVET, HebrewMonth.ADAR_II, HebrewMonth.IYAR,
                 HebrewMonth.TAMUZ, HebrewMonth.ELUL):
        return 29
    return 30


def year_of(jdn: int) -> int:
    """Hebrew year containing the JDN (arithmetic, unbounded)."""
    approx = ((jdn - HEBREW_EPOCH) * _YEAR_DEN) // _YEAR_NUM + 1
    year = approx - 1
    while new_year_jdn(year + 1) <= jdn:
        year += 1
    return year


class HebrewCalendar(BaseCalendar):
    months_per_year = 13

    def __init__(self, name: str = "hebrew"):
        self.name = name

    def eras(self) -> Tuple[Era, ...]:
        return (HebrewEra.ANNO_MUNDI,)

    def min_day_count(self) -> DayCount:
        return new_year_jdn(MIN_YEAR)

    def max_day_count(self) -> DayCount:
        return new_year_jdn(MAX_YEAR + 1) - 1

    def is_leap_year(self, year: int) -> bool:
        return is_leap_year(year)

    def months_of_year(self, era: Era, year: int) -> Tuple[int, ...]:
        return months_of(year)

    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool:
        if era is not HebrewEra.ANNO_MUNDI or not (MIN_YEAR <= year <= MAX_YEAR):
            return False
        if not (1 <= month <= 13):
            return False
        return 1 <= day <= month_length(year, month)

    def length_of_month(self, era: Era, year: int, month: int) -> int:
        if (
            era is not HebrewEra.ANNO_MUNDI
            or not (MIN_YEAR <= year <= MAX_YEAR)
            or month not in months_of(year)
        ):
            raise OutOfRangeError(f"Out of bounds: year={year}, month={month}")
        return month_length(year, month)

    def length_of_year(self, era: Era, year: int) -> int:
        if era is not HebrewEra.ANNO_MUNDI or not (MIN_YEAR <= year <= MAX_YEAR):
            raise OutOfRangeError(f"Out of bounds: yearOfEra={year}")
        return days_in_year(year)

    def to_day_count(self, date: CalendarDate) -> DayCount:
        self._check_valid(date)
        jdn = new_year_jdn(date.year)
        for m in months_of(date.year):
            if m == date.month:
                break
            jdn += month_length(date.year, m)
        return jdn + date.day - 1

    def from_day_count(self, jdn: DayCount) -> CalendarDate:
        self._check_range(jdn)
        year = year_of(jdn)
        start = new_year_jdn(year)
        for m in months_of(year):
            length = month_length(year, m)
            if jdn < start + length:
                return CalendarDate(HebrewEra.ANNO_MUNDI, year, m, jdn - start + 1)
            start += length
        raise AssertionError(f"JDN {jdn} not covered by Hebrew year {year}")

    def of_biblical(self, year: int, month: int, day: int) -> CalendarDate:
        """Date from a month counted from Nisan (12 = Adar or Adar I, 13 = Adar II)."""
        hmonth = HebrewMonth.of_biblical(month, is_leap_year(year))
        return self.of(year, int(hmonth), day)


HEBREW = HebrewCalendar()
