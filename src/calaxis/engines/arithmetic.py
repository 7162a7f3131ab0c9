"""
calaxis.engines.arithmetic
--------------------------
Proleptic Gregorian and Julian calendars. Astronomical year numbering
(1 BC = year 0) under the single era CommonEra.CE.
"""

from __future__ import annotations

from typing import Callable, Tuple

from calaxis.core.errors import OutOfRangeError
from calaxis.core.time import (
    gregorian_month_length,
    gregorian_to_jdn,
    jdn_to_gregorian,
    jdn_to_julian,
    julian_month_length,
    julian_to_jdn,
)
from calaxis.core.types import CalendarDate, CommonEra, DayCount, Era

from .base import BaseCalendar

MIN_YEAR = -999_999_999
MAX_YEAR = 999_999_999


class ProlepticCalendar(BaseCalendar):
    """Arithmetic solar calendar defined by a JDN transform pair and a month-length rule."""

    def __init__(
        self,
        name: str,
        to_jdn: Callable[[int, int, int], int],
        from_jdn: Callable[[int], Tuple[int, int, int]],
        month_length: Callable[[int, int], int],
    ):
        self.name = name
        self._to_jdn = to_jdn
        self._from_jdn = from_jdn
        self._month_length = month_length
        self._min = to_jdn(MIN_YEAR, 1, 1)
        self._max = to_jdn(MAX_YEAR, 12, 31)

    def eras(self) -> Tuple[Era, ...]:
        return (CommonEra.CE,)

    def min_day_count(self) -> DayCount:
        return self._min

    def max_day_count(self) -> DayCount:
        return self._max

    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool:
        if era is not CommonEra.CE or not (MIN_YEAR <= year <= MAX_YEAR):
            return False
        if not (1 <= month <= 12):
            return False
        return 1 <= day <= self._month_length(year, month)

    def length_of_month(self, era: Era, year: int, month: int) -> int:
        if era is not CommonEra.CE or not (MIN_YEAR <= year <= MAX_YEAR) or not (1 <= month <= 12):
            raise OutOfRangeError(f"Out of bounds: era={era}, year={year}, month={month}")
        return self._month_length(year, month)

    def to_day_count(self, date: CalendarDate) -> DayCount:
        self._check_valid(date)
        return self._to_jdn(date.year, date.month, date.day)

    def from_day_count(self, jdn: DayCount) -> CalendarDate:
        self._check_range(jdn)
        y, m, d = self._from_jdn(jdn)
        return CalendarDate(CommonEra.CE, y, m, d)


class GregorianCalendar(ProlepticCalendar):
    def __init__(self, name: str = "gregorian"):
        super().__init__(name, gregorian_to_jdn, jdn_to_gregorian, gregorian_month_length)


class JulianCalendar(ProlepticCalendar):
    def __init__(self, name: str = "julian"):
        super().__init__(name, julian_to_jdn, jdn_to_julian, julian_month_length)


GREGORIAN = GregorianCalendar()
JULIAN = JulianCalendar()
