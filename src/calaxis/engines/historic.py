"""
calaxis.engines.historic
------------------------
Historic civil calendar: Julian before a reform day, Gregorian from it on.
Dates in the gap skipped by the reform are invalid.

The calendar also carries a NewYearStrategy that decides where each historic
year begins and which year number is displayed for a date.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from calaxis.core.errors import InvalidDateError, OutOfRangeError
from calaxis.core.time import (
    gregorian_month_length,
    gregorian_to_jdn,
    jdn_to_gregorian,
    jdn_to_julian,
    julian_month_length,
    julian_to_jdn,
    parse_iso_date,
)
from calaxis.core.types import CalendarDate, DayCount, Era, HistoricEra
from calaxis.history.rules import NewYearRule
from calaxis.history.strategy import NewYearStrategy

from .base import BaseCalendar

# first Gregorian day of the papal reform (1582-10-15)
STANDARD_CUTOVER = gregorian_to_jdn(1582, 10, 15)

MIN_JDN = julian_to_jdn(-44, 1, 1)        # BC 45-01-01
MAX_JDN = gregorian_to_jdn(9999, 12, 31)


@dataclass(frozen=True)
class HistoricParams:
    cutover: str = "1582-10-15"   # first Gregorian day (ISO, Gregorian)
    new_year: NewYearStrategy = NewYearStrategy.DEFAULT


class HistoricCalendar(BaseCalendar):
    def __init__(
        self,
        name: str = "historic",
        cutover: DayCount = STANDARD_CUTOVER,
        new_year: NewYearStrategy = NewYearStrategy.DEFAULT,
    ):
        if cutover < STANDARD_CUTOVER:
            raise OutOfRangeError("Gregorian calendar did not exist before 1582-10-15.")
        if cutover > MAX_JDN:
            raise OutOfRangeError(f"Reform day out of range: {cutover}")
        self.name = name
        self.cutover = cutover
        self.strategy = new_year
        # last Julian tuple and first Gregorian tuple, in proleptic years
        self._julian_end = jdn_to_julian(cutover - 1)
        self._gregorian_start = jdn_to_gregorian(cutover)

    @classmethod
    def from_params(cls, name: str, params: HistoricParams) -> "HistoricCalendar":
        return cls(name, parse_iso_date(params.cutover), params.new_year)

    def with_new_year_strategy(self, strategy: NewYearStrategy) -> "HistoricCalendar":
        return HistoricCalendar(self.name, self.cutover, strategy)

    # ---------------------------------------------------------
    # Calendar system contract
    # ---------------------------------------------------------

    def eras(self) -> Tuple[Era, ...]:
        return (HistoricEra.BC, HistoricEra.AD)

    def default_era(self) -> Era:
        return HistoricEra.AD

    def min_day_count(self) -> DayCount:
        return MIN_JDN

    def max_day_count(self) -> DayCount:
        return MAX_JDN

    def _resolve(self, era: Era, year: int, month: int, day: int) -> Optional[DayCount]:
        """JDN of a historic tuple, or None if the tuple is invalid."""
        if not isinstance(era, HistoricEra) or year < 1 or not (1 <= month <= 12) or day < 1:
            return None
        ad = era.anno_domini(year)
        t = (ad, month, day)
        if t >= self._gregorian_start:
            if day > gregorian_month_length(ad, month):
                return None
            jdn = gregorian_to_jdn(ad, month, day)
        elif t <= self._julian_end:
            if day > julian_month_length(ad, month):
                return None
            jdn = julian_to_jdn(ad, month, day)
        else:
            return None
        return jdn if MIN_JDN <= jdn <= MAX_JDN else None

    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool:
        return self._resolve(era, year, month, day) is not None

    def length_of_month(self, era: Era, year: int, month: int) -> int:
        count = sum(1 for d in range(1, 32) if self.is_valid(era, year, month, d))
        if count == 0:
            raise OutOfRangeError(f"Out of bounds: era={era}, year={year}, month={month}")
        return count

    def start_of_year(self, date: CalendarDate) -> CalendarDate:
        for m in range(1, 13):
            for d in range(1, 32):
                if self.is_valid(date.era, date.year, m, d):
                    return CalendarDate(date.era, date.year, m, d)
        raise OutOfRangeError(f"Year not covered: {date.era.value}-{date.year}")

    def to_day_count(self, date: CalendarDate) -> DayCount:
        jdn = self._resolve(date.era, date.year, date.month, date.day)
        if jdn is None:
            raise InvalidDateError(f"Invalid {self.name} date: {date}")
        return jdn

    def from_day_count(self, jdn: DayCount) -> CalendarDate:
        self._check_range(jdn)
        if jdn >= self.cutover:
            ad, m, d = jdn_to_gregorian(jdn)
        else:
            ad, m, d = jdn_to_julian(jdn)
        if ad >= 1:
            return CalendarDate(HistoricEra.AD, ad, m, d)
        return CalendarDate(HistoricEra.BC, 1 - ad, m, d)

    # ---------------------------------------------------------
    # New-year semantics
    # ---------------------------------------------------------

    def new_year(self, era: HistoricEra, year_of_era: int) -> CalendarDate:
        return self.strategy.new_year(era, year_of_era)

    def year_start(self, era: HistoricEra, year_of_era: int) -> DayCount:
        """Day count of the first day of the given historic year."""
        return self.to_day_count(self.new_year(era, year_of_era))

    def displayed_year(self, date: CalendarDate) -> int:
        return self.strategy.displayed_year(date)

    def __repr__(self) -> str:
        return f"HistoricCalendar(name={self.name!r}, cutover={self.cutover}, strategy={self.strategy})"


# England and its colonies: Gregorian from 1752-09-14. The year began on
# Christmas through 1086, on January 1 through 1154 and on Lady Day
# (March 25) through 1751; 1752 started on January 1 again.
BRITISH_PARAMS = HistoricParams(
    cutover="1752-09-14",
    new_year=(
        NewYearRule.CHRISTMAS_STYLE.until(1086)
        .and_then(NewYearRule.BEGIN_OF_JANUARY.until(1154))
        .and_then(NewYearRule.MARIA_ANNUNCIATION.until(1751))
    ),
)
