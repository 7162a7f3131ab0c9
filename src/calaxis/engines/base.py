"""
calaxis.engines.base
--------------------
Shared behaviour of the concrete calendar systems. Subclasses supply the
transform pair, bounds, validity and month lengths; everything else is
derived from those through the day axis.
"""

from __future__ import annotations

from typing import Optional, Tuple

from calaxis.core.errors import InvalidDateError, OutOfRangeError
from calaxis.core.types import CalendarDate, DayCount, Era


class BaseCalendar:
    name: str = ""
    months_per_year: int = 12

    # ---------------------------------------------------------
    # Contract (implemented by subclasses)
    # ---------------------------------------------------------

    def eras(self) -> Tuple[Era, ...]:
        raise NotImplementedError

    def min_day_count(self) -> DayCount:
        raise NotImplementedError

    def max_day_count(self) -> DayCount:
        raise NotImplementedError

    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool:
        raise NotImplementedError

    def length_of_month(self, era: Era, year: int, month: int) -> int:
        raise NotImplementedError

    def to_day_count(self, date: CalendarDate) -> DayCount:
        raise NotImplementedError

    def from_day_count(self, jdn: DayCount) -> CalendarDate:
        raise NotImplementedError

    # ---------------------------------------------------------
    # Derived operations
    # ---------------------------------------------------------

    def length_of_year(self, era: Era, year: int) -> int:
        return sum(
            self.length_of_month(era, year, m)
            for m in self.months_of_year(era, year)
        )

    def months_of_year(self, era: Era, year: int) -> Tuple[int, ...]:
        return tuple(range(1, self.months_per_year + 1))

    def start_of_year(self, date: CalendarDate) -> CalendarDate:
        first = self.months_of_year(date.era, date.year)[0]
        return CalendarDate(date.era, date.year, first, 1, date.variant)

    def default_era(self) -> Era:
        return self.eras()[0]

    def of(self, year: int, month: int, day: int, era: Optional[Era] = None) -> CalendarDate:
        """Validating factory for dates of this calendar."""
        era = self.default_era() if era is None else era
        if not self.is_valid(era, year, month, day):
            raise InvalidDateError(f"Invalid {self.name} date: {era.value}-{year}-{month}-{day}")
        return CalendarDate(era, year, month, day, self._variant_tag())

    def displayed_year(self, date: CalendarDate) -> int:
        """Year number shown to users; the year of era unless historic rules apply."""
        return date.year

    def plus_days(self, date: CalendarDate, days: int) -> CalendarDate:
        return self.from_day_count(self.to_day_count(date) + days)

    def contains(self, jdn: DayCount) -> bool:
        return self.min_day_count() <= jdn <= self.max_day_count()

    def _check_range(self, jdn: DayCount) -> None:
        if not self.contains(jdn):
            raise OutOfRangeError(
                f"Out of range for {self.name}: {jdn} "
                f"(supported: {self.min_day_count()}..{self.max_day_count()})"
            )

    def _check_valid(self, date: CalendarDate) -> None:
        if not self.is_valid(date.era, date.year, date.month, date.day):
            raise InvalidDateError(f"Invalid {self.name} date: {date}")

    def _variant_tag(self) -> str:
        return ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
