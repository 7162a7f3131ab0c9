from __future__ import annotations

from typing import Optional

from calaxis.core.engine import CalendarSystem
from calaxis.core.errors import UnsupportedModificationError
from calaxis.core.time import gregorian_year_of
from calaxis.core.types import CalendarDate


class RelatedGregorianYear:
    """
    Read-only projection of a date onto the proleptic Gregorian year in which
    its own calendar year begins.
    """

    def __init__(self, calendar: CalendarSystem):
        self.calendar = calendar

    def _year_of_start(self, date: CalendarDate) -> int:
        start = self.calendar.start_of_year(date)
        return gregorian_year_of(self.calendar.to_day_count(start))

    def value(self, context: CalendarDate) -> int:
        return self._year_of_start(context)

    def minimum(self, context: Optional[CalendarDate] = None) -> int:
        cal = self.calendar
        return self._year_of_start(cal.from_day_count(cal.min_day_count()))

    def maximum(self, context: Optional[CalendarDate] = None) -> int:
        cal = self.calendar
        return self._year_of_start(cal.from_day_count(cal.max_day_count()))

    def is_valid(self, context: CalendarDate, value: int) -> bool:
        return self.value(context) == value

    def with_value(self, context: CalendarDate, value: int) -> CalendarDate:
        if self.is_valid(context, value):
            return context
        raise UnsupportedModificationError("The related gregorian year is read-only.")
