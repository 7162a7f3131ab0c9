"""
calaxis.anniversary
-------------------
Recurring personal anniversaries in the Hebrew calendar.

A birthday or a yahrzeit (anniversary of a death) is fixed by a Hebrew date.
Because of leap months and the variable lengths of Heshvan and Kislev the
same month and day do not always exist in a later year; both rules map the
event onto a valid date of the target year.

Events may be given in any calendar system; they are converted to the Hebrew
calendar through the day axis first.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from .core.engine import CalendarSystem
from .core.time import gregorian_to_jdn
from .core.types import CalendarDate
from .engines.arithmetic import GREGORIAN
from .engines.hebrew import HEBREW, MAX_YEAR, MIN_YEAR, HebrewMonth, is_leap_year, month_length, year_of


def _to_hebrew(event: CalendarDate, source: Optional[CalendarSystem]) -> CalendarDate:
    if source is None or source is HEBREW:
        return HEBREW.from_day_count(HEBREW.to_day_count(event))
    return HEBREW.from_day_count(source.to_day_count(event))


def _birthday(event: CalendarDate, hyear: int) -> CalendarDate:
    month, day = HebrewMonth(event.month), event.day
    leap = is_leap_year(hyear)

    # Adar of a common year and Adar II of a leap year: always the last Adar
    if month is HebrewMonth.ADAR_II:
        return HEBREW.of_biblical(hyear, 13 if leap else 12, day)

    if month is HebrewMonth.ADAR_I and not leap:
        month = HebrewMonth.ADAR_II
    if day <= 29:
        return HEBREW.of(hyear, int(month), day)
    # day 30 of a month that may be short in the target year
    return HEBREW.plus_days(HEBREW.of(hyear, int(month), 1), day - 1)


def _yahrzeit(event: CalendarDate, hyear: int) -> CalendarDate:
    y, month, day = event.year, HebrewMonth(event.month), event.day

    if month is HebrewMonth.HESHVAN and day == 30 and month_length(y + 1, HebrewMonth.HESHVAN) == 29:
        return HEBREW.plus_days(HEBREW.of(hyear, int(HebrewMonth.KISLEV), 1), -1)
    if month is HebrewMonth.KISLEV and day == 30 and month_length(y + 1, HebrewMonth.KISLEV) == 29:
        return HEBREW.plus_days(HEBREW.of(hyear, int(HebrewMonth.TEVET), 1), -1)
    if month is HebrewMonth.ADAR_II and is_leap_year(y):
        return HEBREW.of(hyear, int(HebrewMonth.ADAR_II), day)
    if month.biblical_value(False) == 12 and day == 30 and not is_leap_year(hyear):
        return HEBREW.of(hyear, int(HebrewMonth.SHEVAT), 30)
    first = HEBREW.of_biblical(hyear, month.biblical_value(False), 1)
    return HEBREW.plus_days(first, day - 1)


class HebrewAnniversary(Enum):
    BIRTHDAY = "birthday"
    YAHRZEIT = "yahrzeit"

    def in_hebrew_year(
        self,
        event: CalendarDate,
        hyear: int,
        *,
        source: Optional[CalendarSystem] = None,
    ) -> CalendarDate:
        """
        Hebrew date of the anniversary in the Hebrew year hyear.

        Birthdays keep the month unless it does not exist (Adar I in a common
        year becomes Adar, Adar of a common year becomes Adar II) and run a
        missing 30th day on into the next month. Yahrzeits follow the rules
        of Dershowitz/Reingold.

        Raises InvalidDateError if hyear is outside the Hebrew calendar range.
        """
        hebrew_event = _to_hebrew(event, source)
        if self is HebrewAnniversary.BIRTHDAY:
            return _birthday(hebrew_event, hyear)
        return _yahrzeit(hebrew_event, hyear)

    def for_gregorian_year(
        self,
        event: CalendarDate,
        gyear: int,
        *,
        source: Optional[CalendarSystem] = None,
    ) -> List[CalendarDate]:
        """
        Gregorian dates of the anniversary falling in gyear (0, 1 or 2 dates,
        ascending).
        """
        hebrew_event = _to_hebrew(event, source)
        first = year_of(gregorian_to_jdn(gyear, 1, 1))

        out: List[CalendarDate] = []
        for hyear in (first, first + 1):
            if not (MIN_YEAR <= hyear <= MAX_YEAR):
                continue
            jdn = HEBREW.to_day_count(self.in_hebrew_year(hebrew_event, hyear))
            date = GREGORIAN.from_day_count(jdn)
            if date.year == gyear:
                out.append(date)
        return out
