"""
calaxis.history.rules
---------------------
Historic conventions for the first day of a civil year.

All rules work on the January-based "standard" year of a historic date.
Rules that start the year before January 1 (Christmas, Pisan and Byzantine
styles) date the year Y from a day in the standard year Y-1; the others
(March, Florentine and Easter styles) from a day inside Y.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Tuple

from calaxis.core.types import CalendarDate, HistoricEra

if TYPE_CHECKING:
    from .strategy import NewYearStrategy


def shift_year(era: HistoricEra, year_of_era: int, delta: int) -> Tuple[HistoricEra, int]:
    """Move a year of era by delta years, crossing the BC/AD boundary if needed."""
    if era.is_proleptic_boundary:
        ad = era.anno_domini(year_of_era) + delta
        if ad >= 1:
            return HistoricEra.AD, ad
        return HistoricEra.BC, 1 - ad
    return era, year_of_era + delta


def chronological_key(date: CalendarDate) -> Tuple[int, int, int]:
    return (date.era.anno_domini(date.year), date.month, date.day)


def julian_easter(ad: int) -> Tuple[int, int]:
    """Easter Sunday (month, day) in the Julian calendar for a proleptic year."""
    a = ad % 4
    b = ad % 7
    c = ad % 19
    d = (19 * c + 15) % 30
    e = (2 * a + 4 * b - d + 34) % 7
    month, day0 = divmod(d + e + 114, 31)
    return month, day0 + 1


class NewYearRule(Enum):
    # (month, day, year offset); EASTER_STYLE is movable
    BEGIN_OF_JANUARY = (1, 1, 0)
    BEGIN_OF_MARCH = (3, 1, 0)
    BEGIN_OF_SEPTEMBER = (9, 1, -1)
    CHRISTMAS_STYLE = (12, 25, -1)
    CALCULUS_PISANUS = (3, 25, -1)
    MARIA_ANNUNCIATION = (3, 25, 0)
    EASTER_STYLE = (0, 0, 0)

    @property
    def begins_in_previous_year(self) -> bool:
        return self.value[2] < 0

    def until(self, last_year: int) -> "NewYearStrategy":
        """Strategy using this rule up to and including the given proleptic year."""
        from .strategy import NewYearStrategy
        return NewYearStrategy(self, last_year)

    def new_year(self, era: HistoricEra, year_of_era: int) -> CalendarDate:
        """First day of the given historic year under this rule."""
        month, day, offset = self.value
        if self is NewYearRule.EASTER_STYLE:
            month, day = julian_easter(era.anno_domini(year_of_era))
        e, y = shift_year(era, year_of_era, offset)
        return CalendarDate(e, y, month, day)

    def displayed_year(self, strategy: "NewYearStrategy", date: CalendarDate) -> int:
        """
        Year number shown for a date whose standard year is governed by this rule.

        The strategy decides where the neighbouring years begin, which can
        follow a different rule than this one.
        """
        era, yoe = date.era, date.year
        key = chronological_key(date)

        next_era, next_yoe = shift_year(era, yoe, 1)
        if key >= chronological_key(strategy.new_year(next_era, next_yoe)):
            return next_yoe
        if self.begins_in_previous_year:
            return yoe
        if key >= chronological_key(strategy.new_year(era, yoe)):
            return yoe
        return shift_year(era, yoe, -1)[1]
