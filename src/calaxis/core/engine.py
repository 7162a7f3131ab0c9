from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from .types import CalendarDate, DayCount, Era

logger = logging.getLogger(__name__)


class CalendarSystem(Protocol):
    """
    Transform contract between the day axis (JDN) and a calendar date tuple.

    to_day_count and from_day_count are mutual inverses on
    [min_day_count(), max_day_count()]. from_day_count raises OutOfRangeError
    outside that range; to_day_count raises InvalidDateError for tuples that
    are not valid.
    """
    name: str

    def to_day_count(self, date: CalendarDate) -> DayCount: ...
    def from_day_count(self, jdn: DayCount) -> CalendarDate: ...
    def min_day_count(self) -> DayCount: ...
    def max_day_count(self) -> DayCount: ...
    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool: ...
    def length_of_month(self, era: Era, year: int, month: int) -> int: ...
    def length_of_year(self, era: Era, year: int) -> int: ...
    def eras(self) -> Tuple[Era, ...]: ...

    # designated "first day of year" of the date's own calendar year
    def start_of_year(self, date: CalendarDate) -> CalendarDate: ...
    def of(self, year: int, month: int, day: int, era: Optional[Era] = None) -> CalendarDate: ...
    def plus_days(self, date: CalendarDate, days: int) -> CalendarDate: ...
    def displayed_year(self, date: CalendarDate) -> int: ...


@dataclass
class CalendarRegistry:
    _calendars: Dict[str, CalendarSystem]
    # resolves names that are not registered (e.g. tabulated variants)
    _fallback: Optional[Callable[[str], CalendarSystem]] = None

    def get(self, name: str) -> CalendarSystem:
        if name in self._calendars:
            return self._calendars[name]
        if self._fallback is not None:
            logger.debug("Resolving calendar '%s' via fallback", name)
            try:
                return self._fallback(name)
            except KeyError:
                pass
        raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, calendar: CalendarSystem, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._calendars[name] = calendar
