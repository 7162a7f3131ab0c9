from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .anniversary import HebrewAnniversary
from .attributes.registry import compute_attributes
from .attributes.related_year import RelatedGregorianYear
from .core.engine import CalendarRegistry, CalendarSystem
from .core.time import from_jdn, to_jdn
from .core.types import CalendarDate, CalendarSpec, DayCount, DayInfo, HistoricEra
from .engines.factory import make_calendar as _make_calendar
from .engines.historic import HistoricCalendar

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def _calendar_of(date: CalendarDate, calendar: Optional[str]) -> CalendarSystem:
    # tabulated dates carry their variant name
    if calendar is None:
        if not date.variant:
            raise ValueError(f"Calendar name required for date {date}")
        calendar = date.variant
    return _reg().get(calendar)

def _historic(calendar: str) -> HistoricCalendar:
    cal = _reg().get(calendar)
    if not isinstance(cal, HistoricCalendar):
        raise TypeError(f"Calendar '{calendar}' has no new-year rules")
    return cal

# ============================================================
# Registry
# ============================================================

def list_calendars() -> List[str]:
    return _reg().list()

def get_calendar(name: str) -> CalendarSystem:
    """Registered calendar, or a tabulated variant such as 'islamic-civil:-1'."""
    return _reg().get(name)

def make_calendar(spec: CalendarSpec) -> CalendarSystem:
    return _make_calendar(spec)

def register_calendar(name: str, calendar: CalendarSystem, *, overwrite: bool = False) -> None:
    _reg().register(name, calendar, overwrite=overwrite)

# ============================================================
# Conversions
# ============================================================

def to_day_count(d: CalendarDate, *, calendar: Optional[str] = None) -> DayCount:
    return _calendar_of(d, calendar).to_day_count(d)

def from_day_count(day_count: DayCount, *, calendar: str = "gregorian") -> CalendarDate:
    return _reg().get(calendar).from_day_count(day_count)

def convert(d: CalendarDate, *, target: str, source: Optional[str] = None) -> CalendarDate:
    """Convert a date between two calendar systems through the day axis."""
    jdn = _calendar_of(d, source).to_day_count(d)
    return _reg().get(target).from_day_count(jdn)

def to_date(d: CalendarDate, *, calendar: Optional[str] = None) -> date:
    """Calendar date to datetime.date (years 1..9999 only)."""
    return from_jdn(to_day_count(d, calendar=calendar))

def from_date(d: date, *, calendar: str = "gregorian") -> CalendarDate:
    return from_day_count(to_jdn(d), calendar=calendar)

def day_info(
    day_count: DayCount,
    *,
    calendar: str = "gregorian",
    attributes: Sequence[str] = (),
) -> DayInfo:
    cal = _reg().get(calendar)
    info = DayInfo(day_count=day_count, calendar=cal.name, date=cal.from_day_count(day_count))
    if attributes:
        attrs = compute_attributes(cal, info, attributes)
        info = replace(info, attributes=attrs)
    return info

# ============================================================
# Derived year semantics
# ============================================================

def related_gregorian_year(d: CalendarDate, *, calendar: Optional[str] = None) -> int:
    return RelatedGregorianYear(_calendar_of(d, calendar)).value(d)

def new_year_day(
    year: int,
    *,
    era: HistoricEra = HistoricEra.AD,
    calendar: str = "historic",
    as_date: bool = False,
) -> Dict[str, Any]:
    cal = _historic(calendar)
    first = cal.new_year(era, year)
    jdn = cal.to_day_count(first)
    out: Dict[str, Any] = {"era": era, "year": year, "date": first, "jdn": jdn}
    if as_date:
        out["gregorian"] = from_jdn(jdn)
    return out

def displayed_year(d: CalendarDate, *, calendar: str = "historic") -> int:
    return _historic(calendar).displayed_year(d)

def anniversaries(
    event: CalendarDate,
    gyear: int,
    *,
    kind: HebrewAnniversary = HebrewAnniversary.BIRTHDAY,
    calendar: str = "hebrew",
) -> List[CalendarDate]:
    """Gregorian dates in gyear on which the anniversary of event falls."""
    return kind.for_gregorian_year(event, gyear, source=_calendar_of(event, calendar))
