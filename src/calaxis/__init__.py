"""calaxis public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    get_calendar,
    make_calendar,
    register_calendar,
    to_day_count,
    from_day_count,
    convert,
    to_date,
    from_date,
    day_info,
    related_gregorian_year,
    new_year_day,
    displayed_year,
    anniversaries,
)
from .anniversary import HebrewAnniversary
from .core.types import CalendarDate, CalendarSpec, CommonEra, DayInfo, HebrewEra, HijriEra, HistoricEra
from .history.rules import NewYearRule
from .history.strategy import NewYearStrategy

__all__ = [
    "list_calendars",
    "get_calendar",
    "make_calendar",
    "register_calendar",
    "to_day_count",
    "from_day_count",
    "convert",
    "to_date",
    "from_date",
    "day_info",
    "related_gregorian_year",
    "new_year_day",
    "displayed_year",
    "anniversaries",
    "HebrewAnniversary",
    "CalendarDate",
    "CalendarSpec",
    "CommonEra",
    "DayInfo",
    "HebrewEra",
    "HijriEra",
    "HistoricEra",
    "NewYearRule",
    "NewYearStrategy",
]
