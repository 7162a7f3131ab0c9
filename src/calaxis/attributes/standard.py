from __future__ import annotations
from typing import Any, Dict

from ..core.time import weekday as _weekday
from .registry import register_attribute
from .related_year import RelatedGregorianYear

def related_gregorian_year(calendar, info) -> Dict[str, Any]:
    return {"related_gregorian_year": RelatedGregorianYear(calendar).value(info.date)}

def day_of_year(calendar, info) -> Dict[str, Any]:
    start = calendar.to_day_count(calendar.start_of_year(info.date))
    return {"day_of_year": info.day_count - start + 1}

def weekday(calendar, info) -> Dict[str, Any]:
    # 0=Mon..6=Sun
    return {"weekday": _weekday(info.day_count)}

def displayed_year(calendar, info) -> Dict[str, Any]:
    return {"displayed_year": calendar.displayed_year(info.date)}

register_attribute("related_gregorian_year", related_gregorian_year)
register_attribute("day_of_year", day_of_year)
register_attribute("weekday", weekday)
register_attribute("displayed_year", displayed_year)
