"""
calaxis.engines.factory
-----------------------
Transforms pure data specifications into live calendar systems.
"""

from __future__ import annotations

from calaxis.core.engine import CalendarSystem
from calaxis.core.types import CalendarSpec
from calaxis.engines.arithmetic import GregorianCalendar, JulianCalendar
from calaxis.engines.hebrew import HebrewCalendar
from calaxis.engines.historic import HistoricCalendar, HistoricParams
from calaxis.engines.specs import TabulatedParams
from calaxis.engines.tabulated import tabulated_calendar


def make_calendar(spec: CalendarSpec) -> CalendarSystem:
    """The universal entry point."""
    if spec.kind == "gregorian":
        return GregorianCalendar(spec.name)
    if spec.kind == "julian":
        return JulianCalendar(spec.name)
    if spec.kind == "hebrew":
        return HebrewCalendar(spec.name)

    if spec.kind == "historic":
        if not isinstance(spec.payload, HistoricParams):
            raise TypeError(f"Unknown historic params type: {type(spec.payload)}")
        return HistoricCalendar.from_params(spec.name, spec.payload)

    if spec.kind == "tabulated":
        if not isinstance(spec.payload, TabulatedParams):
            raise TypeError(f"Unknown tabulated params type: {type(spec.payload)}")
        # the calendar is named after its (normalized) variant
        return tabulated_calendar(spec.payload.variant)

    raise ValueError(f"Unknown calendar kind: {spec.kind!r}")
