from __future__ import annotations
from calaxis.core.engine import CalendarRegistry, CalendarSystem
from calaxis.engines.factory import make_calendar
from calaxis.engines.resources import DEFAULT_LOADER
from calaxis.engines.specs import ALL_SPECS
from calaxis.engines.tabulated import FAMILY, resource_name, split_variant, tabulated_calendar


def resolve_variant(name: str) -> CalendarSystem:
    """Fallback for unregistered names: tabulated variants found in the data path."""
    base, _ = split_variant(name)
    if DEFAULT_LOADER.locate(FAMILY, resource_name(base)) is None:
        raise KeyError(f"No calendar data for variant '{name}'")
    return tabulated_calendar(name)


def build_registry() -> CalendarRegistry:
    calendars = {}
    for name, spec in ALL_SPECS.items():
        calendars[name] = make_calendar(spec)
    return CalendarRegistry(calendars, resolve_variant)
