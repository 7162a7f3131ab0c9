from __future__ import annotations
from typing import Any, Callable, Dict, Sequence

from ..core.engine import CalendarSystem
from ..core.types import DayInfo

AttrFunc = Callable[[CalendarSystem, DayInfo], Dict[str, Any]]
_REGISTRY: Dict[str, AttrFunc] = {}

def register_attribute(name: str, fn: AttrFunc) -> None:
    _REGISTRY[name] = fn

def available_attributes() -> list:
    return sorted(_REGISTRY)

def compute_attributes(calendar: CalendarSystem, info: DayInfo, names: Sequence[str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for name in names:
        if name not in _REGISTRY:
            raise KeyError(f"Unknown attribute '{name}'. Available: {sorted(_REGISTRY)}")
        out.update(_REGISTRY[name](calendar, info))
    return out
