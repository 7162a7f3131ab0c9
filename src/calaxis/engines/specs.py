"""
calaxis.engines.specs
---------------------
Pure data specifications of the built-in calendars. Live calendar systems are
produced from these by calaxis.engines.factory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..core.types import CalendarSpec
from .historic import BRITISH_PARAMS, HistoricParams


@dataclass(frozen=True)
class TabulatedParams:
    variant: str   # "<base>[:<adjustment>]"


# ============================================================
# BUILT-IN CALENDARS
# ============================================================

GREGORIAN_SPEC = CalendarSpec(kind="gregorian", name="gregorian")
JULIAN_SPEC = CalendarSpec(kind="julian", name="julian")
HEBREW_SPEC = CalendarSpec(kind="hebrew", name="hebrew")

# papal reform, year always begins on January 1
HISTORIC_SPEC = CalendarSpec(kind="historic", name="historic", payload=HistoricParams())
BRITISH_SPEC = CalendarSpec(kind="historic", name="historic-british", payload=BRITISH_PARAMS)

ISLAMIC_CIVIL_SPEC = CalendarSpec(
    kind="tabulated",
    name="islamic-civil",
    payload=TabulatedParams(variant="islamic-civil"),
)


ALL_SPECS: Dict[str, CalendarSpec] = {
    spec.name: spec
    for spec in (
        GREGORIAN_SPEC,
        JULIAN_SPEC,
        HEBREW_SPEC,
        HISTORIC_SPEC,
        BRITISH_SPEC,
        ISLAMIC_CIVIL_SPEC,
    )
}
