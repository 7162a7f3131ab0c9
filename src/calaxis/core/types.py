from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Literal, Optional, Union


class CommonEra(Enum):
    """Single era of the proleptic arithmetic calendars (astronomical year numbering)."""
    CE = "CE"


class HebrewEra(Enum):
    ANNO_MUNDI = "AM"


class HijriEra(Enum):
    ANNO_HEGIRAE = "AH"


class HistoricEra(Enum):
    """
    Eras of the historic (Julian/Gregorian) calendar.

    BC and AD are the eras produced by conversions. The remaining members are
    alternative year labels with a fixed offset to the anno-Domini count.
    """
    BC = "BC"
    AD = "AD"
    HISPANIC = "HISPANIC"
    BYZANTINE = "BYZANTINE"
    AB_URBE_CONDITA = "AUC"

    def anno_domini(self, year_of_era: int) -> int:
        """Proleptic year number (1 BC = 0) for a year of this era."""
        if self is HistoricEra.BC:
            return 1 - year_of_era
        return year_of_era - _AD_OFFSETS[self]

    def year_of_era(self, anno_domini: int) -> int:
        if self is HistoricEra.BC:
            return 1 - anno_domini
        return anno_domini + _AD_OFFSETS[self]

    @property
    def is_proleptic_boundary(self) -> bool:
        """True for BC and AD, whose early years have no well-defined displayed year."""
        return self in (HistoricEra.BC, HistoricEra.AD)


_AD_OFFSETS = {
    HistoricEra.AD: 0,
    HistoricEra.HISPANIC: 38,
    HistoricEra.BYZANTINE: 5508,
    HistoricEra.AB_URBE_CONDITA: 753,
}

Era = Union[CommonEra, HebrewEra, HijriEra, HistoricEra]

# The universal day axis: Julian Day Number of the civil day.
DayCount = int


@dataclass(frozen=True)
class CalendarDate:
    era: Era
    year: int      # year of era
    month: int
    day: int
    variant: str = ""  # tabulated calendars only

    def with_day(self, day: int) -> "CalendarDate":
        return replace(self, day=day)

    def __str__(self) -> str:
        tag = f"[{self.variant}]" if self.variant else ""
        return f"{self.era.value}-{self.year:04d}-{self.month:02d}-{self.day:02d}{tag}"


@dataclass(frozen=True)
class DayInfo:
    day_count: DayCount
    calendar: str
    date: CalendarDate
    attributes: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload for constructing a calendar system."""
    kind: Literal["gregorian", "julian", "hebrew", "historic", "tabulated"]
    name: str
    payload: Any = None  # HistoricParams | TabulatedParams | None

    def tweak(self, **kwargs) -> "CalendarSpec":
        return replace(self, payload=replace(self.payload, **kwargs))
