"""
calaxis.engines.tabulated
-------------------------
Calendar systems backed by tabulated month lengths (e.g. observational
Islamic calendars).

A variant name is ``<base>[:<adjustment>]``. All variants of one base share a
single immutable VariantTable; the adjustment (-3..3 days) shifts every
conversion so that regional sighting differences need no separate data.

Resource layout (property format), located at ``<base with '-' -> '_'>.data``::

    type=<base>
    version=<string>
    iso-start=<ISO date of the first day of month 1 of min>
    min=<first year>
    max=<last year>
    <year>=<12 space-separated month lengths>

A row with fewer than 12 lengths ends the table after those months.
"""

from __future__ import annotations

import logging
import threading
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from calaxis.core.errors import DataFormatError, InvalidDateError, InvalidVariantError, OutOfRangeError
from calaxis.core.time import parse_iso_date
from calaxis.core.types import CalendarDate, DayCount, Era, HijriEra

from .base import BaseCalendar
from .resources import DEFAULT_LOADER, ResourceLoader, parse_properties

logger = logging.getLogger(__name__)

FAMILY = "calendar"
MAX_ADJUSTMENT = 3

K = TypeVar("K")
V = TypeVar("V")


def split_variant(variant: str) -> Tuple[str, int]:
    """'islamic-civil:-1' -> ('islamic-civil', -1)."""
    base, sep, adj = variant.partition(":")
    base = base.strip()
    if not base:
        raise InvalidVariantError(f"Empty calendar variant: '{variant}'")
    if not sep:
        return base, 0
    try:
        value = int(adj.strip())
    except ValueError as e:
        raise InvalidVariantError(f"Invalid day adjustment in variant '{variant}'") from e
    if not (-MAX_ADJUSTMENT <= value <= MAX_ADJUSTMENT):
        raise InvalidVariantError(
            f"Day adjustment out of range {-MAX_ADJUSTMENT} <= x <= {MAX_ADJUSTMENT}: '{variant}'"
        )
    return base, value


def resource_name(base_variant: str) -> str:
    return base_variant.replace("-", "_") + ".data"


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VariantTable:
    """
    Month lengths and month starts (JDN) of one base variant.

    Arrays are indexed by (year - min_year) * 12 + month - 1 and satisfy
    first_days[i + 1] == first_days[i] + month_lengths[i].
    """
    variant: str
    version: str
    min_year: int
    max_year: int
    month_lengths: Tuple[int, ...]
    first_days: Tuple[int, ...]

    @property
    def min_jdn(self) -> int:
        return self.first_days[0]

    @property
    def max_jdn(self) -> int:
        return self.first_days[-1] + self.month_lengths[-1] - 1

    def __len__(self) -> int:
        return len(self.month_lengths)

    def index(self, year: int, month: int) -> int:
        return (year - self.min_year) * 12 + month - 1

    def search(self, jdn: int) -> int:
        """Index of the month starting at or before jdn, or -1."""
        return bisect_right(self.first_days, jdn) - 1


def _parse_int(props: Dict[str, str], key: str, default: str, name: str) -> int:
    try:
        return int(props.get(key, default))
    except ValueError as e:
        raise DataFormatError(f"Wrong file format: {name} (bad '{key}')") from e


def build_table(base_variant: str, lines: Iterable[str], name: str = "") -> VariantTable:
    """
    Build a VariantTable from property lines.

    Two passes: the first validates every row and determines the true month
    count (short rows truncate), the second lays out exact-size tuples.
    """
    name = name or resource_name(base_variant)
    props = parse_properties(lines)

    calendar_type = props.get("type")
    if calendar_type != base_variant:
        raise DataFormatError(f"Wrong calendar variant: expected={base_variant}, found={calendar_type}")
    version = props.get("version", "1.0")
    min_jdn = parse_iso_date(props.get("iso-start", ""))
    min_year = _parse_int(props, "min", "1", name)
    max_year = _parse_int(props, "max", "0", name)
    if max_year < min_year:
        raise DataFormatError(f"Wrong file format: {name} (empty year range {min_year}..{max_year})")

    # pass 1
    rows: List[List[int]] = []
    for year in range(min_year, max_year + 1):
        row = props.get(str(year))
        if row is None:
            raise DataFormatError(f"Wrong file format: {name} (missing year={year})")
        try:
            lengths = [int(x) for x in row.split()]
        except ValueError as e:
            raise DataFormatError(f"Wrong file format: {name} (year={year})") from e
        if not lengths or any(v <= 0 for v in lengths):
            raise DataFormatError(f"Wrong file format: {name} (invalid month length in year={year})")
        rows.append(lengths[:12])
        if len(lengths) < 12:
            break

    count = sum(len(r) for r in rows)

    # pass 2
    month_lengths = tuple(v for r in rows for v in r)
    first_days = [0] * count
    v = min_jdn
    for i, length in enumerate(month_lengths):
        first_days[i] = v
        v += length

    return VariantTable(
        variant=base_variant,
        version=version,
        min_year=min_year,
        max_year=max_year,
        month_lengths=month_lengths,
        first_days=tuple(first_days),
    )


def load_table(base_variant: str, loader: ResourceLoader = DEFAULT_LOADER) -> VariantTable:
    name = resource_name(base_variant)
    stream = loader.open_text(FAMILY, name)
    if stream is None:
        raise DataFormatError(f"Calendar data not found: {name} (variant '{base_variant}')")
    with stream:
        try:
            table = build_table(base_variant, stream, name)
        except DataFormatError:
            logger.debug("Rejected variant table %s", name)
            raise
    logger.info(
        "Loaded variant table %s (version %s, %d months)", base_variant, table.version, len(table)
    )
    return table


# ---------------------------------------------------------------------------
# Process-wide cache
# ---------------------------------------------------------------------------

class VariantCache(Generic[K, V]):
    """
    Initialize-once-per-key cache. Concurrent requests for the same key block
    until the first build completes; a failed build publishes nothing.
    """

    def __init__(self, factory: Callable[[K], V]):
        self._factory = factory
        self._lock = threading.Lock()
        self._key_locks: Dict[K, threading.Lock] = {}
        self._values: Dict[K, V] = {}

    def get(self, key: K) -> V:
        value = self._values.get(key)
        if value is not None:
            return value
        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())
        with key_lock:
            value = self._values.get(key)
            if value is None:
                value = self._factory(key)
                self._values[key] = value
        return value

    def peek(self, key: K) -> Optional[V]:
        return self._values.get(key)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self._key_locks.clear()


TABLES: VariantCache[str, VariantTable] = VariantCache(load_table)


# ---------------------------------------------------------------------------
# Calendar system
# ---------------------------------------------------------------------------

class TabulatedCalendar(BaseCalendar):
    """
    Calendar system over a VariantTable. Dates carry the full variant name;
    conversions are O(log n) forward (binary search) and O(1) inverse.
    """

    def __init__(self, variant: str, table: VariantTable, adjustment: int = 0):
        self.name = variant
        self.variant = variant
        self.table = table
        self.adjustment = adjustment

    @property
    def version(self) -> str:
        return self.table.version

    def _variant_tag(self) -> str:
        return self.variant

    def eras(self) -> Tuple[Era, ...]:
        return (HijriEra.ANNO_HEGIRAE,)

    def min_day_count(self) -> DayCount:
        return self.table.min_jdn - self.adjustment

    def max_day_count(self) -> DayCount:
        return self.table.max_jdn - self.adjustment

    def is_valid(self, era: Era, year: int, month: int, day: int) -> bool:
        t = self.table
        if (
            era is not HijriEra.ANNO_HEGIRAE
            or year < t.min_year
            or year > t.max_year
            or month < 1
            or month > 12
            or day < 1
        ):
            return False
        index = t.index(year, month)
        if index >= len(t):
            return False
        return day <= t.month_lengths[index]

    def length_of_month(self, era: Era, year: int, month: int) -> int:
        if era is not HijriEra.ANNO_HEGIRAE:
            raise OutOfRangeError(f"Wrong era: {era}")
        index = self.table.index(year, month)
        if not (1 <= month <= 12) or index < 0 or index >= len(self.table):
            raise OutOfRangeError(f"Out of bounds: year={year}, month={month}")
        return self.table.month_lengths[index]

    def length_of_year(self, era: Era, year: int) -> int:
        if era is not HijriEra.ANNO_HEGIRAE:
            raise OutOfRangeError(f"Wrong era: {era}")
        t = self.table
        if year < t.min_year or year > t.max_year:
            raise OutOfRangeError(f"Out of bounds: yearOfEra={year}")
        start = t.index(year, 1)
        if start + 12 > len(t):
            raise OutOfRangeError(f"Year range is not fully covered by underlying data: {year}")
        return sum(t.month_lengths[start:start + 12])

    def to_day_count(self, date: CalendarDate) -> DayCount:
        if date.variant != self.variant:
            raise InvalidDateError(
                f"Given date does not belong to this calendar system: {date} "
                f"(calendar variants are different)."
            )
        self._check_valid(date)
        index = self.table.index(date.year, date.month)
        return self.table.first_days[index] + date.day - 1 - self.adjustment

    def from_day_count(self, jdn: DayCount) -> CalendarDate:
        t = self.table
        real = jdn + self.adjustment
        i = t.search(real)
        if i < 0 or (i == len(t) - 1 and real >= t.first_days[i] + t.month_lengths[i]):
            raise OutOfRangeError(f"Out of range: {jdn}")
        return CalendarDate(
            HijriEra.ANNO_HEGIRAE,
            i // 12 + t.min_year,
            i % 12 + 1,
            real - t.first_days[i] + 1,
            self.variant,
        )


def tabulated_calendar(variant: str, *, tables: VariantCache[str, VariantTable] = TABLES) -> TabulatedCalendar:
    """Resolve a variant name to its calendar system, building the base table on first use."""
    base, adjustment = split_variant(variant)
    table = tables.get(base)
    name = base if adjustment == 0 else f"{base}:{adjustment:+d}"
    return TabulatedCalendar(name, table, adjustment)
