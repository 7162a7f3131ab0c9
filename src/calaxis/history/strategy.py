"""
calaxis.history.strategy
------------------------
Composition of new-year rules over time.

A strategy is either a single rule valid for all years, or a sorted list of
(rule, last proleptic year inclusive) components followed by an implicit
BEGIN_OF_JANUARY rule for all later years.

Binary form (big-endian): int32 n; if n == 0 one (name, bound) pair follows,
else n pairs in ascending bound order. Names are written as uint16 length
followed by UTF-8 bytes.
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Tuple

from calaxis.core.errors import ConstructionConflictError, DataFormatError, OutOfRangeError
from calaxis.core.types import CalendarDate, HistoricEra

from .rules import NewYearRule

MIN_BOUND = -2**31
MAX_BOUND = 2**31 - 1

# displayed years are undefined before AD 8 in the eras BC and AD
PROLEPTIC_FLOOR = 8

Component = Tuple[NewYearRule, int]


@dataclass(frozen=True)
class NewYearStrategy:
    last_rule: NewYearRule = NewYearRule.BEGIN_OF_JANUARY
    last_bound: int = MAX_BOUND
    components: Tuple[Component, ...] = ()

    def __post_init__(self) -> None:
        for _, bound in self._parts():
            if not (MIN_BOUND <= bound <= MAX_BOUND):
                raise OutOfRangeError(f"New-year bound out of range: {bound}")
        if not self.components:
            return
        ordered = tuple(sorted(self.components, key=lambda c: c[1]))
        for prev, nxt in zip(ordered, ordered[1:]):
            if prev[1] == nxt[1]:
                raise ConstructionConflictError(
                    f"Multiple strategies with overlapping validity range: {_fmt(ordered)}"
                )
        object.__setattr__(self, "components", ordered)
        object.__setattr__(self, "last_rule", NewYearRule.BEGIN_OF_JANUARY)
        object.__setattr__(self, "last_bound", MAX_BOUND)

    @classmethod
    def compose(cls, components: Iterable[Component]) -> "NewYearStrategy":
        parts = list(components)
        if not parts:
            return DEFAULT
        # listed bounds are always followed by the January catch-all
        return cls(components=tuple(parts))

    def _parts(self) -> Tuple[Component, ...]:
        return self.components or ((self.last_rule, self.last_bound),)

    def and_then(self, following: "NewYearStrategy") -> "NewYearStrategy":
        """
        Combine with a strategy that chronologically follows this one.

        Raises ConstructionConflictError if two components end in the same year.
        """
        return NewYearStrategy(components=self._parts() + following._parts())

    def rule_for(self, anno_domini: int) -> NewYearRule:
        for rule, bound in self.components:
            if anno_domini <= bound:
                return rule
        return self.last_rule

    def new_year(self, era: HistoricEra, year_of_era: int) -> CalendarDate:
        """First day of the given historic year."""
        return self.rule_for(era.anno_domini(year_of_era)).new_year(era, year_of_era)

    def displayed_year(self, date: CalendarDate) -> int:
        """
        Year shown for a historic date; may deviate from its year of era near
        the start of the year.
        """
        era = date.era
        ad = era.anno_domini(date.year)
        if ad < PROLEPTIC_FLOOR and era.is_proleptic_boundary:
            raise OutOfRangeError(f"Cannot determine displayed year in non-proleptic era: {date}")
        return self.rule_for(ad).displayed_year(self, date)

    # ---------------------------------------------------------
    # Serialization
    # ---------------------------------------------------------

    def write_to(self, out: BinaryIO) -> None:
        n = len(self.components)
        out.write(struct.pack(">i", n))
        for rule, bound in (self.components if n else ((self.last_rule, self.last_bound),)):
            name = rule.name.encode("utf-8")
            out.write(struct.pack(">H", len(name)))
            out.write(name)
            out.write(struct.pack(">i", bound))

    @classmethod
    def read_from(cls, inp: BinaryIO) -> "NewYearStrategy":
        n = _read_struct(inp, ">i")
        if n < 0:
            raise DataFormatError(f"Negative component count: {n}")
        if n == 0:
            rule, bound = _read_component(inp)
            if rule is NewYearRule.BEGIN_OF_JANUARY and bound == MAX_BOUND:
                return DEFAULT
            return cls(rule, bound)
        return cls.compose(_read_component(inp) for _ in range(n))

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.write_to(buf)
        return buf.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> "NewYearStrategy":
        buf = io.BytesIO(data)
        strategy = cls.read_from(buf)
        if buf.read(1):
            raise DataFormatError("Trailing bytes after serialized new-year strategy")
        return strategy

    def __str__(self) -> str:
        if not self.components:
            return f"[new-year-rule={self.last_rule.name}]"
        return _fmt(self.components)


def _fmt(components: Tuple[Component, ...]) -> str:
    return "[" + ",".join(f"{rule.name}->{bound}" for rule, bound in components) + "]"


def _read_struct(inp: BinaryIO, fmt: str) -> int:
    size = struct.calcsize(fmt)
    raw = inp.read(size)
    if len(raw) != size:
        raise DataFormatError("Unexpected end of serialized new-year strategy")
    return struct.unpack(fmt, raw)[0]


def _read_component(inp: BinaryIO) -> Component:
    length = _read_struct(inp, ">H")
    raw = inp.read(length)
    if len(raw) != length:
        raise DataFormatError("Unexpected end of serialized new-year strategy")
    try:
        rule = NewYearRule[raw.decode("utf-8")]
    except (KeyError, UnicodeDecodeError) as e:
        raise DataFormatError(f"Unknown new-year rule: {raw!r}") from e
    return rule, _read_struct(inp, ">i")


DEFAULT = NewYearStrategy()
NewYearStrategy.DEFAULT = DEFAULT
