from __future__ import annotations

import argparse
from typing import List, NamedTuple, Sequence

import calaxis
from calaxis.core.types import CalendarDate, HistoricEra


DEFAULT_CALENDARS: List[str] = ["historic", "historic-british"]


class Row(NamedTuple):
    year: int
    new_year: CalendarDate
    displayed: int      # displayed year of January 1 of the standard year


def rows(calendar: str, from_year: int, to_year: int) -> List[Row]:
    """New-year dates of the AD years from_year..to_year (inclusive)."""
    out: List[Row] = []
    for year in range(from_year, to_year + 1):
        ny = calaxis.new_year_day(year, era=HistoricEra.AD, calendar=calendar)
        jan1 = CalendarDate(HistoricEra.AD, year, 1, 1)
        out.append(Row(year, ny["date"], calaxis.displayed_year(jan1, calendar=calendar)))
    return out


def fmt(d: CalendarDate) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def main(argv: Sequence[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print the first day of each historic year and the year displayed on January 1."
    )
    p.add_argument("--from-year", type=int, default=1745)
    p.add_argument("--to-year", type=int, default=1760)
    p.add_argument(
        "--calendars",
        type=str,
        default="",
        help='Comma list of historic calendars (default: "historic,historic-british").',
    )
    args = p.parse_args(argv)

    calendars = [c.strip() for c in args.calendars.split(",") if c.strip()] or DEFAULT_CALENDARS
    if args.to_year < args.from_year:
        raise SystemExit("--to-year must be >= --from-year")
    if args.from_year < 8:
        raise SystemExit("--from-year must be >= 8")

    tables = {cal: rows(cal, args.from_year, args.to_year) for cal in calendars}

    headers = ["Year"] + [f"{cal} (Jan 1 shown as)" for cal in calendars]
    colw = [5] + [max(18, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    for i, year in enumerate(range(args.from_year, args.to_year + 1)):
        row = [str(year).ljust(colw[0])]
        for cal, w in zip(calendars, colw[1:]):
            r = tables[cal][i]
            row.append(f"{fmt(r.new_year)} ({r.displayed})".ljust(w))
        print("  ".join(row))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
