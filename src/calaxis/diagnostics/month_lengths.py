#!/usr/bin/env python3
from __future__ import annotations

import argparse
from collections import Counter
from typing import Dict, List, Optional, Tuple

import calaxis
from calaxis.engines.tabulated import TabulatedCalendar


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "calaxis[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "calaxis[diagnostics]"') from e


def _tabulated(variant: str) -> TabulatedCalendar:
    cal = calaxis.get_calendar(variant)
    if not isinstance(cal, TabulatedCalendar):
        raise TypeError(f"Calendar '{variant}' is not a tabulated calendar")
    return cal


def month_length_counts(variant: str) -> Dict[int, Dict[int, int]]:
    """
    Per month number (1..12), how often each month length occurs in the
    table of the given variant.
    """
    table = _tabulated(variant).table
    counts: Dict[int, Counter] = {m: Counter() for m in range(1, 13)}
    for i, length in enumerate(table.month_lengths):
        counts[i % 12 + 1][length] += 1
    return {m: dict(sorted(c.items())) for m, c in counts.items()}


def year_lengths(variant: str) -> List[Tuple[int, int]]:
    """(year, days) for every fully tabulated year."""
    cal = _tabulated(variant)
    era = cal.eras()[0]
    t = cal.table
    out = []
    for year in range(t.min_year, t.max_year + 1):
        if t.index(year, 12) >= len(t):
            break
        out.append((year, cal.length_of_year(era, year)))
    return out


def plot_month_lengths(variant: str, out: str) -> str:
    np = _need_numpy()
    plt = _need_matplotlib()

    data = year_lengths(variant)
    years = np.array([y for y, _ in data], dtype=int)
    days = np.array([d for _, d in data], dtype=int)

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 6))

    ax1.plot(years, days, marker="o", ms=2.5, lw=0.8, color="0.15")
    ax1.set_xlabel("Year")
    ax1.set_ylabel("Days in year")
    ax1.set_title(f"Year lengths of {variant}")

    counts = month_length_counts(variant)
    months = np.arange(1, 13)
    lengths = sorted({n for c in counts.values() for n in c})
    bottom = np.zeros(12, dtype=int)
    for n in lengths:
        heights = np.array([counts[m].get(n, 0) for m in range(1, 13)], dtype=int)
        ax2.bar(months, heights, bottom=bottom, label=f"{n} days")
        bottom = bottom + heights
    ax2.set_xticks(months)
    ax2.set_xlabel("Month")
    ax2.set_ylabel("Count")
    ax2.legend(frameon=False)

    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Month-length statistics of a tabulated calendar variant.")
    p.add_argument("--variant", default="islamic-civil")
    p.add_argument("--out", default="", help="Write a plot to this file (needs diagnostics extras).")
    args = p.parse_args(argv)

    for month, c in month_length_counts(args.variant).items():
        print(f"{month:2d}  " + "  ".join(f"{n}d x{k}" for n, k in c.items()))

    if args.out:
        print(f"wrote {plot_month_lengths(args.variant, args.out)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
