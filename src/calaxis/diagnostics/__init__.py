"""Diagnostics package.

- new_years_table: always available, prints historic new-year dates
- month_lengths: month-length statistics of tabulated variants; plotting
  requires the diagnostics extras (numpy, matplotlib)
"""

__all__ = ["new_years_table", "month_lengths"]
