from __future__ import annotations
import re
from datetime import date
from typing import Tuple

from .errors import DataFormatError

# JDN of proleptic Gregorian 0000-03-01, origin of the March-based year arithmetic.
JDN_MARCH_ZERO = 1721120

_ISO_RE = re.compile(r"^([+-]?\d{4,})-(\d{2})-(\d{2})$")


def gregorian_to_jdn(y: int, m: int, d: int) -> int:
    """Proleptic Gregorian date to Julian Day Number (JDN). Valid for all years."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_gregorian(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of gregorian_to_jdn."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def julian_to_jdn(y: int, m: int, d: int) -> int:
    """Proleptic Julian date to JDN."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - 32083


def jdn_to_julian(jdn: int) -> Tuple[int, int, int]:
    c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = d - 4800 + (m // 10)
    return year, month, day


def to_jdn(d: date) -> int:
    """Convert a datetime.date (proleptic Gregorian) to JDN."""
    return gregorian_to_jdn(d.year, d.month, d.day)


def from_jdn(jdn: int) -> date:
    """JDN to datetime.date; raises ValueError outside years 1..9999."""
    return date(*jdn_to_gregorian(jdn))


def gregorian_year_of(jdn: int) -> int:
    """
    Proleptic Gregorian year containing the given JDN.

    Closed form over days since 0000-03-01: quad-centuries, centuries,
    quadrennia and single years of the March-based year, then a shift of
    one for January and February.
    """
    days = jdn - JDN_MARCH_ZERO
    q400, r400 = divmod(days, 146097)

    if r400 == 146096:
        return (q400 + 1) * 400

    q100, r100 = divmod(r400, 36524)
    q4, r4 = divmod(r100, 1461)

    if r4 == 1460:
        return q400 * 400 + q100 * 100 + (q4 + 1) * 4

    q1, r1 = divmod(r4, 365)
    y = q400 * 400 + q100 * 100 + q4 * 4 + q1
    m = ((r1 + 31) * 5) // 153 + 2
    if m > 12:
        y += 1
    return y


def is_gregorian_leap(y: int) -> bool:
    return (y % 4 == 0) and ((y % 100 != 0) or (y % 400 == 0))


def is_julian_leap(y: int) -> bool:
    return y % 4 == 0


def parse_iso_date(s: str) -> int:
    """Parse an extended ISO calendar date ``[+-]YYYY-MM-DD`` (Gregorian) to JDN."""
    match = _ISO_RE.match(s.strip())
    if match is None:
        raise DataFormatError(f"Not an ISO calendar date: '{s}'")
    y, m, d = (int(g) for g in match.groups())
    if not (1 <= m <= 12) or not (1 <= d <= gregorian_month_length(y, m)):
        raise DataFormatError(f"Invalid ISO calendar date: '{s}'")
    return gregorian_to_jdn(y, m, d)


def gregorian_month_length(y: int, m: int) -> int:
    if m == 2:
        return 29 if is_gregorian_leap(y) else 28
    return 30 if m in (4, 6, 9, 11) else 31


def julian_month_length(y: int, m: int) -> int:
    if m == 2:
        return 29 if is_julian_leap(y) else 28
    return 30 if m in (4, 6, 9, 11) else 31


def weekday(jdn: int) -> int:
    """ISO-like weekday, 0=Mon..6=Sun."""
    return jdn % 7
