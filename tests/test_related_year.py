# tests/test_related_year.py

import pytest

from calaxis.attributes.related_year import RelatedGregorianYear
from calaxis.core.errors import UnsupportedModificationError
from calaxis.engines.arithmetic import GREGORIAN, JULIAN
from calaxis.engines.hebrew import HEBREW, HebrewMonth
from calaxis.engines.tabulated import tabulated_calendar

def test_hebrew_year_maps_to_year_of_tishri():
    rel = RelatedGregorianYear(HEBREW)
    # 5785 began on 2024-10-03; the whole year relates to 2024
    assert rel.value(HEBREW.of(5785, HebrewMonth.TISHRI, 1)) == 2024
    assert rel.value(HEBREW.of(5785, HebrewMonth.NISAN, 15)) == 2024

def test_islamic_year():
    cal = tabulated_calendar("islamic-civil")
    rel = RelatedGregorianYear(cal)
    assert rel.value(cal.of(1445, 12, 29)) == 2023

def test_julian_new_year_near_gregorian_boundary():
    rel = RelatedGregorianYear(JULIAN)
    # Julian 1 January 2100 is Gregorian 14 January 2100
    assert rel.value(JULIAN.of(2100, 6, 1)) == 2100
    # Julian 1 January 1 BC (year 0) is Gregorian 30 December 2 BC (year -1)
    assert rel.value(JULIAN.of(0, 6, 1)) == -1

def test_bounds_contain_value():
    for cal, date in (
        (HEBREW, HEBREW.of(5785, 1, 1)),
        (tabulated_calendar("islamic-civil"), tabulated_calendar("islamic-civil").of(1400, 5, 5)),
        (GREGORIAN, GREGORIAN.of(1999, 12, 31)),
    ):
        rel = RelatedGregorianYear(cal)
        assert rel.minimum(date) <= rel.value(date) <= rel.maximum(date)

def test_islamic_bounds():
    cal = tabulated_calendar("islamic-civil")
    rel = RelatedGregorianYear(cal)
    assert rel.minimum() == 1882
    assert rel.maximum() == 2076

def test_read_only():
    rel = RelatedGregorianYear(HEBREW)
    d = HEBREW.of(5785, HebrewMonth.KISLEV, 10)
    assert rel.with_value(d, 2024) == d
    assert rel.is_valid(d, 2024)
    assert not rel.is_valid(d, 2025)
    with pytest.raises(UnsupportedModificationError):
        rel.with_value(d, 2025)
