# tests/test_hebrew.py

import pytest
import random

from calaxis.core.errors import InvalidDateError, OutOfRangeError
from calaxis.core.time import gregorian_to_jdn
from calaxis.core.types import CalendarDate, HebrewEra
from calaxis.engines import hebrew as hb
from calaxis.engines.hebrew import HEBREW, HebrewMonth

AM = HebrewEra.ANNO_MUNDI

@pytest.mark.parametrize("year,iso,days,leap", [
    (5784, (2023, 9, 16), 383, True),
    (5785, (2024, 10, 3), 355, False),
    (5786, (2025, 9, 23), 354, False),
    (5787, (2026, 9, 12), 385, True),
])
def test_new_years(year, iso, days, leap):
    assert hb.new_year_jdn(year) == gregorian_to_jdn(*iso)
    assert HEBREW.length_of_year(AM, year) == days
    assert HEBREW.is_leap_year(year) is leap
    assert len(HEBREW.months_of_year(AM, year)) == (13 if leap else 12)

def test_epoch():
    assert HEBREW.min_day_count() == hb.HEBREW_EPOCH == 347998
    assert HEBREW.from_day_count(347998) == CalendarDate(AM, 1, 1, 1)

def test_passover():
    assert HEBREW.to_day_count(HEBREW.of(5784, HebrewMonth.NISAN, 15)) == gregorian_to_jdn(2024, 4, 23)
    assert HEBREW.to_day_count(HEBREW.of(5785, HebrewMonth.NISAN, 15)) == gregorian_to_jdn(2025, 4, 13)

def test_variable_months():
    # deficient (383), complete (355) and regular (354) years
    assert HEBREW.length_of_month(AM, 5784, HebrewMonth.HESHVAN) == 29
    assert HEBREW.length_of_month(AM, 5784, HebrewMonth.KISLEV) == 29
    assert HEBREW.length_of_month(AM, 5785, HebrewMonth.HESHVAN) == 30
    assert HEBREW.length_of_month(AM, 5785, HebrewMonth.KISLEV) == 30
    assert HEBREW.length_of_month(AM, 5786, HebrewMonth.HESHVAN) == 29
    assert HEBREW.length_of_month(AM, 5786, HebrewMonth.KISLEV) == 30

def test_adar_i_only_in_leap_years():
    assert HEBREW.is_valid(AM, 5784, HebrewMonth.ADAR_I, 30)
    assert not HEBREW.is_valid(AM, 5785, HebrewMonth.ADAR_I, 1)
    with pytest.raises(OutOfRangeError):
        HEBREW.length_of_month(AM, 5785, HebrewMonth.ADAR_I)
    with pytest.raises(InvalidDateError):
        HEBREW.to_day_count(CalendarDate(AM, 5785, HebrewMonth.ADAR_I, 1))

def test_biblical_months():
    assert HEBREW.of_biblical(5784, 12, 1).month == HebrewMonth.ADAR_I
    assert HEBREW.of_biblical(5784, 13, 1).month == HebrewMonth.ADAR_II
    assert HEBREW.of_biblical(5785, 12, 1).month == HebrewMonth.ADAR_II
    assert HEBREW.of_biblical(5785, 1, 1).month == HebrewMonth.NISAN
    assert HEBREW.of_biblical(5785, 7, 1).month == HebrewMonth.TISHRI
    with pytest.raises(InvalidDateError):
        HEBREW.of_biblical(5785, 13, 1)
    assert HebrewMonth.ADAR_II.biblical_value(True) == 13
    assert HebrewMonth.ADAR_II.biblical_value(False) == 12
    assert HebrewMonth.ELUL.biblical_value(False) == 6

def test_roundtrip_random():
    random.seed(3)
    lo, hi = HEBREW.min_day_count(), HEBREW.max_day_count()
    for _ in range(3000):
        jdn = random.randint(lo, hi)
        d = HEBREW.from_day_count(jdn)
        assert HEBREW.to_day_count(d) == jdn
        assert HEBREW.is_valid(d.era, d.year, d.month, d.day)

def test_year_lengths_sum_of_months():
    for year in range(5770, 5800):
        assert HEBREW.length_of_year(AM, year) == sum(
            HEBREW.length_of_month(AM, year, m) for m in HEBREW.months_of_year(AM, year)
        )

def test_range():
    with pytest.raises(OutOfRangeError):
        HEBREW.from_day_count(HEBREW.min_day_count() - 1)
    with pytest.raises(OutOfRangeError):
        HEBREW.from_day_count(HEBREW.max_day_count() + 1)
    assert HEBREW.from_day_count(HEBREW.max_day_count()).year == 9999
    assert not HEBREW.is_valid(AM, 10000, 1, 1)
