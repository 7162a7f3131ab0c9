# tests/test_tabulated.py

import threading

import pytest

from calaxis.core.errors import DataFormatError, InvalidDateError, InvalidVariantError, OutOfRangeError
from calaxis.core.time import gregorian_to_jdn, parse_iso_date
from calaxis.core.types import CalendarDate, HijriEra
from calaxis.engines.resources import DataPathResourceLoader, MappingResourceLoader
from calaxis.engines.tabulated import (
    TABLES,
    TabulatedCalendar,
    VariantCache,
    build_table,
    load_table,
    resource_name,
    split_variant,
    tabulated_calendar,
)

AH = HijriEra.ANNO_HEGIRAE

ONE_YEAR = """\
type=test-lunar
version=2.1
iso-start=1900-01-01
min=1
max=1
1=30 29 30 29 30 29 30 29 30 29 30 29
"""

TWO_YEARS = """\
# comment
type=test-lunar
iso-start=1900-01-01
min=1
max=2
1=30 29 30 29 30 29 30 29 30 29 30 29
2=29 30 29 30 29 30 29 30 29 30 29 30
"""

@pytest.fixture
def cal():
    table = build_table("test-lunar", TWO_YEARS.splitlines())
    return TabulatedCalendar("test-lunar", table)

def test_scenario_second_month_starts_after_thirty_days():
    table = build_table("test-lunar", ONE_YEAR.splitlines())
    c = TabulatedCalendar("test-lunar", table)
    d = c.from_day_count(gregorian_to_jdn(1900, 1, 1) + 30)
    assert (d.era, d.year, d.month, d.day) == (AH, 1, 2, 1)
    assert c.version == "2.1"

def test_table_invariants(cal):
    t = cal.table
    assert len(t) == 24
    assert t.min_jdn == gregorian_to_jdn(1900, 1, 1)
    for i in range(len(t) - 1):
        assert t.first_days[i + 1] - t.first_days[i] == t.month_lengths[i]
    assert t.max_jdn == t.min_jdn + sum(t.month_lengths) - 1

def test_roundtrip_full_range(cal):
    for jdn in range(cal.min_day_count(), cal.max_day_count() + 1):
        assert cal.to_day_count(cal.from_day_count(jdn)) == jdn

def test_out_of_range(cal):
    with pytest.raises(OutOfRangeError):
        cal.from_day_count(cal.min_day_count() - 1)
    with pytest.raises(OutOfRangeError):
        cal.from_day_count(cal.max_day_count() + 1)

def test_validity_and_lengths(cal):
    assert cal.is_valid(AH, 1, 1, 30)
    assert not cal.is_valid(AH, 1, 2, 30)
    assert not cal.is_valid(AH, 3, 1, 1)
    assert not cal.is_valid(AH, 1, 13, 1)
    assert cal.length_of_month(AH, 2, 2) == 30
    assert cal.length_of_year(AH, 1) == 354
    with pytest.raises(OutOfRangeError):
        cal.length_of_month(AH, 3, 1)
    with pytest.raises(OutOfRangeError):
        cal.length_of_year(AH, 0)

def test_to_day_count_rejects_invalid(cal):
    with pytest.raises(InvalidDateError):
        cal.to_day_count(CalendarDate(AH, 1, 2, 30, "test-lunar"))

def test_to_day_count_rejects_foreign_variant(cal):
    with pytest.raises(InvalidDateError):
        cal.to_day_count(CalendarDate(AH, 1, 1, 1, "other"))

def test_adjustment_shifts_conversions(cal):
    shifted = TabulatedCalendar("test-lunar:+2", cal.table, 2)
    d = cal.of(1, 5, 10)
    jdn = cal.to_day_count(d)
    d2 = shifted.of(1, 5, 10)
    assert shifted.to_day_count(d2) == jdn - 2
    assert shifted.from_day_count(jdn - 2) == d2
    assert shifted.min_day_count() == cal.min_day_count() - 2

def test_short_row_truncates():
    text = TWO_YEARS.replace("2=29 30 29 30 29 30 29 30 29 30 29 30", "2=29 30 29")
    t = build_table("test-lunar", text.splitlines())
    assert len(t) == 15
    c = TabulatedCalendar("test-lunar", t)
    assert c.is_valid(AH, 2, 3, 29)
    assert not c.is_valid(AH, 2, 4, 1)
    with pytest.raises(OutOfRangeError):
        c.length_of_year(AH, 2)
    with pytest.raises(OutOfRangeError):
        c.from_day_count(c.max_day_count() + 1)

@pytest.mark.parametrize("text", [
    TWO_YEARS.replace("2=29 30 29 30 29 30 29 30 29 30 29 30\n", ""),     # missing row
    TWO_YEARS.replace("2=29 30", "2=29 x0"),                               # unparseable
    TWO_YEARS.replace("2=29 30", "2=0 30"),                                # non-positive
    TWO_YEARS.replace("max=2", "max=zero"),                                # bad header
    TWO_YEARS.replace("max=2", "max=0"),                                   # empty range
    TWO_YEARS.replace("iso-start=1900-01-01", "iso-start=1900/01/01"),     # bad start
    TWO_YEARS.replace("type=test-lunar", "type=other"),                    # wrong type
])
def test_malformed_data_aborts_build(text):
    with pytest.raises(DataFormatError):
        build_table("test-lunar", text.splitlines())

def test_split_variant():
    assert split_variant("islamic-civil") == ("islamic-civil", 0)
    assert split_variant("islamic-civil:-1") == ("islamic-civil", -1)
    assert split_variant("islamic-civil:+3") == ("islamic-civil", 3)
    for bad in ("islamic-civil:4", "islamic-civil:x", ":1"):
        with pytest.raises(InvalidVariantError):
            split_variant(bad)

def test_resource_name():
    assert resource_name("islamic-civil") == "islamic_civil.data"

def test_load_table_from_mapping_loader():
    loader = MappingResourceLoader({"test_lunar.data": ONE_YEAR})
    t = load_table("test-lunar", loader)
    assert t.version == "2.1"
    with pytest.raises(DataFormatError):
        load_table("missing", loader)

def test_data_path_env_takes_precedence(tmp_path, monkeypatch):
    (tmp_path / "test_lunar.data").write_text(ONE_YEAR, encoding="utf-8")
    monkeypatch.setenv("CALAXIS_DATA_PATH", str(tmp_path))
    loader = DataPathResourceLoader()
    assert loader.locate("calendar", "test_lunar.data") == tmp_path / "test_lunar.data"
    assert load_table("test-lunar", loader).min_year == 1

def test_packaged_table_found(monkeypatch, tmp_path):
    monkeypatch.delenv("CALAXIS_DATA_PATH", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    assert DataPathResourceLoader().locate("calendar", "islamic_civil.data") is not None
    assert DataPathResourceLoader().locate("calendar", "no_such.data") is None

def test_cache_builds_once_per_key():
    calls = []
    barrier = threading.Barrier(8)

    def factory(key):
        calls.append(key)
        return object()

    cache = VariantCache(factory)
    results = []

    def worker():
        barrier.wait()
        results.append(cache.get("a"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert calls == ["a"]
    assert all(r is results[0] for r in results)

def test_cache_failed_build_publishes_nothing():
    attempts = []

    def factory(key):
        attempts.append(key)
        raise DataFormatError("broken")

    cache = VariantCache(factory)
    for _ in range(2):
        with pytest.raises(DataFormatError):
            cache.get("x")
    assert cache.peek("x") is None
    assert attempts == ["x", "x"]

def test_variants_share_one_table():
    a = tabulated_calendar("islamic-civil")
    b = tabulated_calendar("islamic-civil:-1")
    assert a.table is b.table
    assert TABLES.peek("islamic-civil") is a.table
    assert b.name == "islamic-civil:-1"
    assert b.of(1445, 1, 1).variant == "islamic-civil:-1"

def _arithmetic_islamic_jdn(year, month, day):
    # tabular Islamic calendar, civil epoch (Dershowitz/Reingold)
    return (day + 29 * (month - 1) + (6 * month - 1) // 11 + (year - 1) * 354
            + (3 + 11 * year) // 30 + 1948439)

def test_packaged_table_matches_arithmetic_rule():
    c = tabulated_calendar("islamic-civil")
    t = c.table
    assert (t.min_year, t.max_year) == (1300, 1500)
    for year in range(t.min_year, t.max_year + 1, 7):
        for month in (1, 6, 12):
            d = c.of(year, month, 1)
            assert c.to_day_count(d) == _arithmetic_islamic_jdn(year, month, 1)

def test_packaged_table_known_date():
    c = tabulated_calendar("islamic-civil")
    assert c.to_day_count(c.of(1445, 1, 1)) == parse_iso_date("2023-07-19")
    assert c.from_day_count(parse_iso_date("2023-07-19")) == c.of(1445, 1, 1)

def test_build_table_accepts_any_line_iterable():
    t = build_table("test-lunar", iter(ONE_YEAR.splitlines()))
    assert len(t) == 12
