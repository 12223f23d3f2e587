# tests/test_date.py

import datetime
import random

import pytest

from kalendarilo.core.date import (
    JDN_MAX,
    Date,
    YearType,
    gregorian_to_jdn,
    jdn_to_gregorian,
    ordinal_day_number,
)
from kalendarilo.core.errors import KalendariloError, OutOfRangeError


def test_known_dates():
    d = Date.from_gregorian(1970, 1, 1)
    assert d.jdn == 2440588
    assert d.day_of_week() == 4
    assert d.sexagenary() == 18

    d = Date.from_gregorian(2021, 9, 8)
    assert d.jdn == 2459466
    assert d.day_of_week() == 3
    assert d.sexagenary() == 56

    assert Date.from_gregorian(2000, 1, 1).jdn == 2451545
    assert Date.from_gregorian(-4713, 11, 24).jdn == 0


def test_millennium_day():
    d = Date.from_gregorian(2000, 1, 1)
    assert d.day_of_week() == 6
    assert d.sexagenary() == 55


def test_day_cycles_step_by_one():
    random.seed(42)
    for _ in range(200):
        d = Date.from_jdn(random.randint(0, 5_000_000))
        nxt = d + 1
        assert nxt.day_of_week() == d.day_of_week() % 7 + 1
        assert nxt.sexagenary() == d.sexagenary() % 60 + 1


def test_jdn_range():
    assert Date.from_jdn(0).jdn == 0
    assert Date.from_jdn(JDN_MAX).jdn == JDN_MAX
    with pytest.raises(OutOfRangeError):
        Date.from_jdn(-1)
    with pytest.raises(OutOfRangeError):
        Date.from_jdn(JDN_MAX + 1)
    with pytest.raises(OutOfRangeError):
        Date.from_gregorian(-4713, 11, 23)
    with pytest.raises(TypeError):
        Date(2451545.0)


def test_out_of_range_is_a_value_error():
    with pytest.raises(ValueError):
        Date.from_jdn(-5)
    assert issubclass(OutOfRangeError, KalendariloError)


@pytest.mark.parametrize("ymd, expected", [
    ((1980, 12, 28), (1980, 52)),
    ((1980, 12, 31), (1981, 1)),
    ((1981, 1, 4), (1981, 1)),
    ((1981, 1, 5), (1981, 2)),
    ((1981, 12, 31), (1981, 53)),
    ((1982, 1, 1), (1981, 53)),
    ((2023, 3, 12), (2023, 10)),
    ((2023, 3, 13), (2023, 11)),
])
def test_iso_week(ymd, expected):
    assert Date.from_gregorian(*ymd).year_week_gregorian() == expected


def test_iso_week_whole_week():
    for day in range(6, 13):
        assert Date.from_gregorian(2021, 9, day).year_week_gregorian() == (2021, 36)


def test_iso_week_against_datetime():
    random.seed(42)
    for _ in range(5000):
        jdn = random.randint(1721426, 5373484)
        d = Date.from_jdn(jdn)
        iso = d.to_date().isocalendar()
        assert d.year_week_gregorian() == (iso[0], iso[1])
        assert d.day_of_week() == iso[2]


def test_ordinal_day_number():
    assert ordinal_day_number(1, 1, YearType.COMMON) == 1
    assert ordinal_day_number(9, 13, YearType.COMMON) == 256
    assert ordinal_day_number(12, 31, YearType.LEAP) == 366
    assert ordinal_day_number(3, 1, YearType.LEAP) == 61


def test_year_type():
    assert YearType.from_gregorian(2000) is YearType.LEAP
    assert YearType.from_gregorian(1900) is YearType.COMMON
    assert YearType.from_gregorian(2024).is_leap
    assert YearType.from_gregorian(0).is_leap
    assert not YearType.from_gregorian(-1).is_leap


def test_gregorian_roundtrip():
    random.seed(42)
    for _ in range(10000):
        jdn = random.randint(0, 10_000_000)
        assert gregorian_to_jdn(*jdn_to_gregorian(jdn)) == jdn


def test_datetime_roundtrip():
    random.seed(42)
    for _ in range(2000):
        jdn = random.randint(1721426, 5373484)
        d = Date.from_jdn(jdn)
        assert Date.from_date(d.to_date()) == d
        assert d.gregorian() == (d.to_date().year, d.to_date().month, d.to_date().day)


def test_to_date_out_of_range():
    with pytest.raises(OutOfRangeError):
        Date.from_gregorian(0, 6, 1).to_date()


def test_iso_string():
    assert str(Date.from_gregorian(2017, 7, 3)) == "2017-07-03"
    assert Date.from_gregorian(-1, 12, 31).iso_gregorian() == "-0001-12-31"
    assert Date.from_gregorian(12345, 1, 2).iso_gregorian() == "+12345-01-02"


def test_arithmetic_and_ordering():
    a = Date.from_gregorian(2017, 2, 26)
    b = Date.from_gregorian(2017, 3, 28)
    assert b - a == 30
    assert a + 30 == b
    assert 30 + a == b
    assert b - 30 == a
    assert a < b
    assert sorted([b, a]) == [a, b]
    with pytest.raises(OverflowError):
        Date.from_jdn(JDN_MAX) + 1
    with pytest.raises(TypeError):
        a + 1.5


def test_hashable():
    assert len({Date.from_jdn(5), Date.from_jdn(5), Date.from_jdn(6)}) == 2
    assert Date.from_date(datetime.date(2000, 1, 1)).jdn == 2451545
