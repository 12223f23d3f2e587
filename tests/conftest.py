# tests/conftest.py
#
# In-memory ephemeris built from the Beijing-time dates of new moons and solar
# terms. Each instant is placed at local noon of its date, so date_cst() gives
# back the listed date whatever the exact hour of the real event.

import pytest

from kalendarilo.chinese.ephemeris import EphemerisRecord, EphemerisStore, use_store
from kalendarilo.core.date import Date
from kalendarilo.core.time_scales import Tdb

PHASE_STEP = 7.38


def tdb_on(iso: str) -> Tdb:
    y, m, d = map(int, iso.split("-"))
    return Tdb(Date.from_gregorian(y, m, d).jdn - 1.0 / 3.0)


def make_record(annus, new_moons, solar_terms):
    assert len(new_moons) == 15 and len(solar_terms) == 25
    moon_phase = []
    for iso in new_moons:
        nm = tdb_on(iso)
        moon_phase.append(tuple(Tdb(nm.jd + k * PHASE_STEP) for k in range(4)))
    return EphemerisRecord(
        annus=annus,
        solar_term=tuple(tdb_on(iso) for iso in solar_terms),
        moon_phase=tuple(moon_phase),
    )


SUI_2000 = dict(
    new_moons=[
        "1999-12-08", "2000-01-07", "2000-02-05", "2000-03-06", "2000-04-05",
        "2000-05-04", "2000-06-02", "2000-07-02", "2000-07-31", "2000-08-29",
        "2000-09-28", "2000-10-27", "2000-11-26", "2000-12-26", "2001-01-24",
    ],
    solar_terms=[
        "1999-12-22", "2000-01-06", "2000-01-21", "2000-02-04", "2000-02-19",
        "2000-03-05", "2000-03-20", "2000-04-04", "2000-04-20", "2000-05-05",
        "2000-05-21", "2000-06-05", "2000-06-21", "2000-07-07", "2000-07-22",
        "2000-08-07", "2000-08-23", "2000-09-07", "2000-09-22", "2000-10-08",
        "2000-10-23", "2000-11-07", "2000-11-22", "2000-12-07", "2000-12-21",
    ],
)

SUI_2016 = dict(
    new_moons=[
        "2015-12-11", "2016-01-10", "2016-02-08", "2016-03-09", "2016-04-07",
        "2016-05-07", "2016-06-05", "2016-07-04", "2016-08-03", "2016-09-01",
        "2016-10-01", "2016-10-31", "2016-11-29", "2016-12-29", "2017-01-28",
    ],
    solar_terms=[
        "2015-12-22", "2016-01-06", "2016-01-20", "2016-02-04", "2016-02-19",
        "2016-03-05", "2016-03-20", "2016-04-04", "2016-04-19", "2016-05-05",
        "2016-05-20", "2016-06-05", "2016-06-21", "2016-07-07", "2016-07-22",
        "2016-08-07", "2016-08-23", "2016-09-07", "2016-09-22", "2016-10-08",
        "2016-10-23", "2016-11-07", "2016-11-22", "2016-12-07", "2016-12-21",
    ],
)

SUI_2017 = dict(
    new_moons=[
        "2016-11-29", "2016-12-29", "2017-01-28", "2017-02-26", "2017-03-28",
        "2017-04-26", "2017-05-26", "2017-06-24", "2017-07-23", "2017-08-22",
        "2017-09-20", "2017-10-20", "2017-11-18", "2017-12-18", "2018-01-17",
    ],
    solar_terms=[
        "2016-12-21", "2017-01-05", "2017-01-20", "2017-02-03", "2017-02-18",
        "2017-03-05", "2017-03-20", "2017-04-04", "2017-04-20", "2017-05-05",
        "2017-05-21", "2017-06-05", "2017-06-21", "2017-07-07", "2017-07-22",
        "2017-08-07", "2017-08-23", "2017-09-07", "2017-09-23", "2017-10-08",
        "2017-10-23", "2017-11-07", "2017-11-22", "2017-12-07", "2017-12-22",
    ],
)

SUI_2018 = dict(
    new_moons=[
        "2017-12-18", "2018-01-17", "2018-02-16", "2018-03-17", "2018-04-16",
        "2018-05-15", "2018-06-14", "2018-07-13", "2018-08-11", "2018-09-10",
        "2018-10-09", "2018-11-08", "2018-12-07", "2019-01-06", "2019-02-05",
    ],
    solar_terms=[
        "2017-12-22", "2018-01-05", "2018-01-20", "2018-02-04", "2018-02-19",
        "2018-03-05", "2018-03-21", "2018-04-05", "2018-04-20", "2018-05-05",
        "2018-05-21", "2018-06-06", "2018-06-21", "2018-07-07", "2018-07-23",
        "2018-08-07", "2018-08-23", "2018-09-08", "2018-09-23", "2018-10-08",
        "2018-10-23", "2018-11-07", "2018-11-22", "2018-12-07", "2018-12-22",
    ],
)

SUI_DATA = {2000: SUI_2000, 2016: SUI_2016, 2017: SUI_2017, 2018: SUI_2018}


@pytest.fixture(scope="session")
def records():
    return {annus: make_record(annus, **data) for annus, data in SUI_DATA.items()}


@pytest.fixture(scope="session")
def store(records):
    return EphemerisStore(records.values())


@pytest.fixture
def installed_store(store):
    """Make the fixture table the process-wide default for one test."""
    use_store(store)
    yield store
    use_store(None)


def d(iso: str) -> Date:
    y, m, dd = map(int, iso.split("-"))
    return Date.from_gregorian(y, m, dd)
