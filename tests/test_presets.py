# tests/test_presets.py

import random

import pytest

import worldcal
from worldcal import CalendarDate
from worldcal.engines.factory import make_engine
from worldcal.engines.specs import ALL_SPECS

D = CalendarDate


@pytest.fixture(params=sorted(ALL_SPECS), ids=str)
def engine(request):
    return make_engine(ALL_SPECS[request.param])


def test_every_preset_round_trips(engine):
    random.seed(3)
    for _ in range(300):
        t = random.randint(-10**10, 10**10)
        c = engine.time_to_components(t)
        assert engine.components_to_time(c) == t


def test_preset_descriptions():
    for name in ALL_SPECS:
        if name != "simple":
            assert worldcal.calendar_info(name)["description"]


def test_absalom():
    eng = worldcal.get_calendar("absalom")
    assert eng.time_to_components(0).year == 2700
    assert eng.is_leap_year(4720)
    assert not eng.is_leap_year(4721)
    assert eng.time.days_in_year(4720) == 366
    assert eng.time.days_in_year(4721) == 365
    assert eng.days_in_month(4720, 1) == 29
    assert eng.days_in_month(4721, 1) == 28
    assert worldcal.calendar_info("absalom")["moons"] == ["Somal"]


def test_barovian():
    eng = worldcal.get_calendar("barovian")
    assert eng.schema.days_in_standard_year == 360
    assert not eng.is_leap_year(4)

    new = eng.calculate_phase(eng.first_day_of_month(0, 0), 0)
    assert (new.moon_name, new.phase_name, new.days_into_phase) == ("Luna", "New Moon", 0)
    full = eng.calculate_phase(eng.first_day_of_month(0, 0) + 15 * 86400, 0)
    assert (full.phase_name, full.days_into_phase) == ("Full Moon", 0)


def test_galifar():
    eng = worldcal.get_calendar("galifar")
    assert eng.schema.days_in_standard_year == 336
    assert eng.schema.weekdays[0] == "Sul"
    assert eng.calculate_phase(0, 0) is None
    assert eng.moon_phases_for_day(D(998, 0, 0)) == []


def test_imperial():
    eng = worldcal.get_calendar("imperial")
    assert eng.schema.days_in_standard_year == 400
    assert eng.schema.intercalary_days_in_standard_year == 6

    hexenstag = eng.time_to_components(eng.first_day_of_month(2512, 0))
    assert hexenstag.is_intercalary
    assert hexenstag.day_of_week == -1

    mannslieb = eng.calculate_phase(eng.first_day_of_month(0, 1), 0)
    assert (mannslieb.moon_name, mannslieb.phase_name, mannslieb.days_into_phase) == ("Mannslieb", "New Moon", 0)
    morrslieb = eng.calculate_phase(eng.time.date_to_time(D(0, 1, 6)), 1)
    assert (morrslieb.moon_name, morrslieb.phase_name, morrslieb.days_into_phase) == ("Morrslieb", "New Moon", 0)
    assert "Morrslieb" in [r.moon_name for r in eng.moon_phases_for_day(D(0, 1, 6))]
