# tests/test_time_converter.py

import random

import pytest

from worldcal import CalendarDate, CalendarSchema, EpochSync, MonthDef, TimeComponents
from worldcal.engines.specs import GREGORIAN_SCHEMA, HARPTOS_SCHEMA, SIMPLE_SCHEMA
from worldcal.engines.time_converter import TimeConverter, gregorian_leap

DAY = 86400

# Three-weekday calendar with one intercalary day between its two months
FESTIVAL_SCHEMA = CalendarSchema(
    id="festival",
    months=(
        MonthDef("A", 3),
        MonthDef("Fest", 1, intercalary=True),
        MonthDef("B", 3),
    ),
    weekdays=("a", "b", "c"),
)


@pytest.fixture(params=[SIMPLE_SCHEMA, GREGORIAN_SCHEMA, HARPTOS_SCHEMA, FESTIVAL_SCHEMA], ids=lambda s: s.id)
def converter(request):
    return TimeConverter(request.param)


def test_components_to_time_simple():
    conv = TimeConverter(SIMPLE_SCHEMA)
    c = TimeComponents(2, 1, 5, hour=1, minute=2, second=3)
    assert conv.components_to_time(c) == 13568523


def test_time_to_components_simple():
    c = TimeConverter(SIMPLE_SCHEMA).time_to_components(13568523)
    assert (c.year, c.month, c.day) == (2, 1, 5)
    assert (c.hour, c.minute, c.second) == (1, 2, 3)
    assert c.leap_year is False
    assert c.is_intercalary is False


def test_round_trip_sweep(converter):
    """
    Random clocks on both sides of the epoch decode to in-range components
    that encode back to the same clock.
    """
    random.seed(42)
    s = converter.schema
    for _ in range(2000):
        t = random.randint(-10**11, 10**11)
        c = converter.time_to_components(t)
        assert converter.components_to_time(c) == t
        assert 0 <= c.month < s.months_per_year
        assert 0 <= c.day < converter.days_in_month(c.year, c.month)
        assert 0 <= c.hour < s.hours_per_day
        assert 0 <= c.minute < s.minutes_per_hour
        assert 0 <= c.second < s.seconds_per_minute


def test_day_starts_are_monotonic(converter):
    random.seed(7)
    spd = converter.schema.seconds_per_day
    for _ in range(500):
        t = random.randint(-10**10, 10**10)
        a = converter.time_to_components(t)
        b = converter.time_to_components(t + spd)
        assert b.date > a.date


def test_components_to_time_follows_date_order(converter):
    """Later (year, month, day, hour, minute, second) tuples always encode to later clocks."""
    random.seed(11)
    s = converter.schema
    comps = []
    for _ in range(1000):
        year = random.randint(-50, 50)
        month = random.randrange(s.months_per_year)
        days = converter.days_in_month(year, month)
        if days == 0:
            continue
        comps.append(
            TimeComponents(
                year,
                month,
                random.randrange(days),
                hour=random.randrange(s.hours_per_day),
                minute=random.randrange(s.minutes_per_hour),
                second=random.randrange(s.seconds_per_minute),
            )
        )
    comps = sorted(set(comps), key=lambda c: (c.year, c.month, c.day, c.hour, c.minute, c.second))
    times = [converter.components_to_time(c) for c in comps]
    assert all(a < b for a, b in zip(times, times[1:]))


def test_gregorian_matches_unix_time():
    conv = TimeConverter(GREGORIAN_SCHEMA)
    assert conv.date_to_time(CalendarDate(2000, 0, 0)) == 946684800
    assert conv.date_to_time(CalendarDate(2024, 1, 28)) == 1709164800

    c = conv.time_to_components(946684800)
    assert (c.year, c.month, c.day) == (2000, 0, 0)
    assert c.day_of_week == 5  # Saturday
    assert c.leap_year is True

    c = conv.time_to_components(0)
    assert (c.year, c.month, c.day, c.day_of_week) == (1970, 0, 0, 3)  # Thursday


def test_gregorian_before_epoch():
    c = TimeConverter(GREGORIAN_SCHEMA).time_to_components(-1)
    assert (c.year, c.month, c.day) == (1969, 11, 30)
    assert (c.hour, c.minute, c.second) == (23, 59, 59)
    assert c.day_of_week == 2  # Wednesday


def test_gregorian_leap_rule():
    assert gregorian_leap(2000)
    assert gregorian_leap(2024)
    assert not gregorian_leap(1900)
    assert not gregorian_leap(2023)

    conv = TimeConverter(GREGORIAN_SCHEMA)
    assert conv.days_in_month(2024, 1) == 29
    assert conv.days_in_month(2023, 1) == 28
    assert conv.days_in_year(2000) == 366


def test_leap_modes():
    assert TimeConverter(SIMPLE_SCHEMA).leap_mode == "none"
    assert TimeConverter(HARPTOS_SCHEMA).leap_mode == "interval"
    assert TimeConverter(GREGORIAN_SCHEMA).leap_mode == "gregorian"
    # An epoch sync forces the Gregorian rule
    assert TimeConverter(HARPTOS_SCHEMA, sync=EpochSync()).leap_mode == "gregorian"


def test_interval_leap_years():
    conv = TimeConverter(HARPTOS_SCHEMA)
    assert conv.is_leap_year(1372)
    assert not conv.is_leap_year(1373)
    assert conv.is_leap_year(-4)
    assert conv.days_in_year(1372) == 366
    assert conv.days_in_year(1373) == 365
    # Shieldmeet only exists in leap years
    assert conv.days_in_month(1372, 10) == 1
    assert conv.days_in_month(1373, 10) == 0


def test_no_leap_calendar_never_leaps():
    conv = TimeConverter(SIMPLE_SCHEMA)
    assert not any(conv.is_leap_year(y) for y in range(-50, 50))


def test_days_in_month_out_of_range():
    conv = TimeConverter(SIMPLE_SCHEMA)
    assert conv.days_in_month(0, 2) == 0
    assert conv.days_in_month(0, -1) == 0


def test_negative_years_round_trip():
    conv = TimeConverter(HARPTOS_SCHEMA)
    t = conv.components_to_time(TimeComponents(-3, 2, 10, hour=5))
    assert t < 0
    c = conv.time_to_components(t)
    assert (c.year, c.month, c.day, c.hour) == (-3, 2, 10, 5)


def test_intercalary_days_have_no_weekday():
    conv = TimeConverter(HARPTOS_SCHEMA)
    assert conv.weekday_of(CalendarDate(1372, 1, 0)) == -1
    c = conv.time_to_components(conv.date_to_time(CalendarDate(1372, 1, 0)))
    assert c.is_intercalary is True


def test_reset_weekdays():
    conv = TimeConverter(HARPTOS_SCHEMA)
    assert conv.weekday_of(CalendarDate(1372, 2, 0)) == 0
    assert conv.weekday_of(CalendarDate(1372, 2, 13)) == 3
    assert conv.weekday_of(CalendarDate(1372, 3, 29)) == 9


def test_continuous_weekdays_skip_intercalary_days():
    conv = TimeConverter(FESTIVAL_SCHEMA)
    assert [conv.weekday_of(CalendarDate(0, 0, d)) for d in range(3)] == [0, 1, 2]
    assert conv.weekday_of(CalendarDate(0, 1, 0)) == -1
    assert conv.weekday_of(CalendarDate(0, 2, 0)) == 0
    assert conv.weekday_of(CalendarDate(0, 2, 1)) == 1
    # 7 days per year, 6 of them counted
    assert conv.weekday_of(CalendarDate(1, 0, 0)) == 0
    assert conv.weekday_of(CalendarDate(-1, 0, 0)) == 0


def test_fixed_starting_weekday_wins():
    schema = FESTIVAL_SCHEMA.tweak(
        months=(
            MonthDef("A", 3),
            MonthDef("Fest", 1, intercalary=True, starting_weekday=1),
            MonthDef("B", 4, starting_weekday=2),
        )
    )
    conv = TimeConverter(schema)
    assert conv.weekday_of(CalendarDate(0, 1, 0)) == 1
    assert conv.weekday_of(CalendarDate(0, 2, 0)) == 2
    assert conv.weekday_of(CalendarDate(0, 2, 3)) == 2


def test_custom_time_units():
    schema = SIMPLE_SCHEMA.tweak(hours_per_day=10, minutes_per_hour=100, seconds_per_minute=100)
    conv = TimeConverter(schema)
    assert schema.seconds_per_day == 100000
    c = conv.time_to_components(123456)
    assert (c.day, c.hour, c.minute, c.second) == (1, 2, 34, 56)


def test_fractional_seconds_are_floored():
    conv = TimeConverter(SIMPLE_SCHEMA)
    assert conv.time_to_components(10.7).second == 10


def test_degenerate_schema():
    for schema in (CalendarSchema(), CalendarSchema(months=(MonthDef("Void", 0),))):
        conv = TimeConverter(schema)
        assert schema.is_degenerate
        assert conv.components_to_time(TimeComponents(5, 0, 3)) == 0
        assert conv.time_to_components(12345) == TimeComponents(0, 0, 0, day_of_week=-1)
        assert conv.day_number(CalendarDate(5, 0, 0)) == 0


def test_day_number_counts_from_epoch():
    conv = TimeConverter(SIMPLE_SCHEMA)
    assert conv.day_number(CalendarDate(0, 0, 0)) == 0
    assert conv.day_number(CalendarDate(0, 1, 0)) == 30
    assert conv.day_number(CalendarDate(1, 0, 0)) == 61
    assert conv.day_number(CalendarDate(-1, 0, 0)) == -61
