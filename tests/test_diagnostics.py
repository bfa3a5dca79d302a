# tests/test_diagnostics.py

import pytest

import worldcal
from worldcal.diagnostics import pretty_month, round_trip


def test_round_trip_has_no_failures():
    for cal in worldcal.list_calendars():
        assert round_trip.roundtrip_test(cal, N=300, lo=-10**11, hi=10**11, seed=1, max_failures=1) == 0


def test_parse_calendars():
    assert round_trip.parse_calendars(" gregorian, ,harptos ") == ["gregorian", "harptos"]


def test_month_weeks_layout():
    eng = worldcal.get_calendar("gregorian")
    weeks = pretty_month.month_weeks(eng, 2024, 1)
    assert all(len(wk) == 7 for wk in weeks)
    # February 2024 starts on a Thursday
    assert weeks[0][3][0].strip() == "1"
    assert weeks[0][2][0].strip() == ""


def test_month_weeks_intercalary_rows():
    eng = worldcal.get_calendar("harptos")
    weeks = pretty_month.month_weeks(eng, 1372, 1)
    assert len(weeks) == 1
    assert weeks[0][0][0].strip() == "1"


def test_month_weeks_marks_notes():
    eng = worldcal.get_calendar("simple")
    notes = [{"id": "n", "startDate": {"year": 0, "month": 0, "day": 0}, "repeatUnit": "days", "repeatInterval": 7}]
    days = [c for wk in pretty_month.month_weeks(eng, 0, 0, notes) for c in wk if c[0].strip()]
    marked = [int(top) for top, bot in days if "!" in bot]
    assert marked == [1, 8, 15, 22, 29]


def test_leap_year_mask():
    np = pytest.importorskip("numpy")
    from worldcal.diagnostics import leap_years

    mask = leap_years.leap_year_mask(np, "gregorian", 1996, 2004)
    assert mask.tolist() == [True, False, False, False, True, False, False, False, True]
    lengths = leap_years.year_lengths(np, "harptos", 1370, 1373)
    assert lengths.tolist() == [365, 365, 366, 365]


def test_leap_years_text_output(capsys):
    pytest.importorskip("numpy")
    from worldcal.diagnostics import leap_years

    assert leap_years.main(["--no-plot", "--calendars", "gregorian", "--start-year", "1896", "--end-year", "1908"]) == 0
    assert "gregorian: 2 leap years: 1896 1904" in capsys.readouterr().out


def test_leap_years_plot(tmp_path):
    pytest.importorskip("numpy")
    pytest.importorskip("matplotlib")
    from worldcal.diagnostics import leap_years

    out = tmp_path / "barcode.png"
    assert leap_years.main(["--out", str(out), "--start-year", "1990", "--end-year", "2010"]) == 0
    assert out.exists()
