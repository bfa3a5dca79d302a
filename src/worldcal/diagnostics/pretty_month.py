from __future__ import annotations

import argparse
import json
from pathlib import Path

from worldcal.cli import add_calendar_args, engine_from_args
from worldcal.core.types import CalendarDate


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def dow_header(names: tuple[str, ...], w: int = 6) -> str:
    return " ".join(n[:2].ljust(w) for n in names)


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def month_weeks(eng, year: int, month: int, notes: list | None = None) -> list[list[tuple[str, str]]]:
    """
    Lays the days of a month out in weekday columns. Days without a weekday
    (intercalary months) are listed one per row. The lower line marks moon
    phases starting that day ("*") and matching notes ("!").
    """
    n = eng.schema.weekday_count
    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    for day in range(eng.days_in_month(year, month)):
        d = CalendarDate(year, month, day)
        dow = eng.time.weekday_of(d)
        marks = "*" * len(eng.moon_phases_for_day(d))
        if notes:
            marks += "!" * len(eng.notes_on(notes, d))
        c = cell(f"{day + 1:2d}", marks)

        if dow < 0:
            if wk:
                weeks.append(wk + [cell("", "")] * (n - len(wk)))
                wk = []
            weeks.append([c] + [cell("", "")] * (n - 1))
            continue
        if not wk:
            wk = [cell("", "")] * dow
        elif len(wk) > dow:
            weeks.append(wk + [cell("", "")] * (n - len(wk)))
            wk = [cell("", "")] * dow
        wk.append(c)
        if len(wk) == n:
            weeks.append(wk)
            wk = []
    if wk:
        weeks.append(wk + [cell("", "")] * (n - len(wk)))
    return weeks


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a month grid with weekdays, moon phase starts and notes.")
    p.add_argument("year", type=int, nargs="?", default=None)
    p.add_argument("month", type=int, nargs="?", default=0, help="0-based month index")
    p.add_argument("--notes", default=None, help="JSON file holding a list of note objects")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    if not eng.schema.months:
        raise SystemExit("calendar has no months")
    year = args.year if args.year is not None else eng.schema.year_zero
    notes = json.loads(Path(args.notes).read_text(encoding="utf-8")) if args.notes else None

    name = eng.schema.months[args.month].name if 0 <= args.month < len(eng.schema.months) else "?"
    title = f"{eng.schema.name}  {name} {year}"
    print_grid(title, dow_header(eng.schema.weekdays), month_weeks(eng, year, args.month, notes))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
