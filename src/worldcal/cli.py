from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from worldcal.core.errors import WorldcalError


def add_calendar_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="gregorian", help="registered calendar name (default: gregorian)")
    p.add_argument("--schema", default=None, help="JSON calendar configuration file (overrides --calendar)")


def engine_from_args(args: argparse.Namespace):
    import worldcal

    if getattr(args, "schema", None):
        return worldcal.get_calendar(worldcal.load_schema(args.schema))
    return worldcal.get_calendar(args.calendar)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_date(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="worldcal date", description="World time (seconds) -> calendar components")
    p.add_argument("seconds", type=int)
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    c = eng.time_to_components(args.seconds)
    month = eng.schema.months[c.month].name if eng.schema.months else "-"
    weekday = eng.schema.weekdays[c.day_of_week] if 0 <= c.day_of_week < len(eng.schema.weekdays) else "-"
    print(f"{c.year}-{month}-{c.day + 1}  {c.hour:02d}:{c.minute:02d}:{c.second:02d}  ({weekday})")
    print(asdict(c))
    return 0


def cmd_time(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal time", description="Calendar components -> world time (seconds)")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="0-based month index")
    p.add_argument("day", type=int, help="0-based day index")
    p.add_argument("hms", type=int, nargs="*", metavar="H M S", help="optional hour, minute, second")
    add_calendar_args(p)
    args = p.parse_args(argv)

    h, m, s = (list(args.hms) + [0, 0, 0])[:3]
    eng = engine_from_args(args)
    print(eng.components_to_time(worldcal.TimeComponents(args.year, args.month, args.day, hour=h, minute=m, second=s)))
    return 0


def cmd_leap(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="worldcal leap", description="Is the given year a leap year?")
    p.add_argument("year", type=int)
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    leap = eng.is_leap_year(args.year)
    print(f"{args.year}: {'leap' if leap else 'standard'} ({eng.time.days_in_year(args.year)} days)")
    return 0


def cmd_moon(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="worldcal moon", description="Moon phases at a world time")
    p.add_argument("seconds", type=int)
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    if not eng.schema.moons:
        print("calendar has no moons")
        return 0
    for i, moon in enumerate(eng.schema.moons):
        res = eng.calculate_phase(args.seconds, i)
        if res is None:
            print(f"{moon.name}: not configured")
            continue
        print(f"{moon.name}: {res.display_name} (day {res.days_into_phase + 1}, next in {res.days_until_next})")
    return 0


def cmd_notes(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal notes", description="Notes from a JSON list that fall on a date")
    p.add_argument("file", help="JSON file holding a list of note objects")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, help="0-based month index")
    p.add_argument("day", type=int, help="0-based day index")
    add_calendar_args(p)
    args = p.parse_args(argv)

    notes = json.loads(Path(args.file).read_text(encoding="utf-8"))
    if not isinstance(notes, list):
        raise SystemExit(f"{args.file}: expected a JSON list of notes")
    skipped = [i for i, n in enumerate(notes) if not isinstance(n, dict)]
    if skipped:
        print(f"{args.file}: skipping non-object entries at {skipped}", file=sys.stderr)
    notes = [n for n in notes if isinstance(n, dict)]

    eng = engine_from_args(args)
    for n in eng.notes_on(notes, worldcal.CalendarDate(args.year, args.month, args.day)):
        print(f"{n.get('id', '?')}: {n.get('title', '')}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="worldcal", description="Fictional calendar time engine CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("date", help="World time -> calendar components")
    sub.add_parser("time", help="Calendar components -> world time")
    sub.add_parser("leap", help="Leap year check")
    sub.add_parser("moon", help="Moon phases at a world time")
    sub.add_parser("notes", help="Notes recurring on a date")
    sub.add_parser("list", help="List registered calendars")

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid with weekdays, moons and notes")
    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument("tool", choices=["round-trip", "leap-years"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    commands = {
        "date": cmd_date,
        "time": cmd_time,
        "leap": cmd_leap,
        "moon": cmd_moon,
        "notes": cmd_notes,
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)

        if args.cmd == "list":
            import worldcal
            for name in worldcal.list_calendars():
                print(f"{name}: {worldcal.calendar_info(name)['name']}")
            return 0

        if args.cmd == "pretty-month":
            return _run_module_main("worldcal.diagnostics.pretty_month", rest)

        if args.cmd == "diag":
            tool_map = {
                "round-trip": "worldcal.diagnostics.round_trip",
                "leap-years": "worldcal.diagnostics.leap_years",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except WorldcalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
