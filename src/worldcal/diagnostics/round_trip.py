from __future__ import annotations

import argparse
import random
from typing import List

import worldcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,harptos" -> ["gregorian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    lo: int,
    hi: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """
    Random world times -> components -> world time, plus a range check on
    the decoded hour and day.
    """
    rng = random.Random(seed)
    eng = worldcal.get_calendar(calendar)
    failures = 0

    for _ in range(N):
        t0 = rng.randint(lo, hi)
        c = eng.time_to_components(t0)
        back = eng.components_to_time(c)
        if back != t0:
            failures += 1
            print("\nFAIL (round trip)")
            print("calendar:", calendar)
            print("t0:", t0)
            print("components:", c)
            print("back:", back)
            if failures >= max_failures:
                return failures

        if not (0 <= c.hour < eng.schema.hours_per_day and 0 <= c.day < eng.days_in_month(c.year, c.month)):
            failures += 1
            print("\nFAIL (range)")
            print("calendar:", calendar)
            print("t0:", t0)
            print("components:", c)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: world time -> components -> world time.")
    p.add_argument("--calendars", type=str, default=",".join(worldcal.list_calendars()),
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--lo", type=int, default=-(10 ** 12), help="Lowest world time.")
    p.add_argument("--hi", type=int, default=10 ** 12, help="Highest world time.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.hi < args.lo:
        raise SystemExit("--hi must be >= --lo")

    total_fail = 0
    for cal in parse_calendars(args.calendars):
        print(f"Testing {cal} ...")
        total_fail += roundtrip_test(cal, N=args.N, lo=args.lo, hi=args.hi, seed=args.seed,
                                     max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
