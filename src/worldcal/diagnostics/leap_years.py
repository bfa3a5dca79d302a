#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import worldcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "worldcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "worldcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 4):
        raise SystemExit("--calendars must contain 1 to 4 comma-separated calendars")
    return out


def leap_year_mask(np, calendar, start_year: int, end_year: int):
    """Boolean array, one entry per year in [start_year, end_year]."""
    eng = worldcal.get_calendar(calendar)
    return np.array([eng.is_leap_year(y) for y in range(start_year, end_year + 1)], dtype=bool)


def year_lengths(np, calendar, start_year: int, end_year: int):
    eng = worldcal.get_calendar(calendar)
    return np.array([eng.time.days_in_year(y) for y in range(start_year, end_year + 1)], dtype=int)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-year barcode diagram across calendars.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--out", default="leapyear_barcode.png")
    p.add_argument("--title", default="Leap year pattern across calendars")
    p.add_argument("--calendars", default="gregorian,harptos", help="Comma list of 1-4 calendars.")
    p.add_argument("--year-step", type=int, default=5, help="Label every k years (default: 5).")
    p.add_argument("--no-plot", action="store_true", help="Print the leap years instead of plotting.")
    args = p.parse_args(argv)

    np = _need_numpy()

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    calendars = parse_calendars(args.calendars)
    years = np.arange(start_year, end_year + 1)
    masks = [leap_year_mask(np, c, start_year, end_year) for c in calendars]

    if args.no_plot:
        for c, m in zip(calendars, masks):
            print(f"{c}: {int(m.sum())} leap years: {' '.join(str(y) for y in years[m])}")
        return 0

    plt = _need_matplotlib()
    fig, ax = plt.subplots(figsize=(16, 0.9 * len(calendars) + 1.2))

    # one row per calendar, a filled cell per leap year
    Z = np.vstack([m.astype(float) for m in masks])
    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(-0.5, len(calendars) + 0.5, 1.0)
    ax.pcolormesh(x_edges, y_edges, Z, shading="flat", cmap="Greys", vmin=0, vmax=1.25,
                  edgecolors="0.88", linewidth=0.6)

    ax.tick_params(axis="both", which="both", length=0)
    step = max(1, int(args.year_step))
    xt = list(range(start_year, end_year + 1, step))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_yticks(list(range(len(calendars))))
    ax.set_yticklabels(calendars)
    ax.set_xlabel("Year")
    ax.set_title(args.title)

    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    plt.close(fig)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
