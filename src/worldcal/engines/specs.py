from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Sequence, Tuple

from ..core.types import CalendarDate, MonthDef, MoonConfig, PhaseDef
from .schema import CalendarSchema


@dataclass(frozen=True)
class CalendarSpec:
    """Pure data payload for constructing a calendar engine."""
    name: str
    schema: CalendarSchema

    @staticmethod
    def like(name: str) -> "CalendarSpec":
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "CalendarSpec":
        return replace(self, schema=self.schema.tweak(**kwargs))


# ============================================================
# SHARED CONSTANTS
# ============================================================

WEEK_7 = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
TENDAY = ("First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh", "Eighth", "Ninth", "Tenth")

PHASE_NAMES = (
    "New Moon", "Waxing Crescent", "First Quarter", "Waxing Gibbous",
    "Full Moon", "Waning Gibbous", "Last Quarter", "Waning Crescent",
)


def eight_phases(cycle: float, icon_dir: str = "moons") -> Tuple[PhaseDef, ...]:
    """Standard eight-phase table: one-day principal phases, the rest split evenly."""
    span = (cycle - 4) / 4
    return tuple(
        PhaseDef(p, 1 if i % 2 == 0 else span, icon=f"{icon_dir}/{p.lower().replace(' ', '-')}.webp")
        for i, p in enumerate(PHASE_NAMES)
    )


def phase_table(lengths: Sequence[float], icon: str = "fa-moon") -> Tuple[PhaseDef, ...]:
    """The eight named phases with explicit lengths, as the host presets author them."""
    return tuple(PhaseDef(p, n, display=p, icon=icon) for p, n in zip(PHASE_NAMES, lengths))


def month_table(*entries) -> Tuple[MonthDef, ...]:
    """("Name", days) pairs; a third item True marks an intercalary month."""
    return tuple(MonthDef(e[0], e[1], intercalary=len(e) > 2 and e[2]) for e in entries)


# ============================================================
# PRESETS
# ============================================================

GREGORIAN_SCHEMA = CalendarSchema(
    id="gregorian-preset",
    name="Gregorian",
    description="Proleptic Gregorian calendar aligned with Unix time.",
    year_zero=1970,
    gregorian_leap=True,
    months=(
        MonthDef("January", 31),
        MonthDef("February", 28, leap_days=29),
        MonthDef("March", 31),
        MonthDef("April", 30),
        MonthDef("May", 31),
        MonthDef("June", 30),
        MonthDef("July", 31),
        MonthDef("August", 31),
        MonthDef("September", 30),
        MonthDef("October", 31),
        MonthDef("November", 30),
        MonthDef("December", 31),
    ),
    weekdays=WEEK_7,
    first_weekday=3,  # 1970-01-01 was a Thursday
    moons=(
        MoonConfig(
            name="Luna",
            cycle_length=29.53059,
            first_new_moon=CalendarDate(2000, 0, 5),
            phases=eight_phases(29.53059),
            color="#fffbe6",
        ),
    ),
)

HARPTOS_SCHEMA = CalendarSchema(
    id="harptos",
    name="Calendar of Harptos",
    description="Harptos (Forgotten Realms): twelve thirty-day months and five festivals, Shieldmeet every fourth year.",
    leap_interval=4,
    months=(
        MonthDef("Hammer", 30),
        MonthDef("Midwinter", 1, intercalary=True),
        MonthDef("Alturiak", 30),
        MonthDef("Ches", 30),
        MonthDef("Tarsakh", 30),
        MonthDef("Greengrass", 1, intercalary=True),
        MonthDef("Mirtul", 30),
        MonthDef("Kythorn", 30),
        MonthDef("Flamerule", 30),
        MonthDef("Midsummer", 1, intercalary=True),
        MonthDef("Shieldmeet", 0, leap_days=1, intercalary=True),
        MonthDef("Eleasis", 30),
        MonthDef("Eleint", 30),
        MonthDef("Highharvestide", 1, intercalary=True),
        MonthDef("Marpenoth", 30),
        MonthDef("Uktar", 30),
        MonthDef("Feast of the Moon", 1, intercalary=True),
        MonthDef("Nightal", 30),
    ),
    weekdays=TENDAY,
    reset_weekdays=True,
    moons=(
        MoonConfig(
            name="Selune",
            cycle_length=30.4375,
            first_new_moon=CalendarDate(0, 0, 0),
            phases=eight_phases(30.4375),
            color="#e8ecff",
        ),
    ),
)

SIMPLE_SCHEMA = CalendarSchema(
    id="simple",
    name="Two-month test calendar",
    months=(MonthDef("Firstmonth", 30), MonthDef("Secondmonth", 31)),
)


ABSALOM_SCHEMA = CalendarSchema(
    id="absalom-reckoning",
    name="Absalom Reckoning",
    description="Absalom Reckoning (Golarion), the chronology kept by the Pathfinder world clock.",
    year_zero=2700,
    leap_interval=4,
    months=(
        MonthDef("Abadius", 31),
        MonthDef("Calistril", 28, leap_days=29),
        MonthDef("Pharast", 31),
        MonthDef("Gozran", 30),
        MonthDef("Desnus", 31),
        MonthDef("Sarenith", 30),
        MonthDef("Erastus", 31),
        MonthDef("Arodus", 31),
        MonthDef("Rova", 30),
        MonthDef("Lamashan", 31),
        MonthDef("Neth", 30),
        MonthDef("Kuthona", 31),
    ),
    weekdays=("Moonday", "Toilday", "Wealday", "Oathday", "Fireday", "Starday", "Sunday"),
    moons=(
        MoonConfig(
            name="Somal",
            cycle_length=29.5,
            first_new_moon=CalendarDate(0, 0, 25),
            phases=phase_table([3.6875] * 8),
            color="#e0e0e0",
        ),
    ),
)

BAROVIAN_SCHEMA = CalendarSchema(
    id="barovia-lunar",
    name="Barovian Calendar",
    description="The lunar calendar of Barovia, where the moon cycles determine the passage of time.",
    months=month_table(
        ("Yinyavr", 30), ("Fenravr", 30), ("Martavr", 30), ("Prylla", 30),
        ("Mada", 30), ("Eyun", 30), ("Eyul", 30), ("Ugavr", 30),
        ("Sintavr", 30), ("Ottyavr", 30), ("Neyavr", 30), ("Dekavr", 30),
    ),
    weekdays=("Firstday", "Secondday", "Thirdday", "Fourthday", "Fifthday", "Sixthday", "Seventhday"),
    moons=(
        MoonConfig(
            name="Luna",
            cycle_length=30,
            first_new_moon=CalendarDate(0, 0, 0),
            phases=phase_table([3.75] * 8),
            color="#dfb8b8",
        ),
    ),
)

GALIFAR_SCHEMA = CalendarSchema(
    id="galifar-calendar",
    name="Galifar Calendar",
    description="The primary calendar system used on the continent of Khorvaire (Eberron).",
    months=month_table(
        ("Zarantyr", 28), ("Olarune", 28), ("Therendor", 28), ("Eyre", 28),
        ("Dravago", 28), ("Nymm", 28), ("Lharvion", 28), ("Barrakas", 28),
        ("Rhaan", 28), ("Sypheros", 28), ("Aryth", 28), ("Vult", 28),
    ),
    weekdays=("Sul", "Mol", "Zol", "Wir", "Zor", "Far", "Sar"),
)

IMPERIAL_SCHEMA = CalendarSchema(
    id="whf calendar",
    name="Imperial Calendar",
    description="The standard calendar of the Empire of Man.",
    months=month_table(
        ("Hexenstag", 1, True), ("Nachexen", 32), ("Jahrdrung", 33),
        ("Mitterfruhl", 1, True), ("Pflugzeit", 33), ("Sigmarzeit", 33), ("Sommerzeit", 33),
        ("Sonnstill", 1, True), ("Vorgeheim", 33),
        ("Geheimnistag", 1, True), ("Nachgeheim", 32), ("Erntezeit", 33),
        ("Mittherbst", 1, True), ("Brauzeit", 33), ("Kaldezeit", 33), ("Ulriczeit", 33),
        ("Mondstille", 1, True), ("Vorhexen", 33),
    ),
    weekdays=("Wellentag", "Aubentag", "Marktag", "Backertag", "Bezahltag", "Konistag", "Angestag", "Festag"),
    moons=(
        MoonConfig(
            name="Mannslieb",
            cycle_length=25,
            first_new_moon=CalendarDate(0, 1, 0),
            phases=phase_table([1, 5, 1, 5, 1, 5, 1, 6]),
            color="#e0e0e0",
        ),
        MoonConfig(
            name="Morrslieb",
            cycle_length=33,
            first_new_moon=CalendarDate(0, 1, 6),
            phases=phase_table([3, 7, 2, 6, 3, 6, 2, 4]),
            color="#9db92c",
        ),
    ),
)


ALL_SPECS: Dict[str, CalendarSpec] = {
    spec.name: spec
    for spec in (
        CalendarSpec("gregorian", GREGORIAN_SCHEMA),
        CalendarSpec("harptos", HARPTOS_SCHEMA),
        CalendarSpec("absalom", ABSALOM_SCHEMA),
        CalendarSpec("barovian", BAROVIAN_SCHEMA),
        CalendarSpec("galifar", GALIFAR_SCHEMA),
        CalendarSpec("imperial", IMPERIAL_SCHEMA),
        CalendarSpec("simple", SIMPLE_SCHEMA),
    )
}
