"""
worldcal.engines.schema
-----------------------
Declarative calendar definition consumed by every engine component.
Optional month fields are resolved once here so the converters never need
per-call fallbacks.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..core.errors import SchemaError
from ..core.types import CalendarDate, MonthDef, MoonConfig, PhaseDef

logger = logging.getLogger(__name__)

DEFAULT_WEEKDAYS: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _require_int(label: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"{label} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class CalendarSchema:
    id: str = "custom"
    name: str = ""
    description: str = ""

    year_zero: int = 0
    leap_interval: int = 0
    gregorian_leap: bool = False

    months: Tuple[MonthDef, ...] = ()
    weekdays: Tuple[str, ...] = DEFAULT_WEEKDAYS
    first_weekday: int = 0
    reset_weekdays: bool = False

    seconds_per_minute: int = 60
    minutes_per_hour: int = 60
    hours_per_day: int = 24

    moons: Tuple[MoonConfig, ...] = ()

    # Year totals, filled in by __post_init__
    _days_std: int = field(default=0, init=False, repr=False, compare=False)
    _days_leap: int = field(default=0, init=False, repr=False, compare=False)
    _icl_std: int = field(default=0, init=False, repr=False, compare=False)
    _icl_leap: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_int("year_zero", self.year_zero)
        n = len(self.weekdays) or 7
        if not 0 <= _require_int("first_weekday", self.first_weekday) < n:
            raise SchemaError(f"first_weekday {self.first_weekday} outside 0..{n - 1}")
        if _require_int("leap_interval", self.leap_interval) < 0:
            raise SchemaError("leap_interval must be >= 0")
        for label in ("seconds_per_minute", "minutes_per_hour", "hours_per_day"):
            if _require_int(label, getattr(self, label)) <= 0:
                raise SchemaError(f"{label} must be positive")

        resolved = []
        for i, m in enumerate(self.months):
            if _require_int(f"months[{i}].days", m.days) < 0:
                raise SchemaError(f"months[{i}] ({m.name}) has a negative length")
            leap_days = m.days if m.leap_days is None else m.leap_days
            if _require_int(f"months[{i}].leap_days", leap_days) < 0:
                raise SchemaError(f"months[{i}] ({m.name}) has a negative leap length")
            if m.starting_weekday is not None:
                if not 0 <= _require_int(f"months[{i}].starting_weekday", m.starting_weekday) < n:
                    raise SchemaError(f"months[{i}] ({m.name}) starting weekday outside 0..{n - 1}")
            resolved.append(
                MonthDef(
                    name=m.name,
                    days=m.days,
                    ordinal=m.ordinal or i + 1,
                    leap_days=leap_days,
                    intercalary=bool(m.intercalary),
                    starting_weekday=m.starting_weekday,
                )
            )

        # Workaround to set derived values on a frozen dataclass
        object.__setattr__(self, "months", tuple(resolved))
        object.__setattr__(self, "weekdays", tuple(self.weekdays))
        object.__setattr__(self, "moons", tuple(self.moons))
        object.__setattr__(self, "_days_std", sum(m.length(False) for m in resolved))
        object.__setattr__(self, "_days_leap", sum(m.length(True) for m in resolved))
        object.__setattr__(self, "_icl_std", sum(m.length(False) for m in resolved if m.intercalary))
        object.__setattr__(self, "_icl_leap", sum(m.length(True) for m in resolved if m.intercalary))

    # ---------------------------------------------------------
    # Derived constants
    # ---------------------------------------------------------

    @property
    def seconds_per_hour(self) -> int:
        return self.seconds_per_minute * self.minutes_per_hour

    @property
    def seconds_per_day(self) -> int:
        return self.seconds_per_hour * self.hours_per_day

    @property
    def weekday_count(self) -> int:
        return len(self.weekdays) or 7

    @property
    def months_per_year(self) -> int:
        return len(self.months)

    @property
    def days_in_standard_year(self) -> int:
        return self._days_std

    @property
    def days_in_leap_year(self) -> int:
        return self._days_leap

    @property
    def intercalary_days_in_standard_year(self) -> int:
        return self._icl_std

    @property
    def intercalary_days_in_leap_year(self) -> int:
        return self._icl_leap

    @property
    def is_degenerate(self) -> bool:
        """True when the schema cannot describe a single day of calendar time."""
        return not self.months or self._days_std <= 0 or self._days_leap <= 0

    def days_in_year(self, leap: bool) -> int:
        return self._days_leap if leap else self._days_std

    def intercalary_days_in_year(self, leap: bool) -> int:
        return self._icl_leap if leap else self._icl_std

    def tweak(self, **kwargs) -> "CalendarSchema":
        """Returns a copy with the given fields replaced (re-validated)."""
        return replace(self, **kwargs)


# ============================================================
# Decoding from the host configuration shape
# ============================================================

def _named(entry: Any, default: str) -> str:
    if isinstance(entry, Mapping):
        return str(entry.get("name") or default)
    return str(entry)


def month_from_config(entry: Mapping[str, Any], index: int) -> MonthDef:
    if not isinstance(entry, Mapping):
        raise SchemaError(f"month {index} must be a mapping, got {entry!r}")
    if "days" not in entry:
        raise SchemaError(f"month {index} has no 'days'")
    return MonthDef(
        name=str(entry.get("name") or f"Month {index + 1}"),
        days=entry["days"],
        ordinal=entry.get("ordinal") or index + 1,
        leap_days=entry.get("leapDays"),
        intercalary=bool(entry.get("intercalary", False)),
        starting_weekday=entry.get("startingWeekday"),
    )


def moon_from_config(entry: Mapping[str, Any]) -> MoonConfig:
    """
    Host moons store firstNewMoon with 1-based month/day; an incomplete
    reference date decodes to None so phase lookups fail closed.
    """
    ref = entry.get("firstNewMoon")
    first: Optional[CalendarDate] = None
    if isinstance(ref, Mapping) and all(
        isinstance(ref.get(k), int) and not isinstance(ref.get(k), bool)
        for k in ("year", "month", "day")
    ):
        first = CalendarDate(ref["year"], ref["month"] - 1, ref["day"] - 1)
    else:
        logger.warning("Moon %r has no valid firstNewMoon", entry.get("name"))

    phases = tuple(
        PhaseDef(
            name=str(p.get("name", "")),
            length=p.get("length", 0),
            display=p.get("display"),
            icon=p.get("icon"),
        )
        for p in _as_list(entry.get("phases"), f"moon {entry.get('name')!r} phases")
        if isinstance(p, Mapping)
    )
    return MoonConfig(
        name=str(entry.get("name", "")),
        cycle_length=entry.get("cycleLength", 0) or 0,
        first_new_moon=first,
        phases=phases,
        offset=entry.get("offset", 0) or 0,
        color=entry.get("color") or "#ffffff",
    )


def _section(cfg: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = cfg.get(key) or {}
    if not isinstance(value, Mapping):
        raise SchemaError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _as_list(value: Any, label: str) -> Sequence[Any]:
    value = value or ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise SchemaError(f"{label} must be a list, got {type(value).__name__}")
    return value


def _values(cfg: Mapping[str, Any], key: str) -> Sequence[Any]:
    """The `values` list of a section such as {"months": {"values": [...]}}."""
    return _as_list(_section(cfg, key).get("values"), f"'{key}.values'")


def schema_from_config(cfg: Mapping[str, Any]) -> CalendarSchema:
    """
    Builds a schema from the host configuration mapping:

        {"id", "name",
         "years": {"yearZero", "firstWeekday", "resetWeekdays", "leapYear": {"leapInterval"}},
         "months": {"values": [...]},
         "days": {"values": [...], "hoursPerDay", "minutesPerHour", "secondsPerMinute"},
         "moons": {"values": [...]}}

    Missing time units fall back to 24/60/60 like the host does.
    """
    if not isinstance(cfg, Mapping):
        raise SchemaError("calendar configuration must be a mapping")

    years = _section(cfg, "years")
    days = _section(cfg, "days")
    leap = _section(years, "leapYear")
    month_values = _values(cfg, "months")
    weekday_values = _values(cfg, "days")
    moon_values = _values(cfg, "moons")

    cal_id = str(cfg.get("id") or "custom")
    return CalendarSchema(
        id=cal_id,
        name=str(cfg.get("name") or cal_id),
        description=str(cfg.get("description") or ""),
        year_zero=years.get("yearZero", 0) or 0,
        leap_interval=leap.get("leapInterval", 0) or 0,
        gregorian_leap=bool(cfg.get("gregorianLeap", cal_id == "gregorian-preset")),
        months=tuple(month_from_config(m, i) for i, m in enumerate(month_values)),
        weekdays=tuple(_named(w, f"Day {i + 1}") for i, w in enumerate(weekday_values)) or DEFAULT_WEEKDAYS,
        first_weekday=years.get("firstWeekday", 0) or 0,
        reset_weekdays=bool(years.get("resetWeekdays", False)),
        seconds_per_minute=days.get("secondsPerMinute") or 60,
        minutes_per_hour=days.get("minutesPerHour") or 60,
        hours_per_day=days.get("hoursPerDay") or 24,
        moons=tuple(moon_from_config(m) for m in moon_values if isinstance(m, Mapping)),
    )


def load_schema(path: Union[str, Path]) -> CalendarSchema:
    """Reads a JSON calendar configuration file."""
    p = Path(path)
    try:
        cfg: Dict[str, Any] = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaError(f"{p}: invalid JSON ({e})") from e
    return schema_from_config(cfg)
