from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A calendar day. Month and day are 0-based indices."""
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class TimeComponents:
    year: int
    month: int
    day: int
    day_of_week: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    leap_year: bool = False
    is_intercalary: bool = False

    @property
    def date(self) -> CalendarDate:
        return CalendarDate(self.year, self.month, self.day)

    @classmethod
    def at_midnight(cls, d: CalendarDate) -> "TimeComponents":
        return cls(year=d.year, month=d.month, day=d.day)


@dataclass(frozen=True)
class MonthDef:
    name: str
    days: int
    ordinal: int = 0
    leap_days: Optional[int] = None  # resolved to `days` by CalendarSchema
    intercalary: bool = False
    starting_weekday: Optional[int] = None

    def length(self, leap: bool) -> int:
        if leap and self.leap_days is not None:
            return self.leap_days
        return self.days


@dataclass(frozen=True)
class PhaseDef:
    name: str
    length: float
    display: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class MoonConfig:
    name: str
    cycle_length: float
    first_new_moon: Optional[CalendarDate]
    phases: Tuple[PhaseDef, ...] = ()
    offset: float = 0.0
    color: str = "#ffffff"


@dataclass(frozen=True)
class PhaseResult:
    moon_name: str
    phase_index: int
    phase_name: str
    display_name: str
    days_into_phase: int
    days_until_next: int
    icon: Optional[str] = None
    color: str = "#ffffff"
