"""
worldcal.engines.calendar
-------------------------
The Orchestrator. Binds one schema, its moons and an optional epoch sync
to a TimeConverter, a MoonPhaseCalculator and a RecurrenceEvaluator.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..core.types import CalendarDate, MoonConfig, PhaseResult, TimeComponents
from .epoch_sync import EpochSync
from .moon import MoonPhaseCalculator
from .recurrence import Recurrence, RecurrenceEvaluator, decode_note
from .schema import CalendarSchema
from .time_converter import TimeConverter

NoteLike = Union[Recurrence, Mapping[str, Any]]


class CalendarEngine:
    def __init__(self, schema: CalendarSchema, sync: Optional[EpochSync] = None):
        self.schema = schema
        self.sync = sync
        self.time = TimeConverter(schema, sync)
        self.moon = MoonPhaseCalculator(self.time)
        self.recurrence = RecurrenceEvaluator(self.time, schema.moons)

    def with_sync(self, sync: Optional[EpochSync]) -> "CalendarEngine":
        """A new engine over the same schema with `sync` applied (None disables it)."""
        return CalendarEngine(self.schema, sync)

    # ---------------------------------------------------------
    # Time
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        return self.time.is_leap_year(year)

    def components_to_time(self, components: TimeComponents) -> int:
        return self.time.components_to_time(components)

    def time_to_components(self, seconds: int) -> TimeComponents:
        return self.time.time_to_components(seconds)

    def days_in_month(self, year: int, month: int) -> int:
        return self.time.days_in_month(year, month)

    def first_day_of_month(self, year: int, month: int) -> int:
        """World time at the start of the first day of a month."""
        return self.time.date_to_time(CalendarDate(year, month, 0))

    # ---------------------------------------------------------
    # Moons
    # ---------------------------------------------------------

    def calculate_phase(self, world_time: int, moon: Union[int, MoonConfig]) -> Optional[PhaseResult]:
        if isinstance(moon, int):
            if not 0 <= moon < len(self.schema.moons):
                return None
            moon = self.schema.moons[moon]
        return self.moon.calculate_phase(world_time, moon)

    def moon_phases_for_day(self, d: CalendarDate) -> List[PhaseResult]:
        return self.moon.phases_starting_on(self.time.date_to_time(d), self.schema.moons)

    # ---------------------------------------------------------
    # Notes
    # ---------------------------------------------------------

    def matches(self, note: NoteLike, d: CalendarDate) -> bool:
        rec = note if isinstance(note, Recurrence) else decode_note(note)
        return self.recurrence.matches(rec, d)

    def notes_on(self, notes: Iterable[NoteLike], d: CalendarDate) -> List[NoteLike]:
        return [n for n in notes if self.matches(n, d)]

    def info(self) -> Dict[str, Any]:
        s = self.schema
        return {
            "id": s.id,
            "name": s.name,
            "description": s.description,
            "year_zero": s.year_zero,
            "leap_mode": self.time.leap_mode,
            "months": len(s.months),
            "days_in_standard_year": s.days_in_standard_year,
            "days_in_leap_year": s.days_in_leap_year,
            "weekdays": s.weekday_count,
            "seconds_per_day": s.seconds_per_day,
            "moons": [m.name for m in s.moons],
            "synced": self.sync is not None,
        }
