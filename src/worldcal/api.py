from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from .core.engine import CalendarRegistry
from .core.types import CalendarDate, MoonConfig, PhaseResult, TimeComponents
from .engines.calendar import CalendarEngine, NoteLike
from .engines.epoch_sync import EpochSync, ExternalDate
from .engines.factory import build_calendar_engine
from .engines.schema import CalendarSchema

CalendarRef = Union[str, CalendarSchema, CalendarEngine]

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

def list_calendars() -> List[str]:
    return _reg().list()

def calendar_info(calendar: str) -> Dict[str, Any]:
    return _reg().get(calendar).info()

def register_calendar(name: str, engine: CalendarEngine, *, overwrite: bool = False) -> None:
    _reg().register(name, engine, overwrite=overwrite)

def get_calendar(calendar: CalendarRef = "gregorian", *, sync: Optional[EpochSync] = None) -> CalendarEngine:
    """
    Resolves a registered name, a schema or an engine to a CalendarEngine,
    applying `sync` when given.
    """
    if isinstance(calendar, CalendarEngine):
        eng = calendar
    elif isinstance(calendar, CalendarSchema):
        return build_calendar_engine(calendar, sync)
    else:
        eng = _reg().get(calendar)
    return eng.with_sync(sync) if sync is not None else eng

def derive_sync(external: ExternalDate, world_time: int, *, calendar: CalendarRef = "gregorian") -> EpochSync:
    return EpochSync.derive(get_calendar(calendar).schema, external, world_time)

# ============================================================
# Engine operations
# ============================================================

def is_leap_year(year: int, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None) -> bool:
    return get_calendar(calendar, sync=sync).is_leap_year(year)

def components_to_time(
    components: TimeComponents, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None
) -> int:
    return get_calendar(calendar, sync=sync).components_to_time(components)

def time_to_components(
    seconds: int, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None
) -> TimeComponents:
    return get_calendar(calendar, sync=sync).time_to_components(seconds)

def calculate_phase(
    world_time: int,
    moon: Union[int, MoonConfig] = 0,
    *,
    calendar: CalendarRef = "gregorian",
    sync: Optional[EpochSync] = None,
) -> Optional[PhaseResult]:
    return get_calendar(calendar, sync=sync).calculate_phase(world_time, moon)

def matches(
    note: NoteLike, date: CalendarDate, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None
) -> bool:
    return get_calendar(calendar, sync=sync).matches(note, date)

def notes_on(
    notes: Iterable[NoteLike], date: CalendarDate, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None
) -> List[NoteLike]:
    return get_calendar(calendar, sync=sync).notes_on(notes, date)

def moon_phases_for_day(
    date: CalendarDate, *, calendar: CalendarRef = "gregorian", sync: Optional[EpochSync] = None
) -> List[PhaseResult]:
    return get_calendar(calendar, sync=sync).moon_phases_for_day(date)
