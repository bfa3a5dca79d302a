"""worldcal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    calendar_info,
    register_calendar,
    get_calendar,
    derive_sync,
    is_leap_year,
    components_to_time,
    time_to_components,
    calculate_phase,
    matches,
    notes_on,
    moon_phases_for_day,
)
from .core.errors import WorldcalError, SchemaError, UnknownCalendarError
from .core.types import CalendarDate, TimeComponents, MonthDef, MoonConfig, PhaseDef, PhaseResult
from .engines.calendar import CalendarEngine
from .engines.epoch_sync import EpochSync, ExternalDate
from .engines.recurrence import (
    Recurrence,
    NoRepeat,
    PeriodicRule,
    LunarRule,
    WeekdayRule,
    WeekIndexRule,
    RandomRule,
    InvalidRule,
    decode_note,
)
from .engines.schema import CalendarSchema, schema_from_config, load_schema

__all__ = [
    "list_calendars",
    "calendar_info",
    "register_calendar",
    "get_calendar",
    "derive_sync",
    "is_leap_year",
    "components_to_time",
    "time_to_components",
    "calculate_phase",
    "matches",
    "notes_on",
    "moon_phases_for_day",
    "WorldcalError",
    "SchemaError",
    "UnknownCalendarError",
    "CalendarDate",
    "TimeComponents",
    "MonthDef",
    "MoonConfig",
    "PhaseDef",
    "PhaseResult",
    "CalendarEngine",
    "EpochSync",
    "ExternalDate",
    "Recurrence",
    "NoRepeat",
    "PeriodicRule",
    "LunarRule",
    "WeekdayRule",
    "WeekIndexRule",
    "RandomRule",
    "InvalidRule",
    "decode_note",
    "CalendarSchema",
    "schema_from_config",
    "load_schema",
]
