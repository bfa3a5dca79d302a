"""
worldcal.engines.factory
------------------------
Turns CalendarSpec and CalendarSchema data into live engine objects.
"""

from __future__ import annotations

from typing import Optional

from .calendar import CalendarEngine
from .epoch_sync import EpochSync
from .schema import CalendarSchema
from .specs import CalendarSpec


def build_calendar_engine(schema: CalendarSchema, sync: Optional[EpochSync] = None) -> CalendarEngine:
    """Transforms a CalendarSchema into a live CalendarEngine."""
    if not isinstance(schema, CalendarSchema):
        raise TypeError(f"Unknown schema type: {type(schema)}")
    return CalendarEngine(schema, sync)

def make_engine(spec: CalendarSpec, sync: Optional[EpochSync] = None) -> CalendarEngine:
    """The universal entry point."""
    return build_calendar_engine(spec.schema, sync)
