"""
worldcal.engines.epoch_sync
---------------------------
Alignment of the calendar clock with an externally authoritative
chronology (a game system's own world clock). The result is a plain value
that callers derive once and pass into every TimeConverter; toggling sync
or editing the schema means deriving a new one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.types import CalendarDate
from .schema import CalendarSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExternalDate:
    """
    A date as reported by the external chronology. Month and day are
    1-based; weekday is 1 for the first weekday (ISO style, 1..7 for a
    seven-day week). `year_offset` is added to `year` before conversion.
    """
    year: int
    month: int
    day: int
    weekday: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    year_offset: int = 0


@dataclass(frozen=True)
class EpochSync:
    offset: int = 0
    first_weekday: int = 0

    @classmethod
    def derive(cls, schema: CalendarSchema, external: ExternalDate, world_time: int) -> "EpochSync":
        """
        `external` is the authoritative date at raw clock value `world_time`.

        offset        = calendar seconds of `external` - world_time
        first_weekday = (external weekday - counting days) mod weekday count

        where counting days excludes intercalary days, so continuous weekday
        numbering reproduces the external weekday on that date.
        """
        from .time_converter import TimeConverter

        if schema.is_degenerate:
            logger.debug("epoch sync requested for degenerate schema %r", schema.id)
            return cls()

        # Identity sync: Gregorian leap rule, no offset
        conv = TimeConverter(schema, sync=cls(0, schema.first_weekday))
        target = CalendarDate(external.year + external.year_offset, external.month - 1, external.day - 1)
        days, icl = conv.day_counts(target)

        internal = (
            days * schema.seconds_per_day
            + external.hour * schema.seconds_per_hour
            + external.minute * schema.seconds_per_minute
            + external.second
        )
        n = schema.weekday_count
        first_weekday = ((external.weekday - 1) - (days - icl)) % n

        sync = cls(offset=internal - world_time, first_weekday=first_weekday)
        logger.debug("derived epoch sync for %r: %s", schema.id, sync)
        return sync
