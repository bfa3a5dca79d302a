"""
worldcal.engines.moon
---------------------
Cyclic moon phase lookup. A moon is described by a reference new-moon
date, a cycle length in days and an ordered table of phase lengths.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import List, Optional, Sequence

from ..core.types import MoonConfig, PhaseResult, TimeComponents
from .time_converter import TimeConverter

logger = logging.getLogger(__name__)


def _positive(x) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool) and x > 0


class MoonPhaseCalculator:
    def __init__(self, converter: TimeConverter):
        self.conv = converter

    def calculate_phase(self, world_time: int, moon: MoonConfig) -> Optional[PhaseResult]:
        """
        Phase of `moon` on the day containing `world_time`, or None when the
        moon (or the calendar) is not configured well enough to answer.
        """
        if self.conv.schema.is_degenerate:
            return None
        ref = moon.first_new_moon
        if ref is None or not 0 <= ref.day < self.conv.days_in_month(ref.year, ref.month):
            logger.warning("Moon %r missing valid first new moon", moon.name)
            return None
        cycle = moon.cycle_length
        if not _positive(cycle):
            return None
        if not moon.phases:
            logger.warning("Moon %r has no phases", moon.name)
            return None

        reference = self.conv.components_to_time(TimeComponents.at_midnight(moon.first_new_moon))
        days = (world_time - reference) // self.conv.schema.seconds_per_day
        if days < 0:
            days += math.ceil(abs(days) / cycle) * cycle
        day_in_cycle = days % cycle

        index: Optional[int] = None
        first_valid: Optional[int] = None
        into = day_in_cycle
        for i, phase in enumerate(moon.phases):
            if not _positive(phase.length):
                logger.warning("Moon %r, phase %r has invalid length", moon.name, phase.name)
                continue
            if first_valid is None:
                first_valid = i
            if into < phase.length:
                index = i
                break
            into -= phase.length

        if first_valid is None:
            return None
        if index is None:
            # Phase lengths fall short of the cycle: wrap the leftover into the first phase
            index = first_valid
            into = into % moon.phases[index].length

        phase = moon.phases[index]
        return PhaseResult(
            moon_name=moon.name,
            phase_index=index,
            phase_name=phase.name,
            display_name=phase.display or phase.name,
            days_into_phase=math.floor(into),
            days_until_next=math.ceil(phase.length - into),
            icon=phase.icon,
            color=moon.color,
        )

    def phases_starting_on(self, day_time: int, moons: Sequence[MoonConfig]) -> List[PhaseResult]:
        """Phases of `moons` that begin on the day containing `day_time`."""
        out = []
        for moon in moons:
            res = self.calculate_phase(day_time, moon)
            if res is not None and res.days_into_phase == 0:
                out.append(res)
        return out
