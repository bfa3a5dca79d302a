"""
worldcal.engines.time_converter
-------------------------------
Bidirectional mapping between the integer world clock (seconds since the
start of `year_zero`) and structured calendar components.

Whole years are handled with a closed-form leap cycle: 400 years in
Gregorian mode, `leap_interval` years in interval mode, a single year when
the calendar has no leap years. Floor division on the cycle makes the same
arithmetic valid before the epoch, so negative clocks need no special path.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Literal, Optional, Tuple

from ..core.types import CalendarDate, MonthDef, TimeComponents
from .schema import CalendarSchema

if TYPE_CHECKING:
    from .epoch_sync import EpochSync

logger = logging.getLogger(__name__)

LeapMode = Literal["gregorian", "interval", "none"]


def gregorian_leap(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


class TimeConverter:
    """
    Converts between world time and TimeComponents for one schema.
    Passing an EpochSync switches on the Gregorian leap rule, the sync
    offset and the synced first weekday.
    """
    def __init__(self, schema: CalendarSchema, sync: Optional["EpochSync"] = None):
        self.schema = schema
        self.sync = sync

        if self.sync is not None or schema.gregorian_leap:
            self.leap_mode: LeapMode = "gregorian"
        elif schema.leap_interval > 0:
            self.leap_mode = "interval"
        else:
            self.leap_mode = "none"

        self._cycle = self._leap_cycle()

    # ---------------------------------------------------------
    # Leap rules
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        if self.leap_mode == "gregorian":
            return gregorian_leap(year)
        if self.leap_mode == "interval":
            return year % self.schema.leap_interval == 0
        return False

    def _leap_cycle(self) -> Tuple[int, int, int]:
        """(years, days, intercalary days) of one full leap cycle."""
        s = self.schema
        std, leap = s.days_in_standard_year, s.days_in_leap_year
        icl_std, icl_leap = s.intercalary_days_in_standard_year, s.intercalary_days_in_leap_year
        if self.leap_mode == "gregorian":
            return 400, 303 * std + 97 * leap, 303 * icl_std + 97 * icl_leap
        if self.leap_mode == "interval":
            n = s.leap_interval
            return n, (n - 1) * std + leap, (n - 1) * icl_std + icl_leap
        return 1, std, icl_std

    # ---------------------------------------------------------
    # Day arithmetic
    # ---------------------------------------------------------

    def days_in_year(self, year: int) -> int:
        return self.schema.days_in_year(self.is_leap_year(year))

    def days_in_month(self, year: int, month: int) -> int:
        if not 0 <= month < len(self.schema.months):
            return 0
        return self.schema.months[month].length(self.is_leap_year(year))

    def _year_start(self, year: int) -> Tuple[int, int]:
        """Days and intercalary days from the epoch to the first day of `year` (signed)."""
        cy, cd, ci = self._cycle
        cycles = (year - self.schema.year_zero) // cy
        y = self.schema.year_zero + cycles * cy
        days, icl = cycles * cd, cycles * ci
        while y < year:
            leap = self.is_leap_year(y)
            days += self.schema.days_in_year(leap)
            icl += self.schema.intercalary_days_in_year(leap)
            y += 1
        return days, icl

    def day_counts(self, d: CalendarDate) -> Tuple[int, int]:
        """
        Returns (day ordinal, intercalary days skipped) for the start of `d`,
        both counted from the epoch. Month indices past the last month are
        clamped to the end of the year.
        """
        days, icl = self._year_start(d.year)
        leap = self.is_leap_year(d.year)
        for m in self.schema.months[: max(0, d.month)]:
            n = m.length(leap)
            days += n
            if m.intercalary:
                icl += n
        return days + d.day, icl

    def day_number(self, d: CalendarDate) -> int:
        if self.schema.is_degenerate:
            return 0
        return self.day_counts(d)[0]

    # ---------------------------------------------------------
    # Forward: components -> world time
    # ---------------------------------------------------------

    def components_to_time(self, c: TimeComponents) -> int:
        s = self.schema
        if s.is_degenerate:
            logger.debug("components_to_time on degenerate schema %r", s.id)
            return 0

        days = self.day_counts(CalendarDate(c.year, c.month, c.day))[0]
        total = (
            days * s.seconds_per_day
            + c.hour * s.seconds_per_hour
            + c.minute * s.seconds_per_minute
            + c.second
        )
        if self.sync is not None:
            total -= self.sync.offset
        return total

    def date_to_time(self, d: CalendarDate) -> int:
        """World time at the start of a calendar day."""
        return self.components_to_time(TimeComponents.at_midnight(d))

    # ---------------------------------------------------------
    # Inverse: world time -> components
    # ---------------------------------------------------------

    def time_to_components(self, seconds: int) -> TimeComponents:
        s = self.schema
        if s.is_degenerate:
            logger.debug("time_to_components on degenerate schema %r", s.id)
            return TimeComponents(year=s.year_zero, month=0, day=0, day_of_week=-1)

        if not isinstance(seconds, int):
            seconds = math.floor(seconds)
        t = seconds + (self.sync.offset if self.sync is not None else 0)
        spd = s.seconds_per_day

        # 1. Whole leap cycles
        cy, cd, ci = self._cycle
        cycles, rem = divmod(t, cd * spd)
        year = s.year_zero + cycles * cy
        icl = cycles * ci

        # 2. Remaining whole years (fewer than one cycle)
        while True:
            leap = self.is_leap_year(year)
            year_secs = s.days_in_year(leap) * spd
            if rem < year_secs:
                break
            rem -= year_secs
            icl += s.intercalary_days_in_year(leap)
            year += 1

        # 3. Months
        month_index = len(s.months) - 1
        for i, m in enumerate(s.months):
            month_secs = m.length(leap) * spd
            if rem >= month_secs:
                rem -= month_secs
                if m.intercalary:
                    icl += m.length(leap)
            else:
                month_index = i
                break

        day, rem = divmod(rem, spd)
        hour, rem = divmod(rem, s.seconds_per_hour)
        minute, second = divmod(rem, s.seconds_per_minute)

        month = s.months[month_index]
        return TimeComponents(
            year=year,
            month=month_index,
            day=day,
            day_of_week=self._weekday(month, day, t // spd, icl),
            hour=hour,
            minute=minute,
            second=second,
            leap_year=leap,
            is_intercalary=month.intercalary,
        )

    def _weekday(self, month: MonthDef, day: int, total_days: int, icl: int) -> int:
        """
        Precedence: fixed month start, intercalary (no weekday), reset per
        month, continuous count excluding intercalary days.
        """
        n = self.schema.weekday_count
        if month.starting_weekday is not None:
            return (day + month.starting_weekday) % n
        if month.intercalary:
            return -1
        if self.schema.reset_weekdays:
            return day % n
        return (total_days - icl + self.first_weekday) % n

    @property
    def first_weekday(self) -> int:
        if self.sync is not None:
            return self.sync.first_weekday
        return self.schema.first_weekday

    def weekday_of(self, d: CalendarDate) -> int:
        return self.time_to_components(self.date_to_time(d)).day_of_week
