"""
worldcal.engines.recurrence
---------------------------
Decides whether a note's recurrence rule fires on a calendar date.

Rules form a closed set of frozen dataclasses; the evaluator dispatches on
the rule type. Every rule fails closed: malformed parameters, out-of-range
moon or phase indices and impossible dates evaluate to False.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from ..core.types import CalendarDate, MoonConfig
from ._prng import cyrb53, mulberry32, shuffle_in_place
from .moon import MoonPhaseCalculator
from .time_converter import TimeConverter

logger = logging.getLogger(__name__)

RepeatUnit = Literal["days", "months", "years"]


# ============================================================
# Rules
# ============================================================

@dataclass(frozen=True)
class NoRepeat:
    pass


@dataclass(frozen=True)
class PeriodicRule:
    unit: RepeatUnit
    interval: int = 1
    count: int = 0  # 0 = unbounded


@dataclass(frozen=True)
class LunarRule:
    moon_index: int
    phase_index: int
    start_month: int
    end_month: int


@dataclass(frozen=True)
class WeekdayRule:
    ordinal: int        # 0-based occurrence in the month, -1 = last
    weekday: int
    month: int = -1     # -1 = any month


@dataclass(frozen=True)
class WeekIndexRule:
    week_num: int       # 1-based week of the month, -1 = last
    day_num: int


@dataclass(frozen=True)
class RandomRule:
    count: int
    start_month: int
    end_month: int


@dataclass(frozen=True)
class InvalidRule:
    reason: str


RecurrenceRule = Union[NoRepeat, PeriodicRule, LunarRule, WeekdayRule, WeekIndexRule, RandomRule, InvalidRule]


@dataclass(frozen=True)
class Recurrence:
    note_id: str
    start_date: Optional[CalendarDate]
    rule: RecurrenceRule = field(default_factory=NoRepeat)


def _is_int(*values: Any) -> bool:
    return all(isinstance(v, int) and not isinstance(v, bool) for v in values)


def in_month_window(month: int, start: int, end: int) -> bool:
    """Inclusive month window; start > end wraps across the year boundary."""
    if start <= end:
        return start <= month <= end
    return month >= start or month <= end


# ============================================================
# Evaluator
# ============================================================

class RecurrenceEvaluator:
    def __init__(self, converter: TimeConverter, moons: Sequence[MoonConfig] = ()):
        self.conv = converter
        self.moons = tuple(moons)
        self.moon_calc = MoonPhaseCalculator(converter)

    def matches(self, rec: Recurrence, d: CalendarDate) -> bool:
        rule = rec.rule
        if not self._valid_date(d):
            return False

        if isinstance(rule, PeriodicRule):
            return self._periodic(rule, rec.start_date, d)
        if isinstance(rule, LunarRule):
            return self._lunar(rule, d)
        if isinstance(rule, WeekdayRule):
            return self._weekday(rule, d)
        if isinstance(rule, WeekIndexRule):
            return self._week_index(rule, d)
        if isinstance(rule, RandomRule):
            return self._random(rule, rec.note_id, d)
        if isinstance(rule, InvalidRule):
            logger.debug("note %r: %s", rec.note_id, rule.reason)
        return False

    def notes_on(self, recs: Iterable[Recurrence], d: CalendarDate) -> List[Recurrence]:
        return [r for r in recs if self.matches(r, d)]

    def _valid_date(self, d: CalendarDate) -> bool:
        if not _is_int(d.year, d.month, d.day):
            return False
        return 0 <= d.day < self.conv.days_in_month(d.year, d.month)

    # ---------------------------------------------------------
    # Standard rules
    # ---------------------------------------------------------

    def _periodic(self, rule: PeriodicRule, start: Optional[CalendarDate], d: CalendarDate) -> bool:
        if start is None or not _is_int(start.year, start.month, start.day, rule.interval, rule.count):
            return False
        if d < start:
            return False
        interval = rule.interval if rule.interval > 0 else 1

        if rule.unit == "years":
            diff = d.year - start.year
            if d.month != start.month or d.day != start.day:
                return False
        elif rule.unit == "months":
            per_year = self.conv.schema.months_per_year
            diff = (d.year * per_year + d.month) - (start.year * per_year + start.month)
            if d.day != start.day:
                return False
        elif rule.unit == "days":
            diff = self.conv.day_number(d) - self.conv.day_number(start)
        else:
            return False

        if diff < 0 or diff % interval != 0:
            return False
        occurrence = diff // interval
        return not (rule.count > 0 and occurrence >= rule.count)

    # ---------------------------------------------------------
    # Advanced rules
    # ---------------------------------------------------------

    def _lunar(self, rule: LunarRule, d: CalendarDate) -> bool:
        if not _is_int(rule.moon_index, rule.phase_index, rule.start_month, rule.end_month):
            return False
        if not in_month_window(d.month, rule.start_month, rule.end_month):
            return False
        if not 0 <= rule.moon_index < len(self.moons):
            return False
        moon = self.moons[rule.moon_index]
        if not 0 <= rule.phase_index < len(moon.phases):
            return False

        res = self.moon_calc.calculate_phase(self.conv.date_to_time(d), moon)
        return res is not None and res.phase_index == rule.phase_index and res.days_into_phase == 0

    def _nth_weekday(self, d: CalendarDate, weekday: int, nth: int, last: bool) -> bool:
        """Shared mechanics: weekday must match, then either the nth (1-based) or last occurrence."""
        n = self.conv.schema.weekday_count
        # Intercalary days report -1, which is never a valid rule weekday
        if not 0 <= weekday < n:
            return False
        if self.conv.weekday_of(d) != weekday:
            return False
        if last:
            return d.day + n >= self.conv.days_in_month(d.year, d.month)
        return math.ceil((d.day + 1) / n) == nth

    def _weekday(self, rule: WeekdayRule, d: CalendarDate) -> bool:
        if not _is_int(rule.ordinal, rule.weekday, rule.month):
            return False
        if rule.month != -1 and d.month != rule.month:
            return False
        return self._nth_weekday(d, rule.weekday, rule.ordinal + 1, rule.ordinal == -1)

    def _week_index(self, rule: WeekIndexRule, d: CalendarDate) -> bool:
        if not _is_int(rule.week_num, rule.day_num):
            return False
        return self._nth_weekday(d, rule.day_num, rule.week_num, rule.week_num == -1)

    def _random(self, rule: RandomRule, note_id: str, d: CalendarDate) -> bool:
        if not _is_int(rule.count, rule.start_month, rule.end_month):
            return False
        if not in_month_window(d.month, rule.start_month, rule.end_month):
            return False
        return (d.month, d.day) in self.selected_random_days(rule, note_id, d.year)

    def selected_random_days(self, rule: RandomRule, note_id: str, year: int) -> FrozenSet[Tuple[int, int]]:
        """
        The (month, day) pairs a random rule picks in `year`. Depends only on
        the note id, the year, the count and the month window.
        """
        if not _is_int(rule.count, rule.start_month, rule.end_month) or rule.count <= 0:
            return frozenset()

        pool: List[Tuple[int, int]] = []
        for m in range(self.conv.schema.months_per_year):
            if in_month_window(m, rule.start_month, rule.end_month):
                pool.extend((m, day) for day in range(self.conv.days_in_month(year, m)))

        rand = mulberry32(cyrb53(f"{note_id}-{year}"))
        shuffle_in_place(pool, rand)
        return frozenset(pool[: rule.count])


# ============================================================
# Decoding host note payloads
# ============================================================

_ADVANCED_PARAMS = {
    "lunar": (LunarRule, ("moonIndex", "phaseIndex", "lunarStartMonth", "lunarEndMonth")),
    "weekday": (WeekdayRule, ("ordinal", "weekdayIndex", "monthIndex_wk")),
    "week_index": (WeekIndexRule, ("weekNum", "dayNum")),
    "random": (RandomRule, ("count", "startMonth", "endMonth")),
}


def _as_int(value: Any) -> Optional[int]:
    """Integer coercion for form-encoded values ('3' and 3.0 both become 3)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_date(value: Any) -> Optional[CalendarDate]:
    if not isinstance(value, Mapping):
        return None
    parts = [_as_int(value.get(k)) for k in ("year", "month", "day")]
    if any(p is None for p in parts):
        return None
    return CalendarDate(*parts)


def decode_note(note: Mapping[str, Any]) -> Recurrence:
    """
    Reads the recurrence fields of a host note:
    `id`, `startDate`, `repeatUnit`, `repeatInterval`, `repeatCount`,
    `advancedRule`, `advParams`.
    """
    if not isinstance(note, Mapping):
        return Recurrence("", None, InvalidRule(f"note must be a mapping, got {type(note).__name__}"))
    note_id = str(note.get("id", ""))
    start = _as_date(note.get("startDate"))
    unit = str(note.get("repeatUnit") or "none").lower()

    if unit == "none":
        return Recurrence(note_id, start, NoRepeat())

    if unit == "advanced":
        kind = note.get("advancedRule")
        params = note.get("advParams")
        if kind not in _ADVANCED_PARAMS:
            return Recurrence(note_id, start, InvalidRule(f"unknown advanced rule {kind!r}"))
        if not isinstance(params, Mapping):
            return Recurrence(note_id, start, InvalidRule(f"{kind}: missing advParams"))
        cls, keys = _ADVANCED_PARAMS[kind]
        values = [_as_int(params.get(k)) for k in keys]
        missing = [k for k, v in zip(keys, values) if v is None]
        if missing:
            return Recurrence(note_id, start, InvalidRule(f"{kind}: bad parameters {missing}"))
        return Recurrence(note_id, start, cls(*values))

    if unit in ("days", "months", "years"):
        if start is None:
            return Recurrence(note_id, None, InvalidRule("missing startDate"))
        interval = _as_int(note.get("repeatInterval")) or 1
        count = _as_int(note.get("repeatCount")) or 0
        return Recurrence(note_id, start, PeriodicRule(unit, interval, count))

    return Recurrence(note_id, start, InvalidRule(f"unknown repeat unit {unit!r}"))
