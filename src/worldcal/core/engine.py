from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol

from .errors import UnknownCalendarError
from .types import CalendarDate, TimeComponents

class CalendarEngineProtocol(Protocol):
    def info(self) -> Dict[str, Any]: ...
    def is_leap_year(self, year: int) -> bool: ...
    def components_to_time(self, components: TimeComponents) -> int: ...
    def time_to_components(self, seconds: int) -> TimeComponents: ...
    def matches(self, note: Any, date: CalendarDate) -> bool: ...

@dataclass
class CalendarRegistry:
    _engines: Dict[str, CalendarEngineProtocol]

    def get(self, name: str) -> CalendarEngineProtocol:
        if name not in self._engines:
            raise UnknownCalendarError(f"Unknown calendar '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngineProtocol, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        self._engines[name] = engine
