"""
hijricalc.core.persistence
--------------------------
Versioned calendar state.

Version 1 (legacy) stored only a boolean `civil` flag; version 2 stores the
calculation type explicitly. `migrate_state` upgrades anything it can read
to a `CalendarState`.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import StateError, UnknownCalculationTypeError
from .types import CalculationType

log = logging.getLogger(__name__)

STATE_VERSION = 2


@dataclass(frozen=True)
class CalendarState:
    time_millis: int
    calc_type: CalculationType
    tz_offset_hours: float = 0.0
    lenient: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": STATE_VERSION,
            "time_millis": int(self.time_millis),
            "calc_type": self.calc_type.value,
            # kept for readers of the legacy format
            "civil": self.calc_type is CalculationType.CIVIL,
            "tz_offset_hours": float(self.tz_offset_hours),
            "lenient": bool(self.lenient),
        }


def legacy_calc_type(civil: bool) -> CalculationType:
    """Legacy states only distinguished civil from astronomical reckoning."""
    return CalculationType.CIVIL if civil else CalculationType.ASTRONOMICAL


def migrate_state(data: Mapping[str, Any]) -> CalendarState:
    if not isinstance(data, Mapping):
        raise StateError(f"Calendar state must be a mapping, got {type(data).__name__}")

    version = data.get("version", 1)
    if version not in (1, STATE_VERSION):
        raise StateError(f"Unsupported calendar state version {version!r}")

    try:
        time_millis = int(data["time_millis"])
    except (KeyError, TypeError, ValueError) as e:
        raise StateError("Calendar state has no usable 'time_millis'") from e

    if version == 1 or "calc_type" not in data:
        civil = data.get("civil", True)
        if not isinstance(civil, bool):
            raise StateError(f"Legacy calendar state flag 'civil' must be a boolean, got {civil!r}")
        calc_type = legacy_calc_type(civil)
        log.debug("migrated legacy calendar state (civil=%r) -> %s", civil, calc_type.value)
    else:
        try:
            calc_type = CalculationType.parse(data["calc_type"])
        except UnknownCalculationTypeError as e:
            raise StateError(f"Calendar state names an unknown type {data['calc_type']!r}") from e

    return CalendarState(
        time_millis=time_millis,
        calc_type=calc_type,
        tz_offset_hours=float(data.get("tz_offset_hours", 0.0)),
        lenient=bool(data.get("lenient", True)),
    )


def dumps(state: CalendarState) -> str:
    return json.dumps(state.to_dict(), sort_keys=True)


def loads(text: str) -> CalendarState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StateError(f"Calendar state is not valid JSON: {e}") from e
    return migrate_state(data)
