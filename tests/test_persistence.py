# tests/test_persistence.py

import json

import pytest

from hijricalc import IslamicCalendar
from hijricalc.core import persistence
from hijricalc.core.errors import StateError
from hijricalc.core.persistence import CalendarState, migrate_state
from hijricalc.core.types import CalculationType


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"version": 1, "time_millis": 0, "civil": True}, CalculationType.CIVIL),
        ({"version": 1, "time_millis": 0, "civil": False}, CalculationType.ASTRONOMICAL),
        ({"version": 1, "time_millis": 0}, CalculationType.CIVIL),
        ({"time_millis": 0, "civil": False}, CalculationType.ASTRONOMICAL),
    ],
)
def test_legacy_states_migrate(data, expected):
    assert migrate_state(data).calc_type is expected


def test_legacy_state_ignores_calc_type():
    state = migrate_state({"version": 1, "time_millis": 5, "civil": True, "calc_type": "islamic-tbla"})
    assert state.calc_type is CalculationType.CIVIL


def test_current_state_round_trip():
    state = CalendarState(time_millis=1_700_000_000_000, calc_type=CalculationType.UMALQURA, tz_offset_hours=3.0, lenient=False)
    d = state.to_dict()
    assert d["version"] == persistence.STATE_VERSION
    assert d["calc_type"] == "islamic-umalqura"
    assert d["civil"] is False
    assert migrate_state(d) == state


def test_civil_flag_written_for_old_readers():
    d = CalendarState(time_millis=0, calc_type=CalculationType.CIVIL).to_dict()
    assert d["civil"] is True


@pytest.mark.parametrize(
    "data",
    [
        {"version": 3, "time_millis": 0, "calc_type": "islamic"},
        {"version": 2, "calc_type": "islamic"},
        {"version": 2, "time_millis": "soon", "calc_type": "islamic"},
        {"version": 2, "time_millis": 0, "calc_type": "islamic-rgsa"},
        ["not", "a", "mapping"],
    ],
)
def test_bad_states(data):
    with pytest.raises(StateError):
        migrate_state(data)


def test_json_round_trip():
    state = CalendarState(time_millis=-42521587200000, calc_type=CalculationType.TBLA)
    text = persistence.dumps(state)
    assert json.loads(text)["calc_type"] == "islamic-tbla"
    assert persistence.loads(text) == state


def test_loads_rejects_garbage():
    with pytest.raises(StateError):
        persistence.loads("{not json")


def test_calendar_state(registry):
    cal = IslamicCalendar("islamic-umalqura", time_millis=1_000_000_000_000, tz_offset_hours=3, registry=registry)
    restored = IslamicCalendar.from_state(cal.to_state(), registry=registry)
    assert restored.calc_type is CalculationType.UMALQURA
    assert restored.time_millis == cal.time_millis
    assert restored.tz_offset_hours == 3.0
    assert restored.hijri_date == cal.hijri_date


def test_calendar_from_legacy_mapping(registry):
    cal = IslamicCalendar.from_state({"time_millis": 0, "civil": True}, registry=registry)
    assert cal.is_civil()
    assert cal.time_millis == 0


@pytest.mark.parametrize("flag", ["false", "true", 0, 1, None])
def test_legacy_civil_flag_must_be_boolean(flag):
    with pytest.raises(StateError):
        migrate_state({"version": 1, "time_millis": 0, "civil": flag})
