"""Unit tests for the wire-shape mapping functions."""

from __future__ import annotations

from datetime import date, time

import pytest

from habo_data.adapters.rest_api.mapping import (
    DEFAULT_TITLE,
    category_from_wire,
    coerce_bool,
    day_to_wire,
    encode_value,
    events_map_from_wire,
    habit_from_remote,
    habit_to_remote,
    habit_update_params,
    log_from_wire,
    log_to_wire,
    parse_remote_id,
    rule_from_wire,
    rule_to_wire,
)
from habo_data.models import Habit, HabitType, Log, Rule
from habo_data.repositories import SchemaMismatchError


# ---------------------------------------------------------------------------
# parse_remote_id
# ---------------------------------------------------------------------------


class TestParseRemoteId:
    @pytest.mark.parametrize(
        "raw, expected",
        [(3, 3), ("3", 3), ("abc", None), (None, None), (True, None), (3.5, None)],
    )
    def test_parse(self, raw, expected):
        assert parse_remote_id(raw) == expected


# ---------------------------------------------------------------------------
# Habits
# ---------------------------------------------------------------------------


class TestHabitFromRemote:
    def test_widens_with_defaults(self):
        habit = habit_from_remote({"habit_id": "12", "habit_name": "Run", "is_device": True})
        assert habit.id == 12
        assert habit.title == "Run"
        assert habit.archived is False
        assert habit.position == 0
        assert habit.habit_type is HabitType.BOOLEAN
        assert habit.notification_time == time(8, 0)
        assert habit.target_value == 100.0
        assert habit.partial_value == 10.0
        assert habit.cue == ""
        assert habit.categories == []
        assert habit.events == {}

    def test_is_device_false_means_archived(self):
        assert habit_from_remote({"habit_id": 1, "habit_name": "X", "is_device": False}).archived

    def test_missing_is_device_means_active(self):
        assert habit_from_remote({"habit_id": 1, "habit_name": "X"}).archived is False

    def test_missing_title_gets_default(self):
        assert habit_from_remote({"habit_id": 1}).title == DEFAULT_TITLE

    def test_unparseable_id_is_none(self):
        assert habit_from_remote({"habit_id": "x1", "habit_name": "Run"}).id is None

    def test_numeric_string_habit_id(self):
        habit = habit_from_remote({"habit_id": "3", "habit_name": "Run", "is_device": True})
        assert habit.id == 3


class TestHabitToRemote:
    def test_narrows_to_name_and_device(self):
        habit = Habit(title="Run", archived=True, cue="shoes", position=4)
        assert habit_to_remote(habit) == {"name": "Run", "device": "false"}

    def test_active_habit_is_device(self):
        assert habit_to_remote(Habit(title="Run"))["device"] == "true"

    def test_update_params_use_remote_title(self):
        params = habit_update_params("Old title", Habit(id=1, title="New", archived=True))
        assert params == {"name": "Old title", "field": "is_device", "value": "false"}

    def test_round_trip_preserves_subset(self):
        habit = Habit(id=5, title="Stretch", archived=True, unit="min")
        wire = habit_to_remote(habit)
        restored = habit_from_remote(
            {"habit_id": habit.id, "habit_name": wire["name"], "is_device": wire["device"] == "true"}
        )
        assert (restored.id, restored.title, restored.archived) == (5, "Stretch", True)
        assert restored.unit == ""


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEvents:
    def test_day_to_wire_is_midnight_iso(self):
        assert day_to_wire(date(2024, 1, 5)) == "2024-01-05T00:00:00"

    def test_map_sorted_and_truncated(self):
        result = events_map_from_wire(
            {"2024-01-03T00:00:00": ["b"], "2024-01-01T00:00:00": ["a"]}
        )
        assert list(result) == [date(2024, 1, 1), date(2024, 1, 3)]

    def test_map_rejects_non_list_payload(self):
        with pytest.raises(SchemaMismatchError):
            events_map_from_wire({"2024-01-01T00:00:00": "check"})

    def test_map_rejects_bad_date(self):
        with pytest.raises(SchemaMismatchError):
            events_map_from_wire({"yesterday": []})


# ---------------------------------------------------------------------------
# Categories, rules, logs
# ---------------------------------------------------------------------------


class TestOtherFamilies:
    def test_category_from_wire(self):
        category = category_from_wire({"id": "4", "name": "Health"})
        assert (category.id, category.name) == (4, "Health")

    def test_category_without_name_rejected(self):
        with pytest.raises(SchemaMismatchError):
            category_from_wire({"id": 4})

    def test_rule_round_trip(self):
        rule = Rule(habit="Run", day=1, hour=7, minute=30, active=False)
        wire = rule_to_wire(rule)
        assert wire == {"habit": "Run", "day": "1", "hour": "7", "minute": "30", "active": "false"}
        restored = rule_from_wire({"id": 9, **wire})
        assert restored.model_dump() == {**rule.model_dump(), "id": 9}

    def test_rule_out_of_range_rejected(self):
        with pytest.raises(SchemaMismatchError):
            rule_from_wire({"habit": "Run", "day": 9, "hour": 1, "minute": 0})

    def test_log_mapping(self):
        assert log_to_wire(Log(habit_name="Run", state="NaV", reported=False)) == {
            "name": "Run",
            "state": "NaV",
            "reported": "false",
        }
        log = log_from_wire({"id": 2, "habit_name": "Run", "state": "done", "reported": "true"})
        assert (log.id, log.reported) == (2, True)


class TestScalars:
    @pytest.mark.parametrize(
        "raw, expected", [(True, True), ("false", False), ("TRUE", True), (0, False), (None, True)]
    )
    def test_coerce_bool(self, raw, expected):
        assert coerce_bool(raw, default=True) is expected

    def test_encode_value(self):
        assert encode_value(False) == "false"
        assert encode_value(3) == "3"
