"""
Pytest fixtures for habit store tests
"""
import json

import pytest

from habit_matrix.models import Habit, HabitType, ReduceConfig
from habit_matrix.storage import STORAGE_KEY, HabitPersistence, MemoryKeyValueStore
from habit_matrix.store import HabitStore


@pytest.fixture
def kv():
    """Empty in-memory key-value medium"""
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv):
    """Store with no habits"""
    return HabitStore(HabitPersistence(kv))


@pytest.fixture
def make_store(kv):
    """Store preloaded with raw persisted records"""
    def _make(records):
        kv.set(STORAGE_KEY, json.dumps(records))
        return HabitStore(HabitPersistence(kv))
    return _make


@pytest.fixture
def reduce_record():
    """Screen-time habit: 60 mins/day down to 0 over 4 weeks from 2026-01-01"""
    return {
        "id": "screen",
        "name": "Screen time",
        "habitType": "reduce",
        "frequency": {"type": "daily"},
        "createdAt": "2026-01-01T09:30:00",
        "completions": {},
        "reduceConfig": {"startValue": 60, "targetValue": 0, "durationWeeks": 4, "unit": "mins"},
        "reduceCompletions": {},
    }


@pytest.fixture
def reduce_habit():
    return Habit(
        id="screen",
        name="Screen time",
        habit_type=HabitType.REDUCE,
        created_at="2026-01-01T09:30:00",
        reduce_config=ReduceConfig(60, 0, 4, "mins"),
        reduce_completions={},
    )
