# habit_matrix/models.py
"""Habit records and their persisted shape."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from habit_matrix.dates import date_only, is_valid_date_string, now_timestamp


class HabitType(str, Enum):
    BUILD = "build"
    REDUCE = "reduce"


class FrequencyType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def new_habit_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Frequency:
    type: FrequencyType = FrequencyType.DAILY
    weekdays: List[int] = field(default_factory=list)  # 0 = Sunday
    every_n_days: Optional[int] = None
    start_date: Optional[str] = None  # YYYY-MM-DD, custom only

    @classmethod
    def daily(cls) -> "Frequency":
        return cls(FrequencyType.DAILY)

    @classmethod
    def weekly(cls, weekdays) -> "Frequency":
        return cls(FrequencyType.WEEKLY, weekdays=sorted(set(weekdays)))

    @classmethod
    def custom(cls, every_n_days: int, start_date: Optional[str] = None) -> "Frequency":
        return cls(FrequencyType.CUSTOM, every_n_days=every_n_days, start_date=start_date)

    def to_dict(self) -> Dict[str, Any]:
        # unknown types loaded from disk stay plain strings
        out: Dict[str, Any] = {"type": getattr(self.type, "value", self.type)}
        if self.type == FrequencyType.WEEKLY:
            out["weekdays"] = list(self.weekdays)
        elif self.type == FrequencyType.CUSTOM:
            out["value"] = self.every_n_days
            if self.start_date:
                out["startDate"] = self.start_date
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> "Frequency":
        """Lenient parse; anything unreadable becomes a daily frequency.

        An unrecognised ``type`` string is kept as-is so the scheduler can
        treat it as never due.
        """
        if not isinstance(raw, dict):
            return cls.daily()
        kind = raw.get("type", FrequencyType.DAILY.value)
        try:
            kind = FrequencyType(kind)
        except ValueError:
            pass
        raw_weekdays = raw.get("weekdays")
        if not isinstance(raw_weekdays, list):
            raw_weekdays = []
        weekdays = [
            d for d in raw_weekdays
            if isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6
        ]
        every = raw.get("value", raw.get("everyNDays"))
        if not isinstance(every, int) or isinstance(every, bool):
            every = None
        start = raw.get("startDate")
        if not is_valid_date_string(start):
            start = None
        return cls(kind, weekdays=weekdays, every_n_days=every, start_date=start)


@dataclass
class ReduceConfig:
    start_value: float
    target_value: float
    duration_weeks: int
    unit: str = ""

    @property
    def total_days(self) -> int:
        return self.duration_weeks * 7

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startValue": self.start_value,
            "targetValue": self.target_value,
            "durationWeeks": self.duration_weeks,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["ReduceConfig"]:
        if not isinstance(raw, dict):
            return None
        try:
            return cls(
                start_value=coerce_number(raw["startValue"]),
                target_value=coerce_number(raw["targetValue"]),
                duration_weeks=max(0, int(raw["durationWeeks"])),
                unit=str(raw.get("unit", "")),
            )
        except (KeyError, TypeError, ValueError, OverflowError):
            return None


@dataclass
class Habit:
    id: str
    name: str
    habit_type: HabitType = HabitType.BUILD
    frequency: Frequency = field(default_factory=Frequency)
    created_at: str = field(default_factory=now_timestamp)
    completions: Dict[str, bool] = field(default_factory=dict)
    reduce_config: Optional[ReduceConfig] = None
    reduce_completions: Optional[Dict[str, float]] = None

    @property
    def is_reduce(self) -> bool:
        return self.habit_type == HabitType.REDUCE and self.reduce_config is not None

    @property
    def created_date(self) -> str:
        return date_only(self.created_at)

    # -------- Serialization --------
    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "habitType": self.habit_type.value,
            "frequency": self.frequency.to_dict(),
            "createdAt": self.created_at,
            "completions": dict(self.completions),
        }
        if self.reduce_config is not None:
            out["reduceConfig"] = self.reduce_config.to_dict()
        if self.reduce_completions is not None:
            out["reduceCompletions"] = dict(self.reduce_completions)
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> "Habit":
        """Build a habit from a persisted record, filling in fields older
        records lack. Raises ValueError when the record has no usable id."""
        if not isinstance(raw, dict):
            raise ValueError(f"habit record must be an object, got {type(raw).__name__}")
        habit_id = raw.get("id")
        if habit_id is None or habit_id == "":
            raise ValueError("habit record has no id")

        try:
            habit_type = HabitType(raw.get("habitType", HabitType.BUILD.value))
        except ValueError:
            habit_type = HabitType.BUILD
        reduce_config = ReduceConfig.from_dict(raw.get("reduceConfig"))
        if habit_type == HabitType.REDUCE and reduce_config is None:
            habit_type = HabitType.BUILD

        created_at = raw.get("createdAt")
        if not isinstance(created_at, str) or not is_valid_date_string(created_at[:10]):
            created_at = now_timestamp()

        completions = {
            k: bool(v) for k, v in _mapping(raw.get("completions")).items()
            if is_valid_date_string(k)
        }

        reduce_completions = None
        if habit_type == HabitType.REDUCE:
            reduce_completions = {}
            for k, v in _mapping(raw.get("reduceCompletions")).items():
                if not is_valid_date_string(k):
                    continue
                try:
                    reduce_completions[k] = max(0, coerce_number(v))
                except (TypeError, ValueError):
                    continue

        return cls(
            id=str(habit_id),
            name=str(raw.get("name", "")).strip(),
            habit_type=habit_type,
            frequency=Frequency.from_dict(raw.get("frequency")),
            created_at=created_at,
            completions=completions,
            reduce_config=reduce_config if habit_type == HabitType.REDUCE else None,
            reduce_completions=reduce_completions,
        )


def _mapping(value) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def coerce_number(value):
    """int stays int, everything else goes through float()."""
    if isinstance(value, bool):
        raise TypeError("bool is not a count")
    if isinstance(value, int):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number
