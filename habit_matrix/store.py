# habit_matrix/store.py
"""The habit collection and the commands that change it.

``HabitStore`` is the only writer of habit state. It loads once from its
persistence adapter when constructed and saves after every successful
command. Reads hand out copies, so callers cannot change a stored habit
without going through a command.
"""

from __future__ import annotations

import copy
from typing import Dict, List, NamedTuple, Optional

from loguru import logger

from habit_matrix.dates import is_valid_date_string, parse_date, today, week_dates
from habit_matrix.models import (
    Frequency,
    Habit,
    HabitType,
    ReduceConfig,
    coerce_number,
    new_habit_id,
)
from habit_matrix.reduction import is_reduce_completed
from habit_matrix.scheduling import habits_scheduled_for
from habit_matrix.storage import HabitPersistence, decode_habits, encode_habits


class CompletionCount(NamedTuple):
    completed: int
    total: int

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100.0, 2)


class HabitStore:
    def __init__(self, persistence: HabitPersistence):
        self.persistence = persistence
        self.last_save_ok = True
        self._habits: List[Habit] = self._load()

    def _load(self) -> List[Habit]:
        raw = self.persistence.load()
        if raw is None:
            return []
        try:
            habits = decode_habits(raw)
        except ValueError as exc:
            logger.error(f"[HABIT STORE] Stored habits unreadable, starting empty: {exc}")
            return []
        logger.info(f"[HABIT STORE] Loaded {len(habits)} habits")
        return habits

    def _commit(self):
        self.last_save_ok = self.persistence.save(encode_habits(self._habits))
        if not self.last_save_ok:
            logger.error("[HABIT STORE] Save failed; changes are kept in memory only")

    def _find(self, habit_id: str) -> Optional[Habit]:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        logger.debug(f"[HABIT STORE] No habit with id {habit_id}")
        return None

    def _find_for_date(self, habit_id: str, day: str) -> Optional[Habit]:
        if not is_valid_date_string(day):
            logger.warning(f"[HABIT STORE] Ignoring invalid date {day!r}")
            return None
        return self._find(habit_id)

    # -------- Habits --------
    @property
    def habits(self) -> List[Habit]:
        return copy.deepcopy(self._habits)

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        habit = self._find(habit_id)
        return copy.deepcopy(habit) if habit else None

    def add_habit(
        self,
        name: str,
        frequency: Optional[Frequency] = None,
        habit_type: HabitType = HabitType.BUILD,
        reduce_config: Optional[ReduceConfig] = None,
    ) -> Optional[Habit]:
        name = (name or "").strip()
        habit_type = _habit_type(habit_type)
        if habit_type is None:
            return None
        if not name:
            logger.warning("[HABIT STORE] Not adding a habit without a name")
            return None
        if habit_type == HabitType.REDUCE and reduce_config is None:
            logger.warning(f"[HABIT STORE] Reduce habit '{name}' needs a reduce config")
            return None

        habit = Habit(
            id=new_habit_id(),
            name=name,
            habit_type=habit_type,
            frequency=copy.deepcopy(frequency) if frequency else Frequency.daily(),
        )
        if habit_type == HabitType.REDUCE:
            habit.reduce_config = copy.deepcopy(reduce_config)
            habit.reduce_completions = {}
        self._habits.append(habit)
        self._commit()
        logger.info(f"[HABIT STORE] Added {habit_type.value} habit '{name}' ({habit.id})")
        return copy.deepcopy(habit)

    def update_habit(
        self,
        habit_id: str,
        name: str,
        frequency: Frequency,
        habit_type: HabitType,
        reduce_config: Optional[ReduceConfig] = None,
    ) -> bool:
        """Replace name, frequency and type.

        Moving to (or staying) reduce keeps the recorded counts; moving to
        build drops the reduce config and every recorded count.
        """
        habit = self._find(habit_id)
        name = (name or "").strip()
        habit_type = _habit_type(habit_type)
        if habit is None or habit_type is None:
            return False
        if not name:
            logger.warning(f"[HABIT STORE] Not renaming habit {habit_id} to an empty name")
            return False

        if habit_type == HabitType.REDUCE:
            config = reduce_config if reduce_config is not None else habit.reduce_config
            if config is None:
                logger.warning(f"[HABIT STORE] Reduce habit {habit_id} needs a reduce config")
                return False
            habit.reduce_config = copy.deepcopy(config)
            if habit.reduce_completions is None:
                habit.reduce_completions = {}
        else:
            if habit.reduce_completions:
                logger.info(
                    f"[HABIT STORE] Habit {habit_id} switched to build; "
                    f"dropping {len(habit.reduce_completions)} recorded counts"
                )
            habit.reduce_config = None
            habit.reduce_completions = None

        habit.name = name
        habit.frequency = copy.deepcopy(frequency) if frequency else Frequency.daily()
        habit.habit_type = habit_type
        self._commit()
        return True

    def delete_habit(self, habit_id: str) -> bool:
        remaining = [h for h in self._habits if h.id != habit_id]
        if len(remaining) == len(self._habits):
            return False
        self._habits = remaining
        self._commit()
        logger.info(f"[HABIT STORE] Deleted habit {habit_id}")
        return True

    def rename_habit(self, habit_id: str, new_name: str) -> bool:
        new_name = (new_name or "").strip()
        if not new_name:
            return False
        habit = self._find(habit_id)
        if habit is None:
            return False
        habit.name = new_name
        self._commit()
        return True

    # -------- Completions --------
    def toggle_completion_for_date(self, habit_id: str, day: str) -> bool:
        habit = self._find_for_date(habit_id, day)
        if habit is None:
            return False
        habit.completions[day] = not habit.completions.get(day, False)
        self._commit()
        return True

    def toggle_completion(self, habit_id: str) -> bool:
        return self.toggle_completion_for_date(habit_id, today())

    def set_reduce_completion(self, habit_id: str, day: str, value) -> bool:
        habit = self._reduce_habit(habit_id, day)
        if habit is None:
            return False
        try:
            value = coerce_number(value)
        except (TypeError, ValueError):
            logger.warning(f"[HABIT STORE] Ignoring non-numeric count {value!r}")
            return False
        self._write_count(habit, day, value)
        return True

    def adjust_reduce_completion(self, habit_id: str, day: str, delta) -> bool:
        habit = self._reduce_habit(habit_id, day)
        if habit is None:
            return False
        try:
            delta = coerce_number(delta)
        except (TypeError, ValueError):
            logger.warning(f"[HABIT STORE] Ignoring non-numeric adjustment {delta!r}")
            return False
        self._write_count(habit, day, habit.reduce_completions.get(day, 0) + delta)
        return True

    def _reduce_habit(self, habit_id: str, day: str) -> Optional[Habit]:
        habit = self._find_for_date(habit_id, day)
        if habit is None:
            return None
        if not habit.is_reduce:
            logger.warning(f"[HABIT STORE] Habit {habit_id} is not a reduce habit")
            return None
        if habit.reduce_completions is None:
            habit.reduce_completions = {}
        return habit

    def _write_count(self, habit: Habit, day: str, value):
        # no upper bound; over-counting is recorded as-is
        habit.reduce_completions[day] = max(0, value)
        habit.completions[day] = is_reduce_completed(habit, day)
        self._commit()

    # -------- Queries --------
    @staticmethod
    def is_completed_on_date(habit: Habit, day: str) -> bool:
        """Stored flag for the day. A reduce day with no recorded count reads
        as not completed until a count or toggle is written."""
        return habit.completions.get(day, False)

    def is_completed_today(self, habit: Habit) -> bool:
        return self.is_completed_on_date(habit, today())

    def habits_for_date(self, day: str) -> List[Habit]:
        return copy.deepcopy(habits_scheduled_for(self._habits, day))

    def todays_habits(self) -> List[Habit]:
        return self.habits_for_date(today())

    def completion_count_for_date(self, day: str) -> CompletionCount:
        completed = sum(1 for h in self._habits if h.completions.get(day))
        return CompletionCount(completed, len(self._habits))

    def completion_count_for_week(self, day: str) -> CompletionCount:
        week = week_dates(day)
        completed = sum(
            1 for h in self._habits if any(h.completions.get(d) for d in week)
        )
        return CompletionCount(completed, len(self._habits))

    def completion_count_for_month(self, year: int, month_index: int) -> CompletionCount:
        """Habits with at least one completion in the month (0-based index)."""
        completed = sum(
            1 for h in self._habits
            if any(_in_month(d, year, month_index) for d, done in h.completions.items() if done)
        )
        return CompletionCount(completed, len(self._habits))

    def completion_dates_by_habit(self) -> Dict[str, List[str]]:
        return {
            h.id: sorted(d for d, done in h.completions.items() if done)
            for h in self._habits
        }


def _habit_type(value) -> Optional[HabitType]:
    try:
        return HabitType(value)
    except ValueError:
        logger.warning(f"[HABIT STORE] Unknown habit type {value!r}")
        return None


def _in_month(day: str, year: int, month_index: int) -> bool:
    try:
        parsed = parse_date(day)
    except (TypeError, ValueError):
        return False
    return parsed.year == year and parsed.month == month_index + 1
