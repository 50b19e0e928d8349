# habit_matrix/reduction.py
"""Daily targets for reduce habits.

A reduce habit starts at ``start_value`` per day on its creation date and
descends linearly to ``target_value`` over ``duration_weeks * 7`` days, then
holds there. Targets are whole numbers, rounded half away from zero
(2.5 -> 3), never dipping below the goal.
"""

import math
from typing import List, Tuple

from habit_matrix.dates import days_between
from habit_matrix.models import Habit, ReduceConfig


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def target_on_day(config: ReduceConfig, diff: int):
    """Target ``diff`` days after the start of the reduction."""
    if diff < 0:
        return config.start_value
    total_days = config.total_days
    if total_days <= 0 or diff >= total_days:
        return config.target_value
    per_day_decrease = (config.start_value - config.target_value) / total_days
    raw = round_half_away(config.start_value - per_day_decrease * diff)
    return max(config.target_value, raw)


def reduce_target_for(habit: Habit, day: str):
    if habit.reduce_config is None:
        raise ValueError(f"habit {habit.id} has no reduce config")
    created = habit.created_date
    if day < created:
        return habit.reduce_config.start_value
    return target_on_day(habit.reduce_config, days_between(created, day))


def is_reduce_completed(habit: Habit, day: str) -> bool:
    actual = (habit.reduce_completions or {}).get(day, 0)
    return actual <= reduce_target_for(habit, day)


# -------- Schedule preview --------
def schedule_preview(config: ReduceConfig) -> List[Tuple[int, int]]:
    """(day number, target) for the first, middle and last day of the plan.
    Day numbers are 1-based."""
    total_days = config.total_days
    return [(diff + 1, target_on_day(config, diff)) for diff in (0, total_days // 2, total_days)]


def format_schedule_preview(config: ReduceConfig) -> str:
    return " → ".join(
        f"Day {day}: {target} {config.unit}".rstrip() for day, target in schedule_preview(config)
    )
