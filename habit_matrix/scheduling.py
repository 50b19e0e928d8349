# habit_matrix/scheduling.py
from typing import Iterable, List

from habit_matrix.dates import days_between, weekday_index
from habit_matrix.models import FrequencyType, Habit


def is_scheduled(habit: Habit, day: str) -> bool:
    """Whether the habit is due on ``day``.

    Reduce habits are tracked every day from their creation date. Build
    habits follow their frequency rule; unknown rules are never due.
    """
    if habit.is_reduce:
        return day >= habit.created_date

    freq = habit.frequency
    if freq.type == FrequencyType.DAILY:
        return True
    if freq.type == FrequencyType.WEEKLY:
        return weekday_index(day) in (freq.weekdays or [])
    if freq.type == FrequencyType.CUSTOM:
        if not freq.every_n_days or freq.every_n_days < 1:
            return False
        start = freq.start_date or habit.created_date
        diff = days_between(start, day)
        return diff >= 0 and diff % freq.every_n_days == 0
    return False


def habits_scheduled_for(habits: Iterable[Habit], day: str) -> List[Habit]:
    return [h for h in habits if is_scheduled(h, day)]
