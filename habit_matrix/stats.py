# habit_matrix/stats.py
"""Streaks and progress summaries computed from a habit's completions."""

from datetime import date, timedelta
from typing import List, Optional

from habit_matrix.dates import parse_date
from habit_matrix.models import Habit


def completed_dates(habit: Habit) -> List[date]:
    """Sorted dates marked complete; unparseable keys are skipped."""
    parsed = []
    for raw, done in habit.completions.items():
        if not done:
            continue
        try:
            parsed.append(parse_date(raw))
        except ValueError:
            continue
    return sorted(parsed)


def _count_backward_streak(dates_set, start_date):
    length = 0
    curr = start_date
    while curr in dates_set:
        length += 1
        curr -= timedelta(days=1)
    return length


def current_streak(habit: Habit, today: Optional[str] = None) -> int:
    """Consecutive completed days ending today; 0 when today is not done."""
    end = parse_date(today) if today else date.today()
    return _count_backward_streak(set(completed_dates(habit)), end)


def longest_streak(habit: Habit) -> int:
    dates_set = set(completed_dates(habit))
    longest = 0
    for current in dates_set:
        if current - timedelta(days=1) in dates_set:
            continue  # not the first day of a run
        length = 1
        while current + timedelta(days=length) in dates_set:
            length += 1
        longest = max(longest, length)
    return longest


def progress(current, target) -> dict:
    """Summarise current vs target, e.g. a CompletionCount's completed/total.

    A target of 0 counts as complete.
    """
    if target == 0:
        percent = 100.0 if current >= target else 0.0
    else:
        percent = (current / target) * 100.0
    completed = current >= target

    if completed:
        status = "completed"
    elif current <= 0:
        status = "not_started"
    else:
        status = "in_progress"

    return {
        "current": current,
        "target": target,
        "percent_complete": round(percent, 2),
        "completed": completed,
        "status": status,
    }
