"""Habit tracking core: scheduling, reduce targets and completion counts."""
