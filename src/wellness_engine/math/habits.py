"""Habit scheduling, completion lookup, streaks and monthly density.

All day comparisons go through a DayCalendar, never raw timestamps.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Iterable

from wellness_engine.day_calendar import DayCalendar
from wellness_engine.models.enums import HabitFrequency, Weekday
from wellness_engine.models.habit import Habit, HabitCompletion


def is_due(habit: Habit, day: datetime | date) -> bool:
    """Daily habits are always due; others only on their weekdays."""
    if habit.recurrence.frequency == HabitFrequency.DAILY:
        return True
    return Weekday(day.isoweekday()) in habit.recurrence.weekdays


def completion_on(
    habit: Habit, day: datetime, calendar: DayCalendar
) -> HabitCompletion | None:
    """The completion falling inside *day*'s local bounds, if any."""
    start = calendar.start_of_day(day)
    end = calendar.end_of_day(day)
    for completion in habit.completions:
        if start <= completion.completed_at <= end:
            return completion
    return None


def is_completed_on(habit: Habit, day: datetime, calendar: DayCalendar) -> bool:
    return completion_on(habit, day, calendar) is not None


def _completion_dates(habit: Habit, calendar: DayCalendar) -> set[date]:
    return {calendar.local_date(c.completed_at) for c in habit.completions}


def current_streak(habit: Habit, calendar: DayCalendar) -> int:
    """Consecutive due days completed, walking backward from today.

    A due-but-open today is skipped rather than breaking the streak.
    Days on which the habit is not due neither extend nor break it. The
    walk stops at the first missed due day, or once it passes the earliest
    completion (nothing before it can count).
    """
    completed_days = _completion_dates(habit, calendar)
    if not completed_days:
        return 0
    earliest = min(completed_days)

    day = calendar.start_of_day(calendar.now())
    if is_due(habit, day) and calendar.local_date(day) not in completed_days:
        day = calendar.add_days(day, -1)

    streak = 0
    while calendar.local_date(day) >= earliest:
        if is_due(habit, day):
            if calendar.local_date(day) in completed_days:
                streak += 1
            else:
                break
        try:
            day = calendar.add_days(day, -1)
        except OverflowError:
            break
    return streak


def toggle_completion(habit: Habit, calendar: DayCalendar) -> Habit:
    """Remove today's completion if present, otherwise add one stamped now.

    Callers must recompute streaks and calendar data afterwards.
    """
    now = calendar.now()
    existing = completion_on(habit, now, calendar)
    if existing is not None:
        completions = tuple(c for c in habit.completions if c.id != existing.id)
    else:
        completions = habit.completions + (HabitCompletion(completed_at=now, habit_id=habit.id),)
    return dataclasses.replace(habit, completions=completions)


def monthly_density(
    habits: Iterable[Habit], month: datetime, calendar: DayCalendar
) -> dict[date, float]:
    """Completed/due ratio per day of *month* across active habits.

    Days with no due habit are left out instead of reported as zero.
    """
    active = [h for h in habits if not h.is_archived]
    completed_by_habit = {h.id: _completion_dates(h, calendar) for h in active}

    density: dict[date, float] = {}
    for day in calendar.days_in_month(month):
        due = [h for h in active if is_due(h, day)]
        if not due:
            continue
        local_day = calendar.local_date(day)
        completed = sum(1 for h in due if local_day in completed_by_habit[h.id])
        density[local_day] = completed / len(due)
    return density


def scheduled_on(habits: Iterable[Habit], day: datetime) -> list[Habit]:
    return [h for h in habits if is_due(h, day)]


def completion_ratio(completed: int, scheduled: int) -> float:
    """Fraction of scheduled habits done; 0.0 when nothing is scheduled."""
    if scheduled <= 0:
        return 0.0
    return completed / scheduled
