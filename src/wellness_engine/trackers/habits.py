"""Habit tracker: CRUD, daily toggles, cached dashboard views."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date, datetime

from wellness_engine.day_calendar import DayCalendar
from wellness_engine.math import habits as habit_math
from wellness_engine.models.enums import HabitColor
from wellness_engine.models.habit import Habit, RecurrenceRule
from wellness_engine.repository import Repository, commit_or_rollback

logger = logging.getLogger(__name__)


class HabitTracker:
    """Keeps today's schedule, streaks and calendar density in sync with storage.

    Cached views are recomputed by :meth:`refresh` after every write;
    nothing is patched incrementally.
    """

    def __init__(self, repository: Repository, calendar: DayCalendar) -> None:
        self._repo = repository
        self.calendar = calendar
        self.habits: list[Habit] = []
        self.selected_month: datetime = calendar.now()

        self.today_scheduled: list[Habit] = []
        self.today_completions: set[uuid.UUID] = set()
        self.streaks: dict[uuid.UUID, int] = {}
        self.calendar_data: dict[date, float] = {}

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        self.habits = self._repo.fetch(
            Habit,
            predicate=lambda h: not h.is_archived,
            sort_key=lambda h: h.created_at,
        )
        self._recompute()

    def _recompute(self) -> None:
        now = self.calendar.now()
        self.today_scheduled = habit_math.scheduled_on(self.habits, now)
        self.today_completions = {
            h.id for h in self.habits if habit_math.is_completed_on(h, now, self.calendar)
        }
        self.streaks = {h.id: habit_math.current_streak(h, self.calendar) for h in self.habits}
        self._load_calendar_data()

    def _load_calendar_data(self) -> None:
        self.calendar_data = habit_math.monthly_density(
            self.habits, self.selected_month, self.calendar
        )

    @property
    def today_total_count(self) -> int:
        return len(self.today_scheduled)

    @property
    def today_completed_count(self) -> int:
        return sum(1 for h in self.today_scheduled if h.id in self.today_completions)

    @property
    def today_progress(self) -> float:
        return habit_math.completion_ratio(self.today_completed_count, self.today_total_count)

    def total_completions(self, habit: Habit) -> int:
        return len(habit.completions)

    def previous_month(self) -> None:
        self.selected_month = self.calendar.add_months(self.selected_month, -1)
        self._load_calendar_data()

    def next_month(self) -> None:
        self.selected_month = self.calendar.add_months(self.selected_month, 1)
        self._load_calendar_data()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_habit(
        self,
        name: str,
        icon: str = "star.fill",
        color: HabitColor = HabitColor.BLUE,
        recurrence: RecurrenceRule | None = None,
    ) -> Habit:
        habit = Habit(
            name=name,
            icon=icon,
            color=color,
            recurrence=recurrence or RecurrenceRule.daily(),
            created_at=self.calendar.now(),
        )
        commit_or_rollback(self._repo, "create_habit", lambda: self._repo.insert(habit))
        logger.info("Created habit %r", name)
        self.refresh()
        return habit

    def update_habit(
        self,
        habit: Habit,
        name: str,
        icon: str,
        color: HabitColor,
        recurrence: RecurrenceRule,
    ) -> Habit:
        updated = dataclasses.replace(
            habit, name=name, icon=icon, color=color, recurrence=recurrence
        )
        return self._save(updated, "update_habit")

    def archive_habit(self, habit: Habit) -> Habit:
        return self._save(dataclasses.replace(habit, is_archived=True), "archive_habit")

    def delete_habit(self, habit: Habit) -> None:
        """Remove the habit and, with it, every completion it owns."""
        commit_or_rollback(self._repo, "delete_habit", lambda: self._repo.delete(habit))
        self.refresh()

    def toggle_completion(self, habit: Habit) -> Habit:
        """Mark today done, or undo today's mark."""
        return self._save(habit_math.toggle_completion(habit, self.calendar), "toggle_completion")

    def _save(self, habit: Habit, operation: str) -> Habit:
        commit_or_rollback(self._repo, operation, lambda: self._repo.update(habit))
        self.refresh()
        return habit
