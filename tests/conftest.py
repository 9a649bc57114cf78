"""Shared test fixtures: a controllable clock, calendars, repositories and catalog."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest

from wellness_engine.catalog import ExerciseCatalog
from wellness_engine.day_calendar import DayCalendar
from wellness_engine.exceptions import PersistenceError
from wellness_engine.models.exercise import ExerciseProgress
from wellness_engine.models.habit import Habit, HabitCompletion, RecurrenceRule
from wellness_engine.repository import InMemoryRepository

# Wednesday, mid-morning
NOW = datetime(2026, 3, 11, 9, 30)


class FixedClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


class FlakyRepository(InMemoryRepository):
    """In-memory repository whose writes or commits can be made to fail on demand."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_commits = False
        self.fail_inserts = False
        self.fail_updates = False
        self.fail_deletes = False

    def insert(self, record) -> None:
        if self.fail_inserts:
            raise PersistenceError("insert rejected", operation="insert")
        super().insert(record)

    def update(self, record) -> None:
        if self.fail_updates:
            raise PersistenceError("update rejected", operation="update")
        super().update(record)

    def delete(self, record) -> None:
        if self.fail_deletes:
            raise PersistenceError("delete rejected", operation="delete")
        super().delete(record)

    def commit(self) -> None:
        if self.fail_commits:
            raise PersistenceError("disk full", operation="commit")
        super().commit()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def calendar(clock: FixedClock) -> DayCalendar:
    """Naive local-time calendar reading the fixed clock."""
    return DayCalendar(clock=clock)


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def flaky_repo() -> FlakyRepository:
    return FlakyRepository()


@pytest.fixture
def catalog() -> ExerciseCatalog:
    return ExerciseCatalog()


@pytest.fixture
def squat_progress() -> ExerciseProgress:
    """Squat at 135 lb with a 135 lb PR and a clean record."""
    return ExerciseProgress.new("squat", 135.0)


@pytest.fixture
def habit_factory(calendar: DayCalendar) -> Callable[..., Habit]:
    """Factory fixture for habits completed N days back from today.

    Usage:
        habit = habit_factory(days_ago=[1, 2, 3], recurrence=RecurrenceRule.daily())
    """

    def factory(
        days_ago: tuple[int, ...] | list[int] = (),
        recurrence: RecurrenceRule | None = None,
        name: str = "Read",
    ) -> Habit:
        habit = Habit(
            name=name,
            created_at=calendar.add_days(calendar.now(), -60),
            recurrence=recurrence or RecurrenceRule.daily(),
        )
        completions = tuple(
            HabitCompletion(
                completed_at=calendar.add_days(calendar.now(), -offset),
                habit_id=habit.id,
            )
            for offset in days_ago
        )
        return Habit(
            name=habit.name,
            created_at=habit.created_at,
            recurrence=habit.recurrence,
            completions=completions,
            id=habit.id,
        )

    return factory
