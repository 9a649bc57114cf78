"""Habit records and their recurrence rules."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from wellness_engine.models.enums import HabitColor, HabitFrequency, Weekday


@dataclass(frozen=True)
class RecurrenceRule:
    """When a habit is due: every day, or only on specific weekdays."""

    frequency: HabitFrequency = HabitFrequency.DAILY
    weekdays: frozenset[Weekday] = field(default_factory=frozenset)

    @classmethod
    def daily(cls) -> RecurrenceRule:
        return cls()

    @classmethod
    def on(cls, *weekdays: Weekday) -> RecurrenceRule:
        return cls(frequency=HabitFrequency.SPECIFIC_DAYS, weekdays=frozenset(weekdays))


@dataclass(frozen=True)
class HabitCompletion:
    completed_at: datetime
    habit_id: uuid.UUID
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class Habit:
    """A recurring habit and every day it was marked done."""

    name: str
    created_at: datetime
    icon: str = "star.fill"
    color: HabitColor = HabitColor.BLUE
    recurrence: RecurrenceRule = field(default_factory=RecurrenceRule)
    is_archived: bool = False
    completions: tuple[HabitCompletion, ...] = field(default_factory=tuple)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
