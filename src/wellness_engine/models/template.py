"""Workout templates — built-in programs and user-defined layouts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from wellness_engine.models.enums import TemplateColor


@dataclass(frozen=True)
class WorkoutTemplate:
    """Built-in template: an ordered list of built-in exercise ids.

    Sets and reps come from each exercise's defaults.
    """

    id: str
    name: str
    exercise_ids: tuple[str, ...]
    color: TemplateColor = TemplateColor.BLUE


@dataclass(frozen=True)
class ExerciseConfig:
    """One exercise slot inside a custom template."""

    exercise_id: str  # Built-in id or a CustomExercise UUID string
    sets: int = 5
    reps: int = 5
    order: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class CustomWorkoutTemplate:
    name: str
    color: TemplateColor = TemplateColor.BLUE
    exercise_configs: tuple[ExerciseConfig, ...] = field(default_factory=tuple)
    is_archived: bool = False
    created_at: datetime | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def ordered_configs(self) -> tuple[ExerciseConfig, ...]:
        return tuple(sorted(self.exercise_configs, key=lambda c: c.order))


@dataclass(frozen=True)
class BuiltInTemplateRef:
    template: WorkoutTemplate

    @property
    def template_id(self) -> str:
        return self.template.id

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def color(self) -> TemplateColor:
        return self.template.color


@dataclass(frozen=True)
class CustomTemplateRef:
    template: CustomWorkoutTemplate

    @property
    def template_id(self) -> str:
        return str(self.template.id)

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def color(self) -> TemplateColor:
        return self.template.color


TemplateRef = BuiltInTemplateRef | CustomTemplateRef
