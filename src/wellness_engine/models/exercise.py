"""Exercise definitions, user-defined exercises and per-exercise progress."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from wellness_engine.models.enums import (
    CUSTOM_EXERCISE_DEFAULT_REPS,
    CUSTOM_EXERCISE_DEFAULT_SETS,
    DEFAULT_WEIGHT_INCREMENT,
    MuscleGroup,
)


@dataclass(frozen=True)
class ExerciseDefinition:
    """Common shape every exercise resolves to, built-in or custom."""

    id: str
    name: str
    muscle_group: MuscleGroup
    default_sets: int
    default_reps: int
    weight_increment: float = DEFAULT_WEIGHT_INCREMENT
    is_compound: bool = True


@dataclass(frozen=True)
class CustomExercise:
    """A user-defined exercise stored in the repository."""

    name: str
    muscle_group: MuscleGroup = MuscleGroup.FULL_BODY
    default_sets: int = CUSTOM_EXERCISE_DEFAULT_SETS
    default_reps: int = CUSTOM_EXERCISE_DEFAULT_REPS
    weight_increment: float = DEFAULT_WEIGHT_INCREMENT
    is_compound: bool = True
    is_archived: bool = False
    created_at: datetime | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def exercise_id(self) -> str:
        """String key used by templates, sessions and progress records."""
        return str(self.id)

    def as_definition(self) -> ExerciseDefinition:
        return ExerciseDefinition(
            id=self.exercise_id,
            name=self.name,
            muscle_group=self.muscle_group,
            default_sets=self.default_sets,
            default_reps=self.default_reps,
            weight_increment=self.weight_increment,
            is_compound=self.is_compound,
        )


@dataclass(frozen=True)
class BuiltInExerciseRef:
    definition: ExerciseDefinition

    @property
    def exercise_id(self) -> str:
        return self.definition.id

    def resolve(self) -> ExerciseDefinition:
        return self.definition


@dataclass(frozen=True)
class CustomExerciseRef:
    exercise: CustomExercise

    @property
    def exercise_id(self) -> str:
        return self.exercise.exercise_id

    def resolve(self) -> ExerciseDefinition:
        return self.exercise.as_definition()


# Either variant resolves to an ExerciseDefinition.
ExerciseRef = BuiltInExerciseRef | CustomExerciseRef


@dataclass(frozen=True)
class ExerciseProgress:
    """Working-weight state for one exercise.

    Use :meth:`new` to create a record; it guarantees the personal record
    starts at or above the current weight. Transitions live in
    ``wellness_engine.math.progression``.
    """

    exercise_id: str
    current_weight: float
    consecutive_failures: int = 0
    last_completed: datetime | None = None
    personal_record: float = 0.0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new(
        cls,
        exercise_id: str,
        current_weight: float,
        personal_record: float = 0.0,
    ) -> ExerciseProgress:
        return cls(
            exercise_id=exercise_id,
            current_weight=current_weight,
            personal_record=max(personal_record, current_weight),
        )
