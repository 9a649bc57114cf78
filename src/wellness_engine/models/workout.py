"""Workout session records: session → exercise instances → working sets.

A session owns its exercise instances and their sets; they are embedded
in the frozen session value, so removing the session removes them too.
Derived stats are properties, recomputed from set data on every access.
"""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from wellness_engine.models.enums import SetStatus


@dataclass(frozen=True)
class SetOutcome:
    """Tagged result of a working set.

    Replaces independent ``completed``/``failed`` flags so that a set can
    never be both pending and failed, or failed with reps it never did.
    """

    status: SetStatus = SetStatus.PENDING
    reps: int = 0

    @classmethod
    def pending(cls) -> SetOutcome:
        return cls()

    @classmethod
    def from_reps(cls, actual_reps: int, target_reps: int) -> SetOutcome:
        """Outcome of a finished set: SHORT when below the rep target."""
        reps = max(actual_reps, 0)
        if reps < target_reps:
            return cls(status=SetStatus.SHORT, reps=reps)
        return cls(status=SetStatus.COMPLETED, reps=reps)

    @classmethod
    def failed(cls) -> SetOutcome:
        return cls(status=SetStatus.FAILED, reps=0)

    @property
    def is_logged(self) -> bool:
        return self.status != SetStatus.PENDING

    @property
    def is_completed(self) -> bool:
        """True when reps were logged (including short sets)."""
        return self.status in (SetStatus.COMPLETED, SetStatus.SHORT)

    @property
    def is_failed(self) -> bool:
        return self.status in (SetStatus.SHORT, SetStatus.FAILED)


@dataclass(frozen=True)
class WorkoutSetInstance:
    set_number: int  # 1-indexed
    target_reps: int
    weight: float
    outcome: SetOutcome = field(default_factory=SetOutcome)
    completed_at: datetime | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def reps(self) -> int:
        return self.outcome.reps

    @property
    def volume(self) -> float:
        if not self.outcome.is_completed:
            return 0.0
        return self.weight * self.outcome.reps


@dataclass(frozen=True)
class WorkoutExerciseInstance:
    exercise_id: str
    order: int
    sets: tuple[WorkoutSetInstance, ...] = field(default_factory=tuple)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def ordered_sets(self) -> tuple[WorkoutSetInstance, ...]:
        return tuple(sorted(self.sets, key=lambda s: s.set_number))

    @property
    def all_sets_completed(self) -> bool:
        return bool(self.sets) and all(s.outcome.is_completed for s in self.sets)

    @property
    def completed_sets_count(self) -> int:
        return sum(1 for s in self.sets if s.outcome.is_completed)

    @property
    def failed_sets_count(self) -> int:
        return sum(1 for s in self.sets if s.outcome.is_failed)

    @property
    def logged_sets_count(self) -> int:
        return sum(1 for s in self.sets if s.outcome.is_logged)

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


@dataclass(frozen=True)
class WorkoutSession:
    template_id: str
    start_time: datetime
    end_time: datetime | None = None
    exercises: tuple[WorkoutExerciseInstance, ...] = field(default_factory=tuple)
    notes: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def ordered_exercises(self) -> tuple[WorkoutExerciseInstance, ...]:
        return tuple(sorted(self.exercises, key=lambda e: e.order))

    @property
    def total_volume(self) -> float:
        """Sum of weight × reps over every set with logged reps."""
        return sum(e.volume for e in self.exercises)

    @property
    def completed_sets_count(self) -> int:
        return sum(e.completed_sets_count for e in self.exercises)

    @property
    def total_sets_count(self) -> int:
        return sum(len(e.sets) for e in self.exercises)

    @property
    def is_fully_logged(self) -> bool:
        """True when every set is either completed or failed."""
        return all(s.outcome.is_logged for e in self.exercises for s in e.sets)

    def duration_seconds(self, now: datetime) -> float:
        end = self.end_time or now
        return (end - self.start_time).total_seconds()

    def replace_set(
        self, exercise_id: uuid.UUID, new_set: WorkoutSetInstance
    ) -> WorkoutSession:
        """Return a copy with the set sharing ``new_set.id`` swapped in."""
        exercises = []
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                sets = tuple(new_set if s.id == new_set.id else s for s in exercise.sets)
                exercise = dataclasses.replace(exercise, sets=sets)
            exercises.append(exercise)
        return dataclasses.replace(self, exercises=tuple(exercises))
