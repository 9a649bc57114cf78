"""Workout session controller — walks a lifter through every working set.

Cursor state is ``(exercise_index, set_index)`` over exercises sorted by
``order`` and sets sorted by ``set_number``. Logging a set advances the
cursor and starts the rest countdown; logging the last set marks the
session complete. ``finish`` feeds each exercise's result into the
progressive overload engine.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional

from wellness_engine.catalog import ExerciseCatalog
from wellness_engine.math import progression
from wellness_engine.models.enums import DEFAULT_REST_SECONDS, SessionState
from wellness_engine.models.exercise import ExerciseProgress
from wellness_engine.models.template import BuiltInTemplateRef, CustomTemplateRef, TemplateRef
from wellness_engine.models.workout import (
    SetOutcome,
    WorkoutExerciseInstance,
    WorkoutSession,
    WorkoutSetInstance,
)
from wellness_engine.session.rest_timer import RestTimer

logger = logging.getLogger(__name__)


def _make_sets(count: int, target_reps: int, weight: float) -> tuple[WorkoutSetInstance, ...]:
    return tuple(
        WorkoutSetInstance(set_number=n, target_reps=target_reps, weight=weight)
        for n in range(1, count + 1)
    )


def _seed_weight(exercise_id: str, progress_by_exercise: Mapping[str, ExerciseProgress]) -> float:
    progress = progress_by_exercise.get(exercise_id)
    if progress is not None:
        return progress.current_weight
    return progression.default_weight(exercise_id)


def build_session(
    template: TemplateRef,
    catalog: ExerciseCatalog,
    progress_by_exercise: Mapping[str, ExerciseProgress],
    at: datetime,
) -> WorkoutSession:
    """Create a new session from a template, seeding every set's weight.

    Built-in templates use each exercise's default sets/reps; custom
    templates use their configured sets/reps and order. Exercises the
    catalog can no longer resolve are left out.
    """
    exercises: list[WorkoutExerciseInstance] = []
    if isinstance(template, BuiltInTemplateRef):
        for index, exercise_id in enumerate(template.template.exercise_ids):
            definition = catalog.resolve(exercise_id)
            if definition is None:
                logger.warning("Skipping unknown exercise %s in %s", exercise_id, template.template_id)
                continue
            weight = _seed_weight(exercise_id, progress_by_exercise)
            exercises.append(
                WorkoutExerciseInstance(
                    exercise_id=exercise_id,
                    order=index,
                    sets=_make_sets(definition.default_sets, definition.default_reps, weight),
                )
            )
    elif isinstance(template, CustomTemplateRef):
        for config in template.template.ordered_configs:
            if catalog.resolve(config.exercise_id) is None:
                logger.warning(
                    "Skipping unknown exercise %s in %s", config.exercise_id, template.template_id
                )
                continue
            weight = _seed_weight(config.exercise_id, progress_by_exercise)
            exercises.append(
                WorkoutExerciseInstance(
                    exercise_id=config.exercise_id,
                    order=config.order,
                    sets=_make_sets(max(config.sets, 0), config.reps, weight),
                )
            )
    return WorkoutSession(template_id=template.template_id, start_time=at, exercises=tuple(exercises))


def resume_cursor(session: WorkoutSession) -> tuple[int, int]:
    """Cursor of the first set that is neither completed nor failed.

    When every set is logged the cursor parks on the last exercise, set 0.
    """
    exercises = session.ordered_exercises
    for exercise_index, exercise in enumerate(exercises):
        for set_index, workout_set in enumerate(exercise.ordered_sets):
            if not workout_set.outcome.is_logged:
                return exercise_index, set_index
    return max(0, len(exercises) - 1), 0


@dataclass(frozen=True)
class FinishResult:
    """Finished session plus the progress records it touched."""

    session: WorkoutSession
    progress: tuple[ExerciseProgress, ...]
    created_exercise_ids: frozenset[str]


class WorkoutSessionController:
    """State machine over one active workout session.

    Args:
        catalog: Resolves exercise ids for weight increments.
        clock: Returns the current instant.
        rest_timer: Countdown used between sets. A manually ticked timer
            is created when omitted.
        rest_seconds: Length of each rest period.
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        clock: Callable[[], datetime],
        rest_timer: Optional[RestTimer] = None,
        rest_seconds: int = DEFAULT_REST_SECONDS,
    ) -> None:
        self.catalog = catalog
        self._clock = clock
        self.rest_timer = rest_timer or RestTimer()
        self.rest_seconds = rest_seconds
        self.session: WorkoutSession | None = None
        self.exercise_index = 0
        self.set_index = 0
        self.is_complete = False
        self._terminal_state: SessionState | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(
        self,
        template: TemplateRef,
        progress_by_exercise: Mapping[str, ExerciseProgress],
    ) -> WorkoutSession:
        session = build_session(template, self.catalog, progress_by_exercise, self._clock())
        exercise_index, set_index = resume_cursor(session)
        self._load(session, exercise_index, set_index)
        logger.info(
            "Started %s with %d exercises", template.template_id, len(session.exercises)
        )
        return session

    def resume(self, session: WorkoutSession) -> None:
        """Reattach to an active session loaded from storage."""
        exercise_index, set_index = resume_cursor(session)
        self._load(session, exercise_index, set_index)

    def _load(self, session: WorkoutSession, exercise_index: int, set_index: int) -> None:
        self.rest_timer.cancel()
        self.session = session
        self.exercise_index = exercise_index
        self.set_index = set_index
        self.is_complete = session.is_fully_logged
        self._terminal_state = None

    def finish(
        self, progress_by_exercise: Mapping[str, ExerciseProgress]
    ) -> FinishResult | None:
        """Close the session and apply one progression step per exercise.

        Any failed set → ``record_failure``. Otherwise, if at least one set
        was logged → ``record_success``. Exercises with no sets, or none
        logged, leave progress untouched. Missing progress records are
        created from the first set's weight.
        """
        session = self.session
        if session is None:
            return None

        now = self._clock()
        updated: dict[str, ExerciseProgress] = {}
        created: set[str] = set()
        for exercise in session.ordered_exercises:
            if not exercise.sets or exercise.logged_sets_count == 0:
                continue

            exercise_id = exercise.exercise_id
            progress = updated.get(exercise_id) or progress_by_exercise.get(exercise_id)
            if progress is None:
                progress = ExerciseProgress.new(exercise_id, exercise.ordered_sets[0].weight)
                created.add(exercise_id)

            if exercise.failed_sets_count > 0:
                progress = progression.record_failure(progress, now)
            else:
                progress = progression.record_success(
                    progress, self.catalog.resolve(exercise_id), now
                )
            updated[exercise_id] = progress

        finished = dataclasses.replace(session, end_time=now)
        self._close(SessionState.FINISHED)
        logger.info(
            "Finished session %s: %d/%d sets, volume %.1f",
            finished.id,
            finished.completed_sets_count,
            finished.total_sets_count,
            finished.total_volume,
        )
        return FinishResult(
            session=finished,
            progress=tuple(updated.values()),
            created_exercise_ids=frozenset(created),
        )

    def cancel(self) -> WorkoutSession | None:
        """Abandon the session. Returns it so the caller can delete it."""
        session = self.session
        if session is None:
            return None
        self._close(SessionState.CANCELLED)
        logger.info("Cancelled session %s", session.id)
        return session

    def _close(self, state: SessionState) -> None:
        self.rest_timer.cancel()
        self.session = None
        self.exercise_index = 0
        self.set_index = 0
        self.is_complete = False
        self._terminal_state = state

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self.session is None:
            return self._terminal_state or SessionState.NOT_STARTED
        if self.is_complete:
            return SessionState.COMPLETE
        if self.rest_timer.is_running:
            return SessionState.RESTING
        return SessionState.ACTIVE

    @property
    def is_resting(self) -> bool:
        return self.rest_timer.is_running

    @property
    def current_exercise(self) -> WorkoutExerciseInstance | None:
        if self.session is None:
            return None
        exercises = self.session.ordered_exercises
        if self.exercise_index >= len(exercises):
            return None
        return exercises[self.exercise_index]

    @property
    def current_set(self) -> WorkoutSetInstance | None:
        exercise = self.current_exercise
        if exercise is None:
            return None
        sets = exercise.ordered_sets
        if self.set_index >= len(sets):
            return None
        return sets[self.set_index]

    def complete_set(self, actual_reps: int) -> WorkoutSetInstance | None:
        """Log reps for the current set; short of target counts as failed."""
        current = self.current_set
        if current is None or self.is_complete:
            return None
        logged = dataclasses.replace(
            current,
            outcome=SetOutcome.from_reps(actual_reps, current.target_reps),
            completed_at=self._clock(),
        )
        self._store_set(logged)
        self._advance()
        return logged

    def fail_set(self) -> WorkoutSetInstance | None:
        current = self.current_set
        if current is None or self.is_complete:
            return None
        logged = dataclasses.replace(current, outcome=SetOutcome.failed(), completed_at=self._clock())
        self._store_set(logged)
        self._advance()
        return logged

    def update_set_weight(self, set_id: uuid.UUID, weight: float) -> WorkoutSetInstance | None:
        """Change the weight of any set in the session (plate mistakes)."""
        if self.session is None:
            return None
        for exercise in self.session.exercises:
            for workout_set in exercise.sets:
                if workout_set.id == set_id:
                    updated = dataclasses.replace(workout_set, weight=weight)
                    self.session = self.session.replace_set(exercise.id, updated)
                    return updated
        return None

    def _store_set(self, new_set: WorkoutSetInstance) -> None:
        exercise = self.current_exercise
        assert self.session is not None and exercise is not None
        self.session = self.session.replace_set(exercise.id, new_set)

    def _advance(self) -> None:
        exercise = self.current_exercise
        if exercise is None or self.session is None:
            return
        if self.set_index + 1 < len(exercise.sets):
            self.set_index += 1
            self.rest_timer.start(self.rest_seconds)
            return
        # Exercises configured with zero sets are stepped over
        exercises = self.session.ordered_exercises
        for index in range(self.exercise_index + 1, len(exercises)):
            if exercises[index].sets:
                self.exercise_index = index
                self.set_index = 0
                self.rest_timer.start(self.rest_seconds)
                return
        self.is_complete = True
        self.rest_timer.cancel()

    # ------------------------------------------------------------------
    # Rest
    # ------------------------------------------------------------------

    def extend_rest(self, seconds: int) -> None:
        self.rest_timer.extend(seconds)

    def skip_rest(self) -> None:
        self.rest_timer.skip()
