"""Workout tracker: persistence around the session controller.

Owns the single active session slot, the per-exercise progress map and
the user's custom exercises and templates.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Iterable, Optional

import pandas as pd
from apscheduler.schedulers.base import BaseScheduler

from wellness_engine import config
from wellness_engine.catalog import BUILT_IN_EXERCISES, ExerciseCatalog, next_template
from wellness_engine.day_calendar import DayCalendar
from wellness_engine.exceptions import ActiveRecordError, PersistenceError
from wellness_engine.math import progression
from wellness_engine.math import history
from wellness_engine.models.enums import (
    CUSTOM_EXERCISE_DEFAULT_REPS,
    CUSTOM_EXERCISE_DEFAULT_SETS,
    DEFAULT_SEED_WEIGHT,
    DEFAULT_WEIGHT_INCREMENT,
    MuscleGroup,
    TemplateColor,
)
from wellness_engine.models.exercise import CustomExercise, ExerciseProgress
from wellness_engine.models.template import (
    BuiltInTemplateRef,
    CustomWorkoutTemplate,
    ExerciseConfig,
    TemplateRef,
)
from wellness_engine.models.workout import WorkoutSession, WorkoutSetInstance
from wellness_engine.repository import Repository, commit_or_rollback
from wellness_engine.session.controller import WorkoutSessionController
from wellness_engine.session.rest_timer import RestTimer

logger = logging.getLogger(__name__)


class WorkoutTracker:
    """Start, log, finish and cancel workouts against a repository.

    Args:
        repository: Record store.
        calendar: Source of "now".
        scheduler: Running APScheduler scheduler that ticks the rest
            countdown. With None the caller ticks ``controller.rest_timer``.
        rest_seconds: Rest period between sets.
    """

    def __init__(
        self,
        repository: Repository,
        calendar: DayCalendar,
        scheduler: Optional[BaseScheduler] = None,
        rest_seconds: int = config.REST_SECONDS,
    ) -> None:
        self._repo = repository
        self.calendar = calendar
        self.catalog = ExerciseCatalog()
        self.controller = WorkoutSessionController(
            catalog=self.catalog,
            clock=calendar.now,
            rest_timer=RestTimer(job_id="workout-rest", scheduler=scheduler),
            rest_seconds=rest_seconds,
        )
        self.recent_sessions: list[WorkoutSession] = []
        self.exercise_progress: dict[str, ExerciseProgress] = {}

    @property
    def active_session(self) -> WorkoutSession | None:
        return self.controller.session

    @property
    def next_template(self) -> BuiltInTemplateRef:
        return next_template(self.recent_sessions)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Reload every view and seed progress for exercises that lack it."""
        active = self._repo.fetch(
            WorkoutSession,
            predicate=lambda s: s.end_time is None,
            sort_key=lambda s: s.start_time,
            reverse=True,
        )
        current = self.controller.session
        if active and (current is None or current.id != active[0].id):
            self.controller.resume(active[0])

        self.recent_sessions = self._repo.fetch(
            WorkoutSession,
            predicate=lambda s: s.end_time is not None,
            sort_key=lambda s: s.start_time,
            reverse=True,
        )
        self.catalog.load(
            self._repo.fetch(CustomExercise, sort_key=lambda e: e.name),
            self._repo.fetch(CustomWorkoutTemplate, sort_key=lambda t: t.name),
        )
        self.exercise_progress = {
            p.exercise_id: p for p in self._repo.fetch(ExerciseProgress)
        }
        self._seed_missing_progress()

    def _seed_missing_progress(self) -> None:
        exercise_ids = [e.id for e in BUILT_IN_EXERCISES]
        exercise_ids.extend(
            e.exercise_id for e in self.catalog.custom_exercises if not e.is_archived
        )
        missing = [i for i in exercise_ids if i not in self.exercise_progress]
        if not missing:
            return
        seeded = [ExerciseProgress.new(i, progression.default_weight(i)) for i in missing]

        def stage() -> None:
            for progress in seeded:
                self._repo.insert(progress)

        commit_or_rollback(self._repo, "seed_progress", stage)
        for progress in seeded:
            self.exercise_progress[progress.exercise_id] = progress
        logger.info("Seeded progress for %d exercises", len(seeded))

    # ------------------------------------------------------------------
    # Custom content
    # ------------------------------------------------------------------

    def create_exercise(
        self,
        name: str,
        muscle_group: MuscleGroup = MuscleGroup.FULL_BODY,
        default_sets: int = CUSTOM_EXERCISE_DEFAULT_SETS,
        default_reps: int = CUSTOM_EXERCISE_DEFAULT_REPS,
        weight_increment: float = DEFAULT_WEIGHT_INCREMENT,
        is_compound: bool = True,
    ) -> CustomExercise:
        exercise = CustomExercise(
            name=name,
            muscle_group=muscle_group,
            default_sets=default_sets,
            default_reps=default_reps,
            weight_increment=weight_increment,
            is_compound=is_compound,
            created_at=self.calendar.now(),
        )
        progress = ExerciseProgress.new(exercise.exercise_id, DEFAULT_SEED_WEIGHT)

        def stage() -> None:
            self._repo.insert(exercise)
            self._repo.insert(progress)

        commit_or_rollback(self._repo, "create_exercise", stage)
        self.catalog.add_exercise(exercise)
        self.exercise_progress[exercise.exercise_id] = progress
        return exercise

    def archive_exercise(self, exercise: CustomExercise) -> CustomExercise:
        archived = dataclasses.replace(exercise, is_archived=True)
        commit_or_rollback(self._repo, "archive_exercise", lambda: self._repo.update(archived))
        self.catalog.add_exercise(archived)
        return archived

    def create_template(
        self,
        name: str,
        color: TemplateColor,
        exercises: Iterable[ExerciseConfig],
    ) -> CustomWorkoutTemplate:
        template = CustomWorkoutTemplate(
            name=name,
            color=color,
            exercise_configs=tuple(exercises),
            created_at=self.calendar.now(),
        )
        commit_or_rollback(self._repo, "create_template", lambda: self._repo.insert(template))
        self.catalog.add_template(template)
        return template

    def archive_template(self, template: CustomWorkoutTemplate) -> CustomWorkoutTemplate:
        archived = dataclasses.replace(template, is_archived=True)
        commit_or_rollback(self._repo, "archive_template", lambda: self._repo.update(archived))
        self.catalog.add_template(archived)
        return archived

    def set_progress_weight(self, exercise_id: str, weight: float) -> ExerciseProgress | None:
        """Manually override the working weight for the next session."""
        progress = self.exercise_progress.get(exercise_id)
        if progress is None:
            return None
        updated = progression.set_weight(progress, weight)
        commit_or_rollback(self._repo, "set_progress_weight", lambda: self._repo.update(updated))
        self.exercise_progress[exercise_id] = updated
        return updated

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def start_workout(self, template: TemplateRef) -> WorkoutSession:
        """Raises ActiveRecordError while another session is active."""
        if self.controller.session is not None:
            raise ActiveRecordError(f"Workout {self.controller.session.id} is still active")
        session = self.controller.start(template, self.exercise_progress)
        try:
            commit_or_rollback(self._repo, "start_workout", lambda: self._repo.insert(session))
        except PersistenceError:
            self.controller.cancel()
            raise
        return session

    def complete_set(self, actual_reps: int) -> WorkoutSetInstance | None:
        return self._log_set(lambda: self.controller.complete_set(actual_reps), "complete_set")

    def fail_set(self) -> WorkoutSetInstance | None:
        return self._log_set(self.controller.fail_set, "fail_set")

    def update_set_weight(self, set_id: uuid.UUID, weight: float) -> WorkoutSetInstance | None:
        return self._log_set(
            lambda: self.controller.update_set_weight(set_id, weight), "update_set_weight"
        )

    def _log_set(self, action, operation: str) -> WorkoutSetInstance | None:
        previous = self.controller.session
        logged = action()
        current = self.controller.session
        if logged is None or current is None:
            return logged
        try:
            commit_or_rollback(self._repo, operation, lambda: self._repo.update(current))
        except PersistenceError:
            if previous is not None:
                self.controller.resume(previous)
            raise
        return logged

    def extend_rest(self, seconds: int = config.REST_EXTEND_SECONDS) -> None:
        self.controller.extend_rest(seconds)

    def skip_rest(self) -> None:
        self.controller.skip_rest()

    def finish_workout(self) -> WorkoutSession | None:
        previous = self.controller.session
        result = self.controller.finish(self.exercise_progress)
        if result is None:
            return None

        def stage() -> None:
            self._repo.update(result.session)
            for progress in result.progress:
                if progress.exercise_id in result.created_exercise_ids:
                    self._repo.insert(progress)
                else:
                    self._repo.update(progress)

        try:
            commit_or_rollback(self._repo, "finish_workout", stage)
        except PersistenceError:
            self.controller.resume(previous)  # type: ignore[arg-type]
            raise

        for progress in result.progress:
            self.exercise_progress[progress.exercise_id] = progress
        self.refresh()
        return result.session

    def cancel_workout(self) -> None:
        """Discard the active session and all its sets. Progress is untouched."""
        session = self.controller.cancel()
        if session is None:
            return
        try:
            commit_or_rollback(self._repo, "cancel_workout", lambda: self._repo.delete(session))
        except PersistenceError:
            self.controller.resume(session)
            raise

    def weekly_volume(self) -> pd.Series:
        return history.weekly_volume(self.recent_sessions)
