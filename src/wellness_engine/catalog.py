"""Exercise and template catalog — built-in program plus user content."""

from __future__ import annotations

from typing import Iterable, Sequence

from wellness_engine.models.enums import MuscleGroup, TemplateColor
from wellness_engine.models.exercise import (
    BuiltInExerciseRef,
    CustomExercise,
    CustomExerciseRef,
    ExerciseDefinition,
    ExerciseRef,
)
from wellness_engine.models.template import (
    BuiltInTemplateRef,
    CustomTemplateRef,
    CustomWorkoutTemplate,
    TemplateRef,
    WorkoutTemplate,
)
from wellness_engine.models.workout import WorkoutSession

SQUAT = ExerciseDefinition("squat", "Squat", MuscleGroup.LEGS, default_sets=5, default_reps=5)
BENCH_PRESS = ExerciseDefinition(
    "bench_press", "Bench Press", MuscleGroup.CHEST, default_sets=5, default_reps=5
)
BARBELL_ROW = ExerciseDefinition(
    "barbell_row", "Barbell Row", MuscleGroup.BACK, default_sets=5, default_reps=5
)
OVERHEAD_PRESS = ExerciseDefinition(
    "overhead_press", "Overhead Press", MuscleGroup.SHOULDERS, default_sets=5, default_reps=5
)
DEADLIFT = ExerciseDefinition(
    "deadlift", "Deadlift", MuscleGroup.BACK, default_sets=1, default_reps=5
)

BUILT_IN_EXERCISES: tuple[ExerciseDefinition, ...] = (
    SQUAT,
    BENCH_PRESS,
    BARBELL_ROW,
    OVERHEAD_PRESS,
    DEADLIFT,
)

# StrongLifts 5x5 alternating A/B workouts
WORKOUT_A = WorkoutTemplate(
    id="stronglifts_a",
    name="Workout A",
    exercise_ids=("squat", "bench_press", "barbell_row"),
    color=TemplateColor.BLUE,
)
WORKOUT_B = WorkoutTemplate(
    id="stronglifts_b",
    name="Workout B",
    exercise_ids=("squat", "overhead_press", "deadlift"),
    color=TemplateColor.ORANGE,
)

BUILT_IN_TEMPLATES: tuple[WorkoutTemplate, ...] = (WORKOUT_A, WORKOUT_B)

_BUILT_IN_BY_ID = {e.id: e for e in BUILT_IN_EXERCISES}
_TEMPLATES_BY_ID = {t.id: t for t in BUILT_IN_TEMPLATES}


def built_in_exercise(exercise_id: str) -> ExerciseDefinition | None:
    return _BUILT_IN_BY_ID.get(exercise_id)


def built_in_template(template_id: str) -> WorkoutTemplate | None:
    return _TEMPLATES_BY_ID.get(template_id)


class ExerciseCatalog:
    """Resolves exercise ids to definitions and lists available templates.

    Built-in ids win over custom ids. Archived custom content stays
    resolvable (old sessions still reference it) but is not offered for
    new workouts.
    """

    def __init__(
        self,
        custom_exercises: Iterable[CustomExercise] = (),
        custom_templates: Iterable[CustomWorkoutTemplate] = (),
    ) -> None:
        self._custom_exercises: dict[str, CustomExercise] = {}
        self._custom_templates: dict[str, CustomWorkoutTemplate] = {}
        self.load(custom_exercises, custom_templates)

    def load(
        self,
        custom_exercises: Iterable[CustomExercise],
        custom_templates: Iterable[CustomWorkoutTemplate],
    ) -> None:
        """Replace the user content with freshly fetched records."""
        self._custom_exercises = {e.exercise_id: e for e in custom_exercises}
        self._custom_templates = {str(t.id): t for t in custom_templates}

    def add_exercise(self, exercise: CustomExercise) -> None:
        self._custom_exercises[exercise.exercise_id] = exercise

    def add_template(self, template: CustomWorkoutTemplate) -> None:
        self._custom_templates[str(template.id)] = template

    # -- Exercises --------------------------------------------------------

    def exercise_ref(self, exercise_id: str) -> ExerciseRef | None:
        built_in = built_in_exercise(exercise_id)
        if built_in is not None:
            return BuiltInExerciseRef(built_in)
        custom = self._custom_exercises.get(exercise_id)
        if custom is not None:
            return CustomExerciseRef(custom)
        return None

    def resolve(self, exercise_id: str) -> ExerciseDefinition | None:
        """Definition for *exercise_id*, or None for stale/removed ids."""
        ref = self.exercise_ref(exercise_id)
        return ref.resolve() if ref is not None else None

    @property
    def custom_exercises(self) -> list[CustomExercise]:
        return list(self._custom_exercises.values())

    def available_exercises(self) -> list[ExerciseRef]:
        refs: list[ExerciseRef] = [BuiltInExerciseRef(e) for e in BUILT_IN_EXERCISES]
        refs.extend(
            CustomExerciseRef(e) for e in self._custom_exercises.values() if not e.is_archived
        )
        return refs

    # -- Templates --------------------------------------------------------

    def template_ref(self, template_id: str) -> TemplateRef | None:
        built_in = built_in_template(template_id)
        if built_in is not None:
            return BuiltInTemplateRef(built_in)
        custom = self._custom_templates.get(template_id)
        if custom is not None:
            return CustomTemplateRef(custom)
        return None

    @property
    def custom_templates(self) -> list[CustomWorkoutTemplate]:
        return list(self._custom_templates.values())

    def available_templates(self) -> list[TemplateRef]:
        refs: list[TemplateRef] = [BuiltInTemplateRef(t) for t in BUILT_IN_TEMPLATES]
        refs.extend(
            CustomTemplateRef(t) for t in self._custom_templates.values() if not t.is_archived
        )
        return refs


def next_template(recent_sessions: Sequence[WorkoutSession]) -> BuiltInTemplateRef:
    """Alternate the built-in A/B program based on the latest session.

    *recent_sessions* is newest first. Anything other than a built-in A or
    B session (or no history) starts with Workout A.
    """
    if recent_sessions:
        last_template = recent_sessions[0].template_id
        if last_template == WORKOUT_A.id:
            return BuiltInTemplateRef(WORKOUT_B)
        if last_template == WORKOUT_B.id:
            return BuiltInTemplateRef(WORKOUT_A)
    return BuiltInTemplateRef(WORKOUT_A)
