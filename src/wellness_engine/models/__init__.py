"""Data models for the wellness engine."""

from wellness_engine.models.enums import (
    FastingPhase,
    FastPreset,
    FastState,
    HabitColor,
    HabitFrequency,
    MuscleGroup,
    SessionState,
    SetStatus,
    TemplateColor,
    Weekday,
)
from wellness_engine.models.exercise import (
    BuiltInExerciseRef,
    CustomExercise,
    CustomExerciseRef,
    ExerciseDefinition,
    ExerciseProgress,
    ExerciseRef,
)
from wellness_engine.models.fast import FastSession
from wellness_engine.models.habit import Habit, HabitCompletion, RecurrenceRule
from wellness_engine.models.template import (
    BuiltInTemplateRef,
    CustomTemplateRef,
    CustomWorkoutTemplate,
    ExerciseConfig,
    TemplateRef,
    WorkoutTemplate,
)
from wellness_engine.models.workout import (
    SetOutcome,
    WorkoutExerciseInstance,
    WorkoutSession,
    WorkoutSetInstance,
)

__all__ = [
    "BuiltInExerciseRef",
    "BuiltInTemplateRef",
    "CustomExercise",
    "CustomExerciseRef",
    "CustomTemplateRef",
    "CustomWorkoutTemplate",
    "ExerciseConfig",
    "ExerciseDefinition",
    "ExerciseProgress",
    "ExerciseRef",
    "FastPreset",
    "FastSession",
    "FastState",
    "FastingPhase",
    "Habit",
    "HabitColor",
    "HabitCompletion",
    "HabitFrequency",
    "MuscleGroup",
    "RecurrenceRule",
    "SessionState",
    "SetOutcome",
    "SetStatus",
    "TemplateColor",
    "TemplateRef",
    "Weekday",
    "WorkoutExerciseInstance",
    "WorkoutSession",
    "WorkoutSetInstance",
    "WorkoutTemplate",
]
