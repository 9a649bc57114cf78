"""Tests for exercise references, custom exercises and templates."""

from __future__ import annotations

from datetime import datetime, timedelta

from wellness_engine.catalog import SQUAT
from wellness_engine.models.enums import (
    FastPreset,
    HabitFrequency,
    MuscleGroup,
    TemplateColor,
    Weekday,
)
from wellness_engine.models.exercise import BuiltInExerciseRef, CustomExercise, CustomExerciseRef
from wellness_engine.models.fast import FastSession
from wellness_engine.models.habit import RecurrenceRule
from wellness_engine.models.template import (
    CustomTemplateRef,
    CustomWorkoutTemplate,
    ExerciseConfig,
)


class TestExerciseRefs:
    def test_built_in_resolves_to_definition(self) -> None:
        ref = BuiltInExerciseRef(SQUAT)
        assert ref.exercise_id == "squat"
        assert ref.resolve() is SQUAT

    def test_custom_uses_uuid_string(self) -> None:
        curl = CustomExercise(name="Curl", muscle_group=MuscleGroup.ARMS, weight_increment=2.5)
        ref = CustomExerciseRef(curl)
        assert ref.exercise_id == str(curl.id)
        definition = ref.resolve()
        assert definition.id == curl.exercise_id
        assert definition.default_sets == 3
        assert definition.default_reps == 10
        assert definition.weight_increment == 2.5


class TestCustomTemplate:
    def test_configs_sorted_by_order(self) -> None:
        template = CustomWorkoutTemplate(
            name="Push",
            color=TemplateColor.RED,
            exercise_configs=(
                ExerciseConfig("overhead_press", order=2),
                ExerciseConfig("bench_press", order=0),
            ),
        )
        assert [c.exercise_id for c in template.ordered_configs] == [
            "bench_press",
            "overhead_press",
        ]

    def test_ref_exposes_identity(self) -> None:
        template = CustomWorkoutTemplate(name="Pull", color=TemplateColor.GREEN)
        ref = CustomTemplateRef(template)
        assert ref.template_id == str(template.id)
        assert ref.name == "Pull"
        assert ref.color == TemplateColor.GREEN


class TestFastSession:
    def test_target_end_time(self) -> None:
        start = datetime(2026, 3, 10, 20, 0)
        fast = FastSession(start_time=start, target_duration_hours=18, preset=FastPreset.EIGHTEEN_SIX)
        assert fast.is_active
        assert fast.target_end_time == start + timedelta(hours=18)


class TestRecurrenceRule:
    def test_daily_default(self) -> None:
        assert RecurrenceRule.daily().frequency == HabitFrequency.DAILY

    def test_specific_days(self) -> None:
        rule = RecurrenceRule.on(Weekday.TUESDAY, Weekday.THURSDAY)
        assert rule.frequency == HabitFrequency.SPECIFIC_DAYS
        assert rule.weekdays == frozenset({Weekday.TUESDAY, Weekday.THURSDAY})
