"""Progressive overload: linear weight progression with automatic deloads.

Each transition takes an ExerciseProgress and returns the updated record.
The personal record only ever moves up.

Reference:
    Mehdi Hadim, StrongLifts 5x5 — add weight after every successful
    session, deload 10% after failing the same weight three times.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from datetime import datetime

from wellness_engine.models.enums import (
    BUILT_IN_SEED_WEIGHTS,
    DEFAULT_SEED_WEIGHT,
    DELOAD_FACTOR,
    DELOAD_ROUNDING,
    FAILURE_DELOAD_THRESHOLD,
)
from wellness_engine.models.exercise import ExerciseDefinition, ExerciseProgress

logger = logging.getLogger(__name__)


def default_weight(exercise_id: str) -> float:
    """Starting weight for an exercise with no progress yet."""
    return BUILT_IN_SEED_WEIGHTS.get(exercise_id, DEFAULT_SEED_WEIGHT)


def deload_weight(current_weight: float) -> float:
    """10% reduction rounded to the nearest 5 (halves round up).

    Example: 135 → 121.5 → 120.
    """
    steps = (current_weight * DELOAD_FACTOR) / DELOAD_ROUNDING
    return math.floor(steps + 0.5) * DELOAD_ROUNDING


def needs_deload(progress: ExerciseProgress) -> bool:
    return progress.consecutive_failures >= FAILURE_DELOAD_THRESHOLD


def record_success(
    progress: ExerciseProgress,
    definition: ExerciseDefinition | None,
    at: datetime,
) -> ExerciseProgress:
    """All sets hit: add the exercise's increment for next session.

    Returns *progress* unchanged when the exercise can no longer be
    resolved (deleted custom exercise).
    """
    if definition is None:
        logger.debug("No definition for %s, success not recorded", progress.exercise_id)
        return progress

    new_weight = progress.current_weight + definition.weight_increment
    return dataclasses.replace(
        progress,
        consecutive_failures=0,
        last_completed=at,
        current_weight=new_weight,
        personal_record=max(progress.personal_record, new_weight),
    )


def record_failure(progress: ExerciseProgress, at: datetime) -> ExerciseProgress:
    """One or more sets missed: count it, deload on the third in a row."""
    failed = dataclasses.replace(
        progress,
        consecutive_failures=progress.consecutive_failures + 1,
        last_completed=at,
    )
    if needs_deload(failed):
        logger.info(
            "Auto-deload %s after %d failures: %.1f -> %.1f",
            failed.exercise_id,
            failed.consecutive_failures,
            failed.current_weight,
            deload_weight(failed.current_weight),
        )
        return perform_deload(failed)
    return failed


def perform_deload(progress: ExerciseProgress) -> ExerciseProgress:
    """Drop the working weight 10% and forgive accumulated failures."""
    return dataclasses.replace(
        progress,
        current_weight=deload_weight(progress.current_weight),
        consecutive_failures=0,
    )


def set_weight(progress: ExerciseProgress, weight: float) -> ExerciseProgress:
    """Manual override of the working weight; lifts the PR if exceeded."""
    return dataclasses.replace(
        progress,
        current_weight=weight,
        personal_record=max(progress.personal_record, weight),
    )
