"""Orchestration layer: single-slot active records, persistence, cached views."""

from wellness_engine.trackers.fasting import FastingTracker
from wellness_engine.trackers.habits import HabitTracker
from wellness_engine.trackers.workouts import WorkoutTracker

__all__ = [
    "FastingTracker",
    "HabitTracker",
    "WorkoutTracker",
]
