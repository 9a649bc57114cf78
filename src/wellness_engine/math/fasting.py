"""Fasting timer math: elapsed time, progress, remaining time, metabolic phase.

Every value is recomputed from the caller's ``now``; nothing is cached,
so two calls with the same inputs return identical results.

Reference:
    Anton et al. (2018). Flipping the metabolic switch: understanding and
    applying the health benefits of fasting. Obesity 26(2):254-268.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from wellness_engine.models.enums import (
    FAST_PRESET_LABELS,
    FASTING_PHASE_BENEFITS,
    FASTING_PHASE_DESCRIPTIONS,
    FASTING_PHASE_NAMES,
    FASTING_PHASE_START_HOURS,
    FINAL_PHASE_END_HOURS,
    FastingPhase,
    FastPreset,
)
from wellness_engine.models.fast import FastSession

_SECONDS_PER_HOUR = 3600.0

# Phases sorted by entry threshold, latest first
_PHASES_DESCENDING = tuple(
    sorted(FASTING_PHASE_START_HOURS, key=FASTING_PHASE_START_HOURS.get, reverse=True)
)


def elapsed_seconds(start: datetime, now: datetime) -> float:
    return (now - start).total_seconds()


def target_seconds(target_hours: float) -> float:
    return target_hours * _SECONDS_PER_HOUR


def progress(start: datetime, target_hours: float, now: datetime) -> float:
    """Fraction of the target reached, clamped to [0, 1].

    Returns 0.0 for a non-positive target instead of dividing by zero.
    """
    target = target_seconds(target_hours)
    if target <= 0:
        return 0.0
    fraction = elapsed_seconds(start, now) / target
    return max(0.0, min(1.0, fraction))


def remaining_seconds(start: datetime, target_hours: float, now: datetime) -> float:
    return max(target_seconds(target_hours) - elapsed_seconds(start, now), 0.0)


def is_complete(start: datetime, target_hours: float, now: datetime) -> bool:
    return elapsed_seconds(start, now) >= target_seconds(target_hours)


def phase_for(elapsed_hours: float) -> FastingPhase:
    """Return the latest phase whose entry threshold has been reached.

    Negative input (clock skew, a start time corrected into the future)
    is treated as zero hours.
    """
    hours = max(elapsed_hours, 0.0)
    for phase in _PHASES_DESCENDING:
        if hours >= FASTING_PHASE_START_HOURS[phase]:
            return phase
    return FastingPhase.FED


def next_phase(phase: FastingPhase) -> FastingPhase | None:
    """The phase that follows *phase*, or None for the final phase."""
    ordered = list(FastingPhase)
    index = ordered.index(phase)
    if index + 1 < len(ordered):
        return ordered[index + 1]
    return None


def phase_end_hours(phase: FastingPhase) -> float:
    following = next_phase(phase)
    if following is None:
        return FINAL_PHASE_END_HOURS
    return FASTING_PHASE_START_HOURS[following]


def hours_in_phase(phase: FastingPhase, elapsed_hours: float) -> float:
    """Hours spent inside *phase* so far (full span once it has passed)."""
    start = FASTING_PHASE_START_HOURS[phase]
    end = phase_end_hours(phase)
    if elapsed_hours < start:
        return 0.0
    if elapsed_hours >= end:
        return end - start
    return elapsed_hours - start


@dataclass(frozen=True)
class PhaseDetails:
    """Display metadata for one phase."""

    phase: FastingPhase
    name: str
    description: str
    benefits: tuple[str, ...]
    start_hours: float
    end_hours: float


def phase_details(phase: FastingPhase) -> PhaseDetails:
    return PhaseDetails(
        phase=phase,
        name=FASTING_PHASE_NAMES[phase],
        description=FASTING_PHASE_DESCRIPTIONS[phase],
        benefits=FASTING_PHASE_BENEFITS[phase],
        start_hours=FASTING_PHASE_START_HOURS[phase],
        end_hours=phase_end_hours(phase),
    )


def preset_label(preset: FastPreset) -> str:
    return FAST_PRESET_LABELS[preset]


@dataclass(frozen=True)
class PhaseStatus:
    phase: FastingPhase
    is_unlocked: bool
    is_active: bool


def phases_with_status(elapsed_hours: float) -> tuple[PhaseStatus, ...]:
    """Every phase, flagged as reached and/or current for the timeline view."""
    hours = max(elapsed_hours, 0.0)
    current = phase_for(hours)
    return tuple(
        PhaseStatus(
            phase=phase,
            is_unlocked=hours >= FASTING_PHASE_START_HOURS[phase],
            is_active=phase == current,
        )
        for phase in FastingPhase
    )


@dataclass(frozen=True)
class FastSnapshot:
    """All timer outputs for one fast at one instant."""

    elapsed_seconds: float
    progress: float
    remaining_seconds: float
    is_complete: bool
    phase: FastingPhase

    @property
    def elapsed_hours(self) -> float:
        return self.elapsed_seconds / _SECONDS_PER_HOUR


def snapshot(fast: FastSession, now: datetime) -> FastSnapshot:
    """Compute the timer state of *fast*.

    A terminated fast is measured up to its end time; an active one up
    to *now*.
    """
    end = fast.end_time or now
    elapsed = elapsed_seconds(fast.start_time, end)
    return FastSnapshot(
        elapsed_seconds=elapsed,
        progress=progress(fast.start_time, fast.target_duration_hours, end),
        remaining_seconds=remaining_seconds(fast.start_time, fast.target_duration_hours, end),
        is_complete=is_complete(fast.start_time, fast.target_duration_hours, end),
        phase=phase_for(elapsed / _SECONDS_PER_HOUR),
    )


def format_duration(seconds: float) -> str:
    """Format a duration as hours and minutes, e.g. 57900 -> '16h 5m'."""
    total = max(int(seconds), 0)
    return f"{total // 3600}h {(total % 3600) // 60}m"
