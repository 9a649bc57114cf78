"""Aggregate statistics over fasting and workout history."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from wellness_engine.models.enums import FastState
from wellness_engine.models.fast import FastSession
from wellness_engine.models.workout import WorkoutSession


@dataclass(frozen=True)
class FastingSummary:
    total_fasts: int
    completed_fasts: int
    completion_rate: float
    mean_hours: float
    longest_hours: float


def summarize_fasts(fasts: Iterable[FastSession]) -> FastingSummary:
    """Summarize terminated fasts. Active fasts and fasts without an end are ignored.

    A fast counts as completed when it was ended as COMPLETED, regardless
    of whether it reached its target.
    """
    finished = [f for f in fasts if f.end_time is not None and not f.is_active]
    if not finished:
        return FastingSummary(0, 0, 0.0, 0.0, 0.0)

    hours = np.array(
        [(f.end_time - f.start_time).total_seconds() / 3600.0 for f in finished],  # type: ignore[operator]
        dtype=np.float64,
    )
    hours = np.clip(hours, 0.0, None)
    completed = sum(1 for f in finished if f.state == FastState.COMPLETED)
    return FastingSummary(
        total_fasts=len(finished),
        completed_fasts=completed,
        completion_rate=completed / len(finished),
        mean_hours=float(np.mean(hours)),
        longest_hours=float(np.max(hours)),
    )


def weekly_volume(sessions: Iterable[WorkoutSession]) -> pd.Series:
    """Total lifted volume per training week (weeks start on Monday).

    Only finished sessions count. The index holds each week's Monday as a
    ``datetime.date``; weeks without a session are filled with 0.
    """
    rows = [
        (s.start_time, s.total_volume) for s in sessions if s.end_time is not None
    ]
    if not rows:
        return pd.Series(dtype=np.float64)

    frame = pd.DataFrame(rows, columns=["start", "volume"])
    starts = pd.to_datetime(frame["start"])
    frame["week"] = (starts.dt.normalize() - pd.to_timedelta(starts.dt.weekday, unit="D")).dt.date
    totals = frame.groupby("week")["volume"].sum().sort_index()

    all_weeks = pd.date_range(min(totals.index), max(totals.index), freq="7D").date
    return totals.reindex(all_weeks, fill_value=0.0).astype(np.float64)
