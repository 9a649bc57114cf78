"""Fasting tracker. Owns the single active fast and the fasting history views."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Optional

from wellness_engine import config
from wellness_engine.day_calendar import DayCalendar
from wellness_engine.exceptions import ActiveRecordError
from wellness_engine.math import fasting
from wellness_engine.math.history import FastingSummary, summarize_fasts
from wellness_engine.models.enums import FAST_PRESET_HOURS, FastPreset, FastState
from wellness_engine.models.fast import FastSession
from wellness_engine.repository import Repository, commit_or_rollback

logger = logging.getLogger(__name__)


class FastingTracker:
    """Start, end and correct fasts; keep derived views current.

    Views (``active_fast``, ``recent_fasts``, ``fasts_for_selected_date``)
    are only updated by :meth:`refresh`, which every write calls after a
    successful commit.
    """

    def __init__(
        self,
        repository: Repository,
        calendar: DayCalendar,
        recent_days: int = config.RECENT_FAST_DAYS,
    ) -> None:
        self._repo = repository
        self.calendar = calendar
        self.recent_days = recent_days

        self.active_fast: FastSession | None = None
        self.recent_fasts: list[FastSession] = []
        self.fasts_for_selected_date: list[FastSession] = []
        self.selected_date: datetime = calendar.now()

        self.selected_preset = FastPreset.SIXTEEN_EIGHT
        self.custom_duration_hours = config.DEFAULT_FAST_HOURS

    @property
    def target_duration_hours(self) -> float:
        if self.selected_preset == FastPreset.CUSTOM:
            return self.custom_duration_hours
        return FAST_PRESET_HOURS[self.selected_preset]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        active = self._repo.fetch(
            FastSession,
            predicate=lambda f: f.state == FastState.ACTIVE,
            sort_key=lambda f: f.start_time,
            reverse=True,
        )
        self.active_fast = active[0] if active else None

        cutoff = self.calendar.add_days(self.calendar.now(), -self.recent_days)
        self.recent_fasts = self._repo.fetch(
            FastSession,
            predicate=lambda f: f.state != FastState.ACTIVE and f.start_time >= cutoff,
            sort_key=lambda f: f.start_time,
            reverse=True,
        )
        self._load_selected_date()

    def _load_selected_date(self) -> None:
        start = self.calendar.start_of_day(self.selected_date)
        end = self.calendar.end_of_day(self.selected_date)
        self.fasts_for_selected_date = self._repo.fetch(
            FastSession,
            predicate=lambda f: start <= f.start_time <= end,
            sort_key=lambda f: f.start_time,
            reverse=True,
        )

    def select_date(self, day: datetime) -> None:
        self.selected_date = day
        self._load_selected_date()

    def snapshot(self) -> fasting.FastSnapshot | None:
        """Timer state of the active fast right now."""
        if self.active_fast is None:
            return None
        return fasting.snapshot(self.active_fast, self.calendar.now())

    def summary(self) -> FastingSummary:
        return summarize_fasts(self._repo.fetch(FastSession))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def start_fast(
        self,
        preset: Optional[FastPreset] = None,
        target_hours: Optional[float] = None,
    ) -> FastSession:
        """Begin a fast using *preset* (or the selected preset).

        Raises:
            ActiveRecordError: A fast is already running.
        """
        if self.active_fast is not None:
            raise ActiveRecordError(f"Fast {self.active_fast.id} is still active")

        if preset is not None:
            self.selected_preset = preset
        if target_hours is not None:
            self.custom_duration_hours = target_hours

        fast = FastSession(
            start_time=self.calendar.now(),
            target_duration_hours=self.target_duration_hours,
            preset=self.selected_preset,
        )
        commit_or_rollback(self._repo, "start_fast", lambda: self._repo.insert(fast))
        logger.info("Started %.1fh fast %s", fast.target_duration_hours, fast.id)
        self.refresh()
        return fast

    def complete_fast(self) -> FastSession | None:
        return self._terminate(FastState.COMPLETED)

    def cancel_fast(self) -> FastSession | None:
        return self._terminate(FastState.CANCELLED)

    def _terminate(self, state: FastState) -> FastSession | None:
        if self.active_fast is None:
            return None
        ended = dataclasses.replace(self.active_fast, end_time=self.calendar.now(), state=state)
        commit_or_rollback(self._repo, state.name.lower(), lambda: self._repo.update(ended))
        logger.info("Fast %s %s", ended.id, state.name.lower())
        self.refresh()
        return ended

    def delete_fast(self, fast: FastSession) -> None:
        commit_or_rollback(self._repo, "delete_fast", lambda: self._repo.delete(fast))
        self.refresh()

    def update_fast(
        self,
        fast: FastSession,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> FastSession:
        """Correct times or notes; other fields stay as recorded."""
        changes: dict[str, object] = {}
        if start_time is not None:
            changes["start_time"] = start_time
        if end_time is not None:
            changes["end_time"] = end_time
        if notes is not None:
            changes["notes"] = notes
        updated = dataclasses.replace(fast, **changes)
        commit_or_rollback(self._repo, "update_fast", lambda: self._repo.update(updated))
        self.refresh()
        return updated
