"""Tests for FastingTracker: single active fast, history views, failed commits."""

from __future__ import annotations

from datetime import timedelta

import pytest

from wellness_engine.day_calendar import DayCalendar
from wellness_engine.exceptions import ActiveRecordError, PersistenceError
from wellness_engine.models.enums import FastingPhase, FastPreset, FastState
from wellness_engine.models.fast import FastSession
from wellness_engine.repository import InMemoryRepository
from wellness_engine.trackers.fasting import FastingTracker


@pytest.fixture
def tracker(repo: InMemoryRepository, calendar: DayCalendar) -> FastingTracker:
    tracker = FastingTracker(repo, calendar, recent_days=30)
    tracker.refresh()
    return tracker


class TestStartFast:
    def test_start_with_preset(self, tracker: FastingTracker) -> None:
        fast = tracker.start_fast(FastPreset.EIGHTEEN_SIX)
        assert fast.target_duration_hours == 18
        assert tracker.active_fast == fast

    def test_custom_duration(self, tracker: FastingTracker) -> None:
        fast = tracker.start_fast(FastPreset.CUSTOM, target_hours=20)
        assert fast.target_duration_hours == 20
        assert tracker.target_duration_hours == 20

    def test_second_active_fast_rejected(self, tracker: FastingTracker) -> None:
        tracker.start_fast()
        with pytest.raises(ActiveRecordError):
            tracker.start_fast()

    def test_failed_commit_leaves_no_fast(
        self, flaky_repo, calendar: DayCalendar
    ) -> None:
        tracker = FastingTracker(flaky_repo, calendar)
        flaky_repo.fail_commits = True
        with pytest.raises(PersistenceError):
            tracker.start_fast()
        assert tracker.active_fast is None
        assert flaky_repo.fetch(FastSession) == []


class TestEndFast:
    def test_complete_moves_to_history(self, tracker: FastingTracker, clock) -> None:
        tracker.start_fast(FastPreset.SIXTEEN_EIGHT)
        clock.advance(hours=17)
        ended = tracker.complete_fast()
        assert ended.state == FastState.COMPLETED
        assert ended.end_time == clock()
        assert tracker.active_fast is None
        assert tracker.recent_fasts == [ended]

    def test_cancel(self, tracker: FastingTracker, clock) -> None:
        tracker.start_fast()
        clock.advance(hours=2)
        ended = tracker.cancel_fast()
        assert ended.state == FastState.CANCELLED

    def test_nothing_to_end(self, tracker: FastingTracker) -> None:
        assert tracker.complete_fast() is None
        assert tracker.cancel_fast() is None

    def test_can_start_again_after_ending(self, tracker: FastingTracker, clock) -> None:
        tracker.start_fast()
        clock.advance(hours=16)
        tracker.complete_fast()
        clock.advance(hours=8)
        assert tracker.start_fast().is_active


class TestViews:
    def test_snapshot_of_active_fast(self, tracker: FastingTracker, clock) -> None:
        assert tracker.snapshot() is None
        tracker.start_fast()
        clock.advance(hours=13)
        snap = tracker.snapshot()
        assert snap.phase == FastingPhase.FAT_BURNING
        assert snap.progress == pytest.approx(13 / 16)

    def test_recent_excludes_old_fasts(
        self, tracker: FastingTracker, repo: InMemoryRepository, calendar: DayCalendar
    ) -> None:
        old_start = calendar.add_days(calendar.now(), -45)
        repo.insert(
            FastSession(
                start_time=old_start,
                target_duration_hours=16,
                state=FastState.COMPLETED,
                end_time=old_start + timedelta(hours=16),
            )
        )
        repo.commit()
        tracker.refresh()
        assert tracker.recent_fasts == []
        assert tracker.summary().total_fasts == 1

    def test_select_date(self, tracker: FastingTracker, calendar: DayCalendar) -> None:
        fast = tracker.start_fast()
        tracker.select_date(calendar.add_days(calendar.now(), -1))
        assert tracker.fasts_for_selected_date == []
        tracker.select_date(calendar.now())
        assert tracker.fasts_for_selected_date == [fast]


class TestEditFast:
    def test_update_notes_and_times(self, tracker: FastingTracker, clock) -> None:
        tracker.start_fast()
        clock.advance(hours=16)
        ended = tracker.complete_fast()
        new_start = ended.start_time - timedelta(hours=1)
        updated = tracker.update_fast(ended, start_time=new_start, notes="felt good")
        assert updated.notes == "felt good"
        assert tracker.recent_fasts[0].start_time == new_start
        assert updated.end_time == ended.end_time

    def test_delete(self, tracker: FastingTracker, clock) -> None:
        tracker.start_fast()
        clock.advance(hours=16)
        ended = tracker.complete_fast()
        tracker.delete_fast(ended)
        assert tracker.recent_fasts == []
