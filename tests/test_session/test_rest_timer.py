"""Tests for the rest countdown and its scheduler-driven timer."""

from __future__ import annotations

from unittest.mock import MagicMock

from apscheduler.jobstores.base import JobLookupError

from wellness_engine.session.rest_timer import RestCountdown, RestTimer


class TestRestCountdown:
    def test_start_and_tick(self) -> None:
        countdown = RestCountdown.start(3).tick()
        assert countdown.running
        assert countdown.remaining_seconds == 2

    def test_stops_on_reaching_zero(self) -> None:
        countdown = RestCountdown.start(2).tick().tick()
        assert not countdown.running
        assert countdown.remaining_seconds == 0

    def test_non_positive_start_is_idle(self) -> None:
        assert not RestCountdown.start(0).running
        assert not RestCountdown.start(-5).running

    def test_extend_only_while_running(self) -> None:
        assert RestCountdown.start(10).extend(30).remaining_seconds == 40
        assert RestCountdown().extend(30).remaining_seconds == 0

    def test_skip(self) -> None:
        assert not RestCountdown.start(90).skip().running


class TestRestTimerManual:
    def test_ticks_to_finish_and_notifies(self) -> None:
        on_finish = MagicMock()
        timer = RestTimer(on_finish=on_finish)
        timer.start(2)
        timer.tick()
        assert timer.is_running
        timer.tick()
        assert not timer.is_running
        on_finish.assert_called_once()

    def test_restart_replaces_countdown(self) -> None:
        timer = RestTimer()
        timer.start(10)
        timer.tick()
        timer.start(90)
        assert timer.remaining_seconds == 90

    def test_ticks_after_finish_ignored(self) -> None:
        on_finish = MagicMock()
        timer = RestTimer(on_finish=on_finish)
        timer.start(1)
        timer.tick()
        timer.tick()
        on_finish.assert_called_once()


class TestRestTimerScheduled:
    def setup_method(self) -> None:
        self.scheduler = MagicMock()
        self.job = MagicMock()
        self.scheduler.add_job.return_value = self.job
        self.timer = RestTimer(job_id="rest-abc", scheduler=self.scheduler)

    def test_start_adds_interval_job(self) -> None:
        self.timer.start(60)
        self.scheduler.add_job.assert_called_once()
        _, kwargs = self.scheduler.add_job.call_args
        assert kwargs["id"] == "rest-abc"
        assert kwargs["replace_existing"] is True

    def test_restart_removes_previous_job(self) -> None:
        self.timer.start(60)
        self.timer.start(60)
        self.job.remove.assert_called_once()
        assert self.scheduler.add_job.call_count == 2

    def test_finish_removes_job(self) -> None:
        self.timer.start(1)
        self.timer.tick()
        self.job.remove.assert_called_once()

    def test_skip_removes_job(self) -> None:
        self.timer.start(60)
        self.timer.skip()
        self.job.remove.assert_called_once()
        assert not self.timer.is_running

    def test_missing_job_tolerated(self) -> None:
        self.job.remove.side_effect = JobLookupError("rest-abc")
        self.timer.start(60)
        self.timer.cancel()
        assert not self.timer.is_running

    def test_zero_seconds_schedules_nothing(self) -> None:
        self.timer.start(0)
        self.scheduler.add_job.assert_not_called()
