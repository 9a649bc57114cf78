"""Rest-interval countdown between working sets.

``RestCountdown`` is a pure reducer over one-second ticks. ``RestTimer``
owns the single countdown of a session and, when given an APScheduler
scheduler, drives it with an interval job. Without a scheduler the
caller feeds ``tick()`` itself (UI frame loop, tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from wellness_engine.models.enums import DEFAULT_REST_SECONDS, REST_TICK_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestCountdown:
    remaining_seconds: int = 0
    running: bool = False

    @classmethod
    def start(cls, seconds: int = DEFAULT_REST_SECONDS) -> RestCountdown:
        if seconds <= 0:
            return cls()
        return cls(remaining_seconds=seconds, running=True)

    def tick(self) -> RestCountdown:
        """One second elapsed. Reaching zero stops the countdown."""
        if not self.running:
            return self
        remaining = self.remaining_seconds - 1
        if remaining <= 0:
            return RestCountdown()
        return RestCountdown(remaining_seconds=remaining, running=True)

    def extend(self, seconds: int) -> RestCountdown:
        if not self.running:
            return self
        return RestCountdown(remaining_seconds=self.remaining_seconds + seconds, running=True)

    def skip(self) -> RestCountdown:
        return RestCountdown()


class RestTimer:
    """The one rest countdown of a workout session.

    Starting a new rest always tears down the previous job first; the
    job id is per session, so two timers can never tick for the same
    session even if a caller bypasses ``start``.

    Args:
        job_id: Scheduler job id, unique per session.
        scheduler: Running APScheduler scheduler, or None for manual ticks.
        on_finish: Called once when the countdown reaches zero by ticking.
    """

    def __init__(
        self,
        job_id: str = "rest-timer",
        scheduler: Optional[BaseScheduler] = None,
        on_finish: Optional[Callable[[], None]] = None,
    ) -> None:
        self.job_id = job_id
        self._scheduler = scheduler
        self._on_finish = on_finish
        self._job: Job | None = None
        self._countdown = RestCountdown()

    @property
    def countdown(self) -> RestCountdown:
        return self._countdown

    @property
    def remaining_seconds(self) -> int:
        return self._countdown.remaining_seconds

    @property
    def is_running(self) -> bool:
        return self._countdown.running

    def start(self, seconds: int = DEFAULT_REST_SECONDS) -> None:
        self.cancel()
        self._countdown = RestCountdown.start(seconds)
        if not self._countdown.running:
            return
        if self._scheduler is not None:
            self._job = self._scheduler.add_job(
                self.tick,
                IntervalTrigger(seconds=REST_TICK_SECONDS),
                id=self.job_id,
                replace_existing=True,
            )
        logger.debug("Rest started for %ds (%s)", seconds, self.job_id)

    def tick(self) -> None:
        if not self._countdown.running:
            return
        self._countdown = self._countdown.tick()
        if not self._countdown.running:
            self._remove_job()
            logger.debug("Rest finished (%s)", self.job_id)
            if self._on_finish is not None:
                self._on_finish()

    def extend(self, seconds: int) -> None:
        self._countdown = self._countdown.extend(seconds)

    def skip(self) -> None:
        self.cancel()

    def cancel(self) -> None:
        self._remove_job()
        self._countdown = self._countdown.skip()

    def _remove_job(self) -> None:
        if self._job is None:
            return
        try:
            self._job.remove()
        except JobLookupError:
            # Already gone from the job store (scheduler shut down).
            pass
        self._job = None
