"""Active workout session handling: set cursor and rest countdown."""

from wellness_engine.session.controller import (
    FinishResult,
    WorkoutSessionController,
    build_session,
    resume_cursor,
)
from wellness_engine.session.rest_timer import RestCountdown, RestTimer

__all__ = [
    "FinishResult",
    "RestCountdown",
    "RestTimer",
    "WorkoutSessionController",
    "build_session",
    "resume_cursor",
]
