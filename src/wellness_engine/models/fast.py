"""Fast record — one intermittent fasting session."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from wellness_engine.models.enums import FastPreset, FastState


@dataclass(frozen=True)
class FastSession:
    """A single fast from start to (optional) end.

    Only the orchestration layer decides whether a new fast may start;
    the record itself does not know about other fasts.
    """

    start_time: datetime
    target_duration_hours: float
    state: FastState = FastState.ACTIVE
    end_time: datetime | None = None
    preset: FastPreset | None = None
    notes: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def is_active(self) -> bool:
        return self.state == FastState.ACTIVE

    @property
    def target_end_time(self) -> datetime:
        """Instant at which the target duration is reached."""
        return self.start_time + timedelta(hours=self.target_duration_hours)
