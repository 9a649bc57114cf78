"""Custom exception hierarchy for the wellness engine."""

from __future__ import annotations


class WellnessEngineError(Exception):
    """Base exception for all wellness_engine errors."""


class ActiveRecordError(WellnessEngineError):
    """A second active fast or workout was started while one is running."""


class PersistenceError(WellnessEngineError):
    """The repository failed to apply or commit a change."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class RecordNotFoundError(PersistenceError):
    """An update or delete referenced a record the repository does not hold."""

    def __init__(self, record_type: str, record_id: object) -> None:
        super().__init__(
            f"{record_type} {record_id} not found", operation="lookup"
        )
        self.record_type = record_type
        self.record_id = record_id
