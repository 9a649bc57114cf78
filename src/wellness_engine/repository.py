"""Repository contract and an in-memory implementation.

The engines never talk to storage; the trackers do, through this
interface. Writes are staged until ``commit()``; ``rollback()`` discards
them. Fetches return fully materialized lists.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol, TypeVar

from wellness_engine.exceptions import PersistenceError, RecordNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Repository(Protocol):
    def insert(self, record: Any) -> None: ...

    def update(self, record: Any) -> None: ...

    def delete(self, record: Any) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def fetch(
        self,
        record_type: type[T],
        predicate: Optional[Callable[[T], bool]] = None,
        sort_key: Optional[Callable[[T], Any]] = None,
        reverse: bool = False,
    ) -> list[T]: ...


class InMemoryRepository:
    """Dict-backed repository keyed by record type and ``record.id``.

    Staged writes are visible to ``fetch`` immediately, the way an object
    context shows unsaved inserts; ``rollback`` restores the last commit.
    """

    def __init__(self) -> None:
        self._committed: dict[type, dict[Any, Any]] = {}
        self._working: dict[type, dict[Any, Any]] = {}

    def _table(self, record_type: type) -> dict[Any, Any]:
        return self._working.setdefault(record_type, {})

    def insert(self, record: Any) -> None:
        table = self._table(type(record))
        if record.id in table:
            raise PersistenceError(
                f"{type(record).__name__} {record.id} already exists", operation="insert"
            )
        table[record.id] = record

    def update(self, record: Any) -> None:
        table = self._table(type(record))
        if record.id not in table:
            raise RecordNotFoundError(type(record).__name__, record.id)
        table[record.id] = record

    def delete(self, record: Any) -> None:
        table = self._table(type(record))
        if record.id not in table:
            raise RecordNotFoundError(type(record).__name__, record.id)
        del table[record.id]

    def commit(self) -> None:
        self._committed = {k: dict(v) for k, v in self._working.items()}
        logger.debug("Committed %d record types", len(self._committed))

    def rollback(self) -> None:
        self._working = {k: dict(v) for k, v in self._committed.items()}
        logger.debug("Rolled back to last commit")

    def get(self, record_type: type[T], record_id: Any) -> T | None:
        return self._working.get(record_type, {}).get(record_id)

    def fetch(
        self,
        record_type: type[T],
        predicate: Optional[Callable[[T], bool]] = None,
        sort_key: Optional[Callable[[T], Any]] = None,
        reverse: bool = False,
    ) -> list[T]:
        records = list(self._working.get(record_type, {}).values())
        if predicate is not None:
            records = [r for r in records if predicate(r)]
        if sort_key is not None:
            records.sort(key=sort_key, reverse=reverse)
        return records


def commit_or_rollback(
    repository: Repository,
    operation: str,
    stage: Optional[Callable[[], None]] = None,
) -> None:
    """Run *stage* (the staged writes), then commit.

    A PersistenceError from either step rolls every staged write back and
    is re-raised. Trackers call this before touching their in-memory
    state, so a failed write leaves that state exactly as it was.
    """
    try:
        if stage is not None:
            stage()
        repository.commit()
    except PersistenceError as exc:
        logger.error("Write failed during %s: %s", operation, exc)
        repository.rollback()
        raise
