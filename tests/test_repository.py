"""Tests for the in-memory repository and commit_or_rollback."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from wellness_engine.exceptions import PersistenceError, RecordNotFoundError
from wellness_engine.models.fast import FastSession
from wellness_engine.repository import InMemoryRepository, commit_or_rollback

START = datetime(2026, 3, 10, 20, 0)


def _fast(hours_offset: int = 0, target: float = 16) -> FastSession:
    return FastSession(start_time=START.replace(hour=20 - hours_offset), target_duration_hours=target)


class TestInMemoryRepository:
    def test_insert_visible_before_commit(self, repo: InMemoryRepository) -> None:
        fast = _fast()
        repo.insert(fast)
        assert repo.fetch(FastSession) == [fast]
        assert repo.get(FastSession, fast.id) == fast

    def test_rollback_discards_uncommitted(self, repo: InMemoryRepository) -> None:
        kept = _fast()
        repo.insert(kept)
        repo.commit()
        repo.insert(_fast(1))
        repo.rollback()
        assert repo.fetch(FastSession) == [kept]

    def test_update_and_delete(self, repo: InMemoryRepository) -> None:
        fast = _fast()
        repo.insert(fast)
        updated = dataclasses.replace(fast, notes="water only")
        repo.update(updated)
        assert repo.get(FastSession, fast.id).notes == "water only"
        repo.delete(updated)
        assert repo.fetch(FastSession) == []

    def test_duplicate_insert_rejected(self, repo: InMemoryRepository) -> None:
        fast = _fast()
        repo.insert(fast)
        with pytest.raises(PersistenceError) as exc_info:
            repo.insert(fast)
        assert exc_info.value.operation == "insert"

    def test_missing_record(self, repo: InMemoryRepository) -> None:
        with pytest.raises(RecordNotFoundError) as exc_info:
            repo.update(_fast())
        assert exc_info.value.record_type == "FastSession"
        with pytest.raises(RecordNotFoundError):
            repo.delete(_fast())

    def test_fetch_filters_and_sorts(self, repo: InMemoryRepository) -> None:
        short, long_, mid = _fast(3, 12), _fast(1, 20), _fast(2, 16)
        for fast in (short, long_, mid):
            repo.insert(fast)
        result = repo.fetch(
            FastSession,
            predicate=lambda f: f.target_duration_hours >= 16,
            sort_key=lambda f: f.start_time,
            reverse=True,
        )
        assert result == [long_, mid]


class TestCommitOrRollback:
    def test_commits(self, repo: InMemoryRepository) -> None:
        fast = _fast()
        repo.insert(fast)
        commit_or_rollback(repo, "test")
        repo.rollback()
        assert repo.fetch(FastSession) == [fast]

    def test_rolls_back_and_reraises(self) -> None:
        repository = MagicMock()
        repository.commit.side_effect = PersistenceError("locked", operation="commit")
        with pytest.raises(PersistenceError):
            commit_or_rollback(repository, "start_fast")
        repository.rollback.assert_called_once()

    def test_stage_runs_before_commit(self, repo: InMemoryRepository) -> None:
        fast = _fast()
        commit_or_rollback(repo, "start_fast", lambda: repo.insert(fast))
        repo.rollback()
        assert repo.fetch(FastSession) == [fast]

    def test_failing_stage_discards_earlier_writes(self, repo: InMemoryRepository) -> None:
        first, missing = _fast(), _fast(hours_offset=2)

        def stage() -> None:
            repo.insert(first)
            repo.update(missing)

        with pytest.raises(RecordNotFoundError):
            commit_or_rollback(repo, "finish_workout", stage)
        assert repo.fetch(FastSession) == []

    def test_failing_stage_skips_commit(self) -> None:
        repository = MagicMock()
        repository.insert.side_effect = PersistenceError("rejected", operation="insert")
        with pytest.raises(PersistenceError):
            commit_or_rollback(repository, "start_workout", lambda: repository.insert(object()))
        repository.commit.assert_not_called()
        repository.rollback.assert_called_once()
