"""In-memory repository: keyed access, ascending iteration, removal."""

import pytest

from workshop_ledger.repository import (
    DuplicateRecordError,
    InMemoryRepository,
    RecordNotFoundError,
)


def test_add_and_find():
    repo = InMemoryRepository()
    repo.add(1, "first")
    assert 1 in repo
    assert repo.find(1) == "first"
    assert repo.get(1) == "first"
    assert len(repo) == 1


def test_add_rejects_duplicate_id():
    repo = InMemoryRepository()
    repo.add(1, "first")
    with pytest.raises(DuplicateRecordError):
        repo.add(1, "again")


def test_missing_record():
    repo = InMemoryRepository()
    assert repo.find(7) is None
    assert 7 not in repo
    with pytest.raises(RecordNotFoundError):
        repo.get(7)


def test_iteration_is_ordered_by_id():
    repo = InMemoryRepository()
    for item_id in (5, 2, 9, 1):
        repo.add(item_id, f"r{item_id}")
    assert [item_id for item_id, _ in repo.items()] == [1, 2, 5, 9]
    assert repo.list() == ["r1", "r2", "r5", "r9"]
    assert list(repo) == repo.list()


def test_remove_returns_record_once():
    repo = InMemoryRepository()
    repo.add(3, "three")
    assert repo.remove(3) == "three"
    assert repo.remove(3) is None
    assert len(repo) == 0


def test_upsert_replaces():
    repo = InMemoryRepository()
    repo.upsert(4, "old")
    repo.upsert(4, "new")
    assert repo.get(4) == "new"
    assert len(repo) == 1
