"""Simple in-memory repositories and counter cells used by the service layer."""

from __future__ import annotations

from typing import Generic, Iterator, List, MutableMapping, Optional, Tuple, TypeVar

T = TypeVar("T")


class RepositoryError(RuntimeError):
    """Base exception for repository errors."""


class DuplicateRecordError(RepositoryError):
    """Raised when attempting to insert a record that already exists."""


class RecordNotFoundError(RepositoryError):
    """Raised when a requested record is missing."""


class RecordTooLargeError(RepositoryError):
    """Raised when a record does not fit the storage size limit."""


class KeyOutOfRangeError(RepositoryError):
    """Raised when an id cannot be represented by the storage backend."""


class InMemoryRepository(Generic[T]):
    """Generic repository backed by a dictionary, iterated in key order."""

    def __init__(self) -> None:
        self._items: MutableMapping[int, T] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def add(self, item_id: int, item: T) -> None:
        if item_id in self._items:
            raise DuplicateRecordError(f"Record with id {item_id!r} already exists")
        self._items[item_id] = item

    def upsert(self, item_id: int, item: T) -> None:
        self._items[item_id] = item

    def find(self, item_id: int) -> Optional[T]:
        return self._items.get(item_id)

    def get(self, item_id: int) -> T:
        try:
            return self._items[item_id]
        except KeyError as exc:
            raise RecordNotFoundError(f"Record with id {item_id!r} not found") from exc

    def remove(self, item_id: int) -> Optional[T]:
        return self._items.pop(item_id, None)

    def items(self) -> Iterator[Tuple[int, T]]:
        for item_id in sorted(self._items):
            yield item_id, self._items[item_id]

    def list(self) -> List[T]:
        return [item for _, item in self.items()]

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())


class InMemoryCounter:
    """Volatile counter cell; starts at zero with every process."""

    def __init__(self, initial: int = 0) -> None:
        self._value = initial

    def get(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        self._value = value


__all__ = [
    "InMemoryRepository",
    "InMemoryCounter",
    "RepositoryError",
    "DuplicateRecordError",
    "RecordNotFoundError",
    "RecordTooLargeError",
    "KeyOutOfRangeError",
]
