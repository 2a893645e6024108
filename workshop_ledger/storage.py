"""SQLite-backed persistence helpers for the workshop ledger."""

from __future__ import annotations

import logging
import pickle
import sqlite3
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

from .domain import Employee, Expense, InventoryItem, Project, Workshop
from .repository import (
    DuplicateRecordError,
    KeyOutOfRangeError,
    RecordNotFoundError,
    RecordTooLargeError,
)

T = TypeVar("T")

DEFAULT_MAX_RECORD_SIZE = 1024

# SQLite INTEGER is a signed 64-bit value.
SQLITE_MIN_KEY = -(2**63)
SQLITE_MAX_KEY = 2**63 - 1

logger = logging.getLogger(__name__)


def encode_record(item: object, max_size: int = DEFAULT_MAX_RECORD_SIZE) -> bytes:
    """Serialize a record, refusing anything above ``max_size`` bytes."""

    payload = pickle.dumps(item)
    if len(payload) > max_size:
        raise RecordTooLargeError(
            f"Encoded {type(item).__name__} is {len(payload)} bytes, "
            f"limit is {max_size}"
        )
    return payload


def decode_record(payload: bytes) -> object:
    return pickle.loads(payload)


def is_storable_key(item_id: object) -> bool:
    return isinstance(item_id, int) and SQLITE_MIN_KEY <= item_id <= SQLITE_MAX_KEY


def check_storable_key(item_id: int) -> None:
    if not is_storable_key(item_id):
        raise KeyOutOfRangeError(f"Id {item_id!r} does not fit a SQLite INTEGER")


class SQLiteRepository(Generic[T]):
    """Repository implementation that persists records inside SQLite."""

    def __init__(
        self,
        connection: sqlite3.Connection,
        table: str,
        *,
        max_record_size: int = DEFAULT_MAX_RECORD_SIZE,
    ) -> None:
        self._connection = connection
        self._table = table
        self._max_record_size = max_record_size
        self._connection.execute(
            f"CREATE TABLE IF NOT EXISTS {table} ("  # nosec - static table names
            "id INTEGER PRIMARY KEY, payload BLOB NOT NULL)"
        )
        self._connection.commit()

    def __contains__(self, item_id: object) -> bool:
        if not is_storable_key(item_id):
            return False
        cursor = self._connection.execute(
            f"SELECT 1 FROM {self._table} WHERE id = ? LIMIT 1", (item_id,)
        )
        return cursor.fetchone() is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    def __len__(self) -> int:
        cursor = self._connection.execute(
            f"SELECT COUNT(1) FROM {self._table}"
        )
        value = cursor.fetchone()
        return int(value[0]) if value else 0

    # ------------------------------------------------------------------
    # CRUD operations
    # ------------------------------------------------------------------
    def add(self, item_id: int, item: T) -> None:
        check_storable_key(item_id)
        if item_id in self:
            raise DuplicateRecordError(f"Record with id {item_id!r} already exists")
        payload = encode_record(item, self._max_record_size)
        self._connection.execute(
            f"INSERT INTO {self._table} (id, payload) VALUES (?, ?)",
            (item_id, payload),
        )
        self._connection.commit()

    def upsert(self, item_id: int, item: T) -> None:
        check_storable_key(item_id)
        payload = encode_record(item, self._max_record_size)
        self._connection.execute(
            f"INSERT INTO {self._table} (id, payload) VALUES (?, ?) "
            "ON CONFLICT(id) DO UPDATE SET payload = excluded.payload",
            (item_id, payload),
        )
        self._connection.commit()

    def find(self, item_id: int) -> Optional[T]:
        if not is_storable_key(item_id):
            return None
        cursor = self._connection.execute(
            f"SELECT payload FROM {self._table} WHERE id = ?", (item_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return decode_record(row[0])  # type: ignore[return-value]

    def get(self, item_id: int) -> T:
        item = self.find(item_id)
        if item is None:
            raise RecordNotFoundError(f"Record with id {item_id!r} not found")
        return item

    def remove(self, item_id: int) -> Optional[T]:
        item = self.find(item_id)
        if item is None:
            return None
        self._connection.execute(
            f"DELETE FROM {self._table} WHERE id = ?", (item_id,)
        )
        self._connection.commit()
        return item

    def items(self) -> Iterator[Tuple[int, T]]:
        cursor = self._connection.execute(
            f"SELECT id, payload FROM {self._table} ORDER BY id"
        )
        for row in cursor:
            yield int(row[0]), decode_record(row[1])  # type: ignore[misc]

    def list(self) -> List[T]:
        return [item for _, item in self.items()]


class SQLiteCounter:
    """Durable counter cell stored as a single row."""

    def __init__(self, connection: sqlite3.Connection, name: str = "id_counter") -> None:
        self._connection = connection
        self._name = name
        self._connection.execute(
            "CREATE TABLE IF NOT EXISTS counters ("
            "name TEXT PRIMARY KEY, value INTEGER NOT NULL)"
        )
        self._connection.execute(
            "INSERT OR IGNORE INTO counters (name, value) VALUES (?, 0)", (name,)
        )
        self._connection.commit()

    def get(self) -> int:
        cursor = self._connection.execute(
            "SELECT value FROM counters WHERE name = ?", (self._name,)
        )
        row = cursor.fetchone()
        if row is None:
            raise RecordNotFoundError(f"Counter {self._name!r} is missing")
        return int(row[0])

    def set(self, value: int) -> None:
        check_storable_key(value)
        self._connection.execute(
            "UPDATE counters SET value = ? WHERE name = ?", (value, self._name)
        )
        self._connection.commit()


class WorkshopDatabase:
    """Convenience facade bundling SQLite repositories for all collections."""

    def __init__(self, path: str, *, max_record_size: int = DEFAULT_MAX_RECORD_SIZE) -> None:
        connection = sqlite3.connect(path, check_same_thread=False)
        self._connection = connection
        self.counter = SQLiteCounter(connection)
        self.workshops = SQLiteRepository[Workshop](
            connection, "workshops", max_record_size=max_record_size
        )
        self.projects = SQLiteRepository[Project](
            connection, "projects", max_record_size=max_record_size
        )
        self.employees = SQLiteRepository[Employee](
            connection, "employees", max_record_size=max_record_size
        )
        self.expenses = SQLiteRepository[Expense](
            connection, "expenses", max_record_size=max_record_size
        )
        self.inventory = SQLiteRepository[InventoryItem](
            connection, "inventory", max_record_size=max_record_size
        )
        logger.info("database_opened", extra={"database_path": path})

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "WorkshopDatabase":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[BaseException],
    ) -> None:
        self.close()


__all__ = [
    "SQLiteRepository",
    "SQLiteCounter",
    "WorkshopDatabase",
    "encode_record",
    "decode_record",
    "is_storable_key",
    "SQLITE_MAX_KEY",
    "DEFAULT_MAX_RECORD_SIZE",
]
