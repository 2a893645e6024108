"""
Identifier allocation shared by every record type.

One counter issues ids for workshops, projects, employees, expenses and
inventory items alike, so an id identifies a single record across the whole
store. The counter lives in a cell (``get``/``set``); a durable cell keeps the
last issued value across restarts, so ids are never reused.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

MAX_ID = 2**64 - 1


class CounterCell(Protocol):
    def get(self) -> int: ...

    def set(self, value: int) -> None: ...


class IdAllocatorError(RuntimeError):
    """Raised when no further identifier can be issued."""


class IdAllocator:
    """
    Issues strictly increasing identifiers starting at 1.

    Zero is never issued. The allocator holds no lock of its own; callers
    serialize access together with the collections they mutate.
    """

    def __init__(self, cell: CounterCell) -> None:
        self._cell = cell

    @property
    def last_issued(self) -> int:
        return self._cell.get()

    def next_id(self) -> int:
        current = self._cell.get()
        if current >= MAX_ID:
            raise IdAllocatorError(f"Identifier space exhausted at {current}")
        value = current + 1
        self._cell.set(value)
        logger.debug("id_allocated", extra={"record_id": value})
        return value


__all__ = ["CounterCell", "IdAllocator", "IdAllocatorError", "MAX_ID"]
