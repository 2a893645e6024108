"""Core data structures for the workshop ledger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ProjectStatus(str, Enum):
    """Lifecycle stages for a workshop project."""

    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELED = "canceled"


class MessageKind(str, Enum):
    """Tags carried by status and failure messages."""

    SUCCESS = "Success"
    ERROR = "Error"
    NOT_FOUND = "NotFound"
    INVALID_PAYLOAD = "InvalidPayload"


@dataclass(slots=True)
class Workshop:
    """Workshop master data. Root of every other record."""

    id: int
    name: str
    location: str
    owner: str
    contact: str
    email: str
    created_at: datetime


@dataclass(slots=True)
class Project:
    """A job taken on by a workshop."""

    id: int
    workshop_id: int
    name: str
    description: str
    deadline: Optional[datetime]
    cost_estimate: float
    status: ProjectStatus = ProjectStatus.ONGOING


@dataclass(slots=True)
class Employee:
    id: int
    workshop_id: int
    name: str
    role: str
    hourly_rate: float
    is_active: bool = True


@dataclass(slots=True)
class Expense:
    """A booked cost for a workshop."""

    id: int
    workshop_id: int
    date: datetime
    category: str
    amount: float
    description: str = ""


@dataclass(slots=True)
class InventoryItem:
    """A stock entry recorded for a workshop."""

    id: int
    workshop_id: int
    item_name: str
    quantity: int
    unit_price: float
    restock_date: datetime

    @property
    def value(self) -> float:
        return self.quantity * self.unit_price


# ----------------------------------------------------------------------
# Operation payloads
# ----------------------------------------------------------------------
@dataclass(slots=True)
class CreateWorkshopPayload:
    name: str
    contact: str
    email: str
    location: str = ""
    owner: str = ""


@dataclass(slots=True)
class CreateProjectPayload:
    workshop_id: int
    name: str
    description: str
    cost_estimate: float
    deadline: Optional[datetime] = None


@dataclass(slots=True)
class AddEmployeePayload:
    workshop_id: int
    name: str
    role: str
    hourly_rate: float


@dataclass(slots=True)
class RecordExpensePayload:
    workshop_id: int
    amount: float
    category: str = ""
    description: str = ""


@dataclass(slots=True)
class UpdateInventoryPayload:
    workshop_id: int
    item_name: str
    quantity: int
    unit_price: float


# ----------------------------------------------------------------------
# Operation results
# ----------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Message:
    """Tagged status or failure text returned to callers."""

    kind: MessageKind
    text: str

    @classmethod
    def success(cls, text: str) -> "Message":
        return cls(MessageKind.SUCCESS, text)

    @classmethod
    def error(cls, text: str) -> "Message":
        return cls(MessageKind.ERROR, text)

    @classmethod
    def not_found(cls, text: str) -> "Message":
        return cls(MessageKind.NOT_FOUND, text)

    @classmethod
    def invalid_payload(cls, text: str) -> "Message":
        return cls(MessageKind.INVALID_PAYLOAD, text)


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service operation.

    Holds either the produced value or the failure message, never both.
    Callers branch on ``is_success`` or on ``error.kind``.
    """

    value: Optional[T] = None
    error: Optional[Message] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, message: Message) -> "Result[T]":
        return cls(error=message)

    @property
    def is_success(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise ``ValueError`` carrying the failure text."""

        if self.error is not None:
            raise ValueError(f"{self.error.kind.value}: {self.error.text}")
        return self.value  # type: ignore[return-value]


__all__ = [
    "ProjectStatus",
    "MessageKind",
    "Workshop",
    "Project",
    "Employee",
    "Expense",
    "InventoryItem",
    "CreateWorkshopPayload",
    "CreateProjectPayload",
    "AddEmployeePayload",
    "RecordExpensePayload",
    "UpdateInventoryPayload",
    "Message",
    "Result",
]
