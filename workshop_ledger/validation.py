"""Payload checks run before any mutation.

Each check returns ``None`` when the payload is acceptable, otherwise the
``InvalidPayload`` message to hand back. Parent existence is checked by the
service afterwards, so a malformed payload is always reported as such even
when its workshop is unknown.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from .domain import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    Message,
    RecordExpensePayload,
    UpdateInventoryPayload,
)

MAX_QUANTITY = 2**64 - 1


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_positive(value: Union[int, float]) -> bool:
    # NaN and infinities never count as positive amounts.
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0


def is_email_valid(email: str) -> bool:
    # Substring check only: "@" and "." anywhere in the address.
    return "@" in email and "." in email


def check_workshop(payload: CreateWorkshopPayload) -> Optional[Message]:
    if is_blank(payload.name) or is_blank(payload.contact) or is_blank(payload.email):
        return Message.invalid_payload("Required fields are missing.")
    if not is_email_valid(payload.email):
        return Message.invalid_payload("Invalid email address.")
    return None


def check_project(payload: CreateProjectPayload) -> Optional[Message]:
    if not payload.name or not payload.description or not is_positive(payload.cost_estimate):
        return Message.invalid_payload("Missing required fields")
    return None


def check_employee(payload: AddEmployeePayload) -> Optional[Message]:
    if not payload.name or not payload.role or not is_positive(payload.hourly_rate):
        return Message.invalid_payload("Missing required fields")
    return None


def check_expense(payload: RecordExpensePayload) -> Optional[Message]:
    if not is_positive(payload.amount):
        return Message.invalid_payload("Invalid expense amount")
    return None


def check_inventory(payload: UpdateInventoryPayload) -> Optional[Message]:
    if (
        not is_positive(payload.quantity)
        or payload.quantity > MAX_QUANTITY
        or not is_positive(payload.unit_price)
    ):
        return Message.invalid_payload("Invalid inventory data")
    return None


__all__ = [
    "is_blank",
    "is_email_valid",
    "is_positive",
    "MAX_QUANTITY",
    "check_workshop",
    "check_project",
    "check_employee",
    "check_expense",
    "check_inventory",
]
