"""Request bodies accepted by the HTTP interface.

Only the wire shape is checked here. Business rules (blank names, positive
amounts) stay with the service so HTTP callers and Python callers get the
same answers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..domain import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    RecordExpensePayload,
    UpdateInventoryPayload,
)


class WorkshopCreate(BaseModel):
    name: str
    contact: str
    email: str
    location: str = ""
    owner: str = ""

    def to_payload(self) -> CreateWorkshopPayload:
        return CreateWorkshopPayload(
            name=self.name,
            contact=self.contact,
            email=self.email,
            location=self.location,
            owner=self.owner,
        )


class WorkshopUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None


class ProjectCreate(BaseModel):
    workshop_id: int
    name: str
    description: str
    cost_estimate: float
    deadline: Optional[datetime] = None

    def to_payload(self) -> CreateProjectPayload:
        return CreateProjectPayload(
            workshop_id=self.workshop_id,
            name=self.name,
            description=self.description,
            cost_estimate=self.cost_estimate,
            deadline=self.deadline,
        )


class EmployeeCreate(BaseModel):
    workshop_id: int
    name: str
    role: str
    hourly_rate: float

    def to_payload(self) -> AddEmployeePayload:
        return AddEmployeePayload(
            workshop_id=self.workshop_id,
            name=self.name,
            role=self.role,
            hourly_rate=self.hourly_rate,
        )


class ExpenseCreate(BaseModel):
    workshop_id: int
    amount: float
    category: str = ""
    description: str = ""

    def to_payload(self) -> RecordExpensePayload:
        return RecordExpensePayload(
            workshop_id=self.workshop_id,
            amount=self.amount,
            category=self.category,
            description=self.description,
        )


class InventoryCreate(BaseModel):
    workshop_id: int
    item_name: str
    quantity: int
    unit_price: float

    def to_payload(self) -> UpdateInventoryPayload:
        return UpdateInventoryPayload(
            workshop_id=self.workshop_id,
            item_name=self.item_name,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )
