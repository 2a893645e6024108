"""Record-keeping backend for woodworking workshops.

This package provides data models, in-memory and SQLite persistence, and a
service layer covering workshops, their projects, staff, expenses and
inventory, plus aggregate queries scoped to a workshop.
"""

from .allocator import IdAllocator, IdAllocatorError
from .domain import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    Employee,
    Expense,
    InventoryItem,
    Message,
    MessageKind,
    Project,
    ProjectStatus,
    RecordExpensePayload,
    Result,
    UpdateInventoryPayload,
    Workshop,
)
from .services import WorkshopService

__all__ = [
    "IdAllocator",
    "IdAllocatorError",
    "AddEmployeePayload",
    "CreateProjectPayload",
    "CreateWorkshopPayload",
    "Employee",
    "Expense",
    "InventoryItem",
    "Message",
    "MessageKind",
    "Project",
    "ProjectStatus",
    "RecordExpensePayload",
    "Result",
    "UpdateInventoryPayload",
    "Workshop",
    "WorkshopService",
]
