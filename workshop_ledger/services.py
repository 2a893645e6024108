"""Service layer that implements the workshop ledger operations."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Protocol, Tuple, TypeVar

from .allocator import IdAllocator
from .domain import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    Employee,
    Expense,
    InventoryItem,
    Message,
    Project,
    ProjectStatus,
    RecordExpensePayload,
    Result,
    UpdateInventoryPayload,
    Workshop,
)
from .repository import InMemoryCounter, InMemoryRepository
from .validation import (
    check_employee,
    check_expense,
    check_inventory,
    check_project,
    check_workshop,
    is_blank,
)

T = TypeVar("T")

WORKSHOP_NOT_FOUND = "Workshop not found"

logger = logging.getLogger(__name__)


class Collection(Protocol[T]):
    def __contains__(self, item_id: object) -> bool: ...

    def __len__(self) -> int: ...

    def add(self, item_id: int, item: T) -> None: ...

    def upsert(self, item_id: int, item: T) -> None: ...

    def find(self, item_id: int) -> Optional[T]: ...

    def remove(self, item_id: int) -> Optional[T]: ...

    def items(self) -> Iterable[Tuple[int, T]]: ...

    def list(self) -> List[T]: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkshopService:
    """Facade that exposes the ledger use-cases to clients.

    Every operation runs under one re-entrant lock covering the five
    collections and the id allocator, so a mutation is never observed half
    done and two requests never consume the same id.
    """

    def __init__(
        self,
        workshop_repo: Optional[Collection[Workshop]] = None,
        project_repo: Optional[Collection[Project]] = None,
        employee_repo: Optional[Collection[Employee]] = None,
        expense_repo: Optional[Collection[Expense]] = None,
        inventory_repo: Optional[Collection[InventoryItem]] = None,
        *,
        allocator: Optional[IdAllocator] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.workshops = workshop_repo if workshop_repo is not None else InMemoryRepository()
        self.projects = project_repo if project_repo is not None else InMemoryRepository()
        self.employees = employee_repo if employee_repo is not None else InMemoryRepository()
        self.expenses = expense_repo if expense_repo is not None else InMemoryRepository()
        self.inventory = inventory_repo if inventory_repo is not None else InMemoryRepository()
        self.allocator = allocator or IdAllocator(InMemoryCounter())
        self._clock = clock
        self._lock = threading.RLock()

    def _reject(self, operation: str, message: Message) -> Result:
        logger.info(
            "%s rejected: %s",
            operation,
            message.text,
            extra={"error_kind": message.kind.value},
        )
        return Result.failure(message)

    def _workshop_missing(self, operation: str, workshop_id: int) -> Result:
        return self._reject(
            operation, Message.not_found(f"{WORKSHOP_NOT_FOUND}: {workshop_id}")
        )

    # ------------------------------------------------------------------
    # Workshops
    # ------------------------------------------------------------------
    def create_workshop(self, payload: CreateWorkshopPayload) -> Result[Workshop]:
        problem = check_workshop(payload)
        if problem is not None:
            return self._reject("create_workshop", problem)
        with self._lock:
            workshop = Workshop(
                id=self.allocator.next_id(),
                name=payload.name,
                location=payload.location,
                owner=payload.owner,
                contact=payload.contact,
                email=payload.email,
                created_at=self._clock(),
            )
            self.workshops.add(workshop.id, workshop)
        logger.info(
            "workshop_created",
            extra={"entity": "workshop", "record_id": workshop.id},
        )
        return Result.success(workshop)

    def delete_workshop(self, workshop_id: int) -> Result[Message]:
        """Remove a workshop; its projects, staff, expenses and stock stay."""

        with self._lock:
            removed = self.workshops.remove(workshop_id)
        if removed is None:
            return self._workshop_missing("delete_workshop", workshop_id)
        logger.info(
            "workshop_deleted",
            extra={"entity": "workshop", "record_id": workshop_id},
        )
        return Result.success(Message.success("Workshop deleted successfully."))

    def list_workshops(self) -> List[Workshop]:
        with self._lock:
            return self.workshops.list()

    def get_workshop_by_id(self, workshop_id: int) -> Result[Workshop]:
        with self._lock:
            workshop = self.workshops.find(workshop_id)
        if workshop is None:
            return Result.failure(Message.not_found(f"{WORKSHOP_NOT_FOUND}: {workshop_id}"))
        return Result.success(workshop)

    def count_workshops(self) -> int:
        with self._lock:
            return len(self.workshops)

    def update_workshop_details(
        self,
        workshop_id: int,
        name: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Result[Message]:
        """Replace name and/or location; blank values leave a field untouched."""

        with self._lock:
            workshop = self.workshops.find(workshop_id)
            if workshop is None:
                return self._workshop_missing("update_workshop_details", workshop_id)
            if not is_blank(name):
                workshop.name = name  # type: ignore[assignment]
            if not is_blank(location):
                workshop.location = location  # type: ignore[assignment]
            self.workshops.upsert(workshop.id, workshop)
        return Result.success(Message.success("Workshop details updated successfully."))

    # ------------------------------------------------------------------
    # Child records
    # ------------------------------------------------------------------
    def create_project(self, payload: CreateProjectPayload) -> Result[Project]:
        problem = check_project(payload)
        if problem is not None:
            return self._reject("create_project", problem)
        with self._lock:
            if payload.workshop_id not in self.workshops:
                return self._workshop_missing("create_project", payload.workshop_id)
            project = Project(
                id=self.allocator.next_id(),
                workshop_id=payload.workshop_id,
                name=payload.name,
                description=payload.description,
                deadline=payload.deadline,
                cost_estimate=payload.cost_estimate,
                status=ProjectStatus.ONGOING,
            )
            self.projects.add(project.id, project)
        logger.info(
            "project_created",
            extra={
                "entity": "project",
                "record_id": project.id,
                "workshop_id": project.workshop_id,
            },
        )
        return Result.success(project)

    def add_employee(self, payload: AddEmployeePayload) -> Result[Employee]:
        problem = check_employee(payload)
        if problem is not None:
            return self._reject("add_employee", problem)
        with self._lock:
            if payload.workshop_id not in self.workshops:
                return self._workshop_missing("add_employee", payload.workshop_id)
            employee = Employee(
                id=self.allocator.next_id(),
                workshop_id=payload.workshop_id,
                name=payload.name,
                role=payload.role,
                hourly_rate=payload.hourly_rate,
                is_active=True,
            )
            self.employees.add(employee.id, employee)
        logger.info(
            "employee_added",
            extra={
                "entity": "employee",
                "record_id": employee.id,
                "workshop_id": employee.workshop_id,
            },
        )
        return Result.success(employee)

    def record_expense(self, payload: RecordExpensePayload) -> Result[Expense]:
        problem = check_expense(payload)
        if problem is not None:
            return self._reject("record_expense", problem)
        with self._lock:
            if payload.workshop_id not in self.workshops:
                return self._workshop_missing("record_expense", payload.workshop_id)
            expense = Expense(
                id=self.allocator.next_id(),
                workshop_id=payload.workshop_id,
                date=self._clock(),
                category=payload.category,
                amount=payload.amount,
                description=payload.description,
            )
            self.expenses.add(expense.id, expense)
        logger.info(
            "expense_recorded",
            extra={
                "entity": "expense",
                "record_id": expense.id,
                "workshop_id": expense.workshop_id,
            },
        )
        return Result.success(expense)

    def update_inventory(self, payload: UpdateInventoryPayload) -> Result[InventoryItem]:
        """Book a stock entry. Always inserts a new item, even for a known name."""

        problem = check_inventory(payload)
        if problem is not None:
            return self._reject("update_inventory", problem)
        with self._lock:
            if payload.workshop_id not in self.workshops:
                return self._workshop_missing("update_inventory", payload.workshop_id)
            item = InventoryItem(
                id=self.allocator.next_id(),
                workshop_id=payload.workshop_id,
                item_name=payload.item_name,
                quantity=payload.quantity,
                unit_price=payload.unit_price,
                restock_date=self._clock(),
            )
            self.inventory.add(item.id, item)
        logger.info(
            "inventory_recorded",
            extra={
                "entity": "inventory",
                "record_id": item.id,
                "workshop_id": item.workshop_id,
            },
        )
        return Result.success(item)

    def list_projects(self, workshop_id: Optional[int] = None) -> List[Project]:
        return self._list_children(self.projects, workshop_id)

    def list_employees(self, workshop_id: Optional[int] = None) -> List[Employee]:
        return self._list_children(self.employees, workshop_id)

    def list_expenses(self, workshop_id: Optional[int] = None) -> List[Expense]:
        return self._list_children(self.expenses, workshop_id)

    def list_inventory(self, workshop_id: Optional[int] = None) -> List[InventoryItem]:
        return self._list_children(self.inventory, workshop_id)

    def _list_children(self, collection: Collection[T], workshop_id: Optional[int]) -> List[T]:
        # No parent check: records of deleted workshops are still listed.
        with self._lock:
            records = collection.list()
        if workshop_id is None:
            return records
        return [record for record in records if record.workshop_id == workshop_id]  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def calculate_total_expenses(self, workshop_id: int) -> Result[float]:
        with self._lock:
            if workshop_id not in self.workshops:
                return Result.failure(Message.not_found(f"{WORKSHOP_NOT_FOUND}: {workshop_id}"))
            total = 0.0
            for _, expense in self.expenses.items():
                if expense.workshop_id == workshop_id:
                    total += expense.amount
        return Result.success(total)

    def calculate_inventory_value(self, workshop_id: int) -> Result[float]:
        with self._lock:
            if workshop_id not in self.workshops:
                return Result.failure(Message.not_found(f"{WORKSHOP_NOT_FOUND}: {workshop_id}"))
            total = 0.0
            for _, item in self.inventory.items():
                if item.workshop_id == workshop_id:
                    total += item.value
        return Result.success(total)


__all__ = ["WorkshopService", "Collection", "utc_now", "WORKSHOP_NOT_FOUND"]
