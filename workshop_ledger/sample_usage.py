"""Demonstration script for the workshop ledger."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pprint import pprint

from . import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    RecordExpensePayload,
    UpdateInventoryPayload,
    WorkshopService,
)


def main() -> None:
    ledger = WorkshopService()

    workshop = ledger.create_workshop(
        CreateWorkshopPayload(
            name="Oak & Co",
            contact="555-0100",
            email="a@b.com",
            location="Mill Lane 4",
            owner="R. Carver",
        )
    ).unwrap()

    project = ledger.create_project(
        CreateProjectPayload(
            workshop_id=workshop.id,
            name="Dining table",
            description="Solid oak table for eight",
            cost_estimate=250.0,
            deadline=datetime.now(timezone.utc) + timedelta(days=21),
        )
    ).unwrap()
    print(f"Project {project.id}: {project.name} ({project.status.value})")

    ledger.add_employee(
        AddEmployeePayload(
            workshop_id=workshop.id,
            name="J. Joiner",
            role="Cabinet maker",
            hourly_rate=32.5,
        )
    )

    for amount, category in ((40.0, "Timber"), (10.5, "Finishes")):
        ledger.record_expense(
            RecordExpensePayload(
                workshop_id=workshop.id,
                amount=amount,
                category=category,
            )
        )
    print(f"Total expenses: {ledger.calculate_total_expenses(workshop.id).unwrap():.2f}")

    ledger.update_inventory(
        UpdateInventoryPayload(
            workshop_id=workshop.id,
            item_name="Oak board 2m",
            quantity=12,
            unit_price=18.0,
        )
    )
    print(f"Inventory value: {ledger.calculate_inventory_value(workshop.id).unwrap():.2f}")

    missing = ledger.calculate_total_expenses(999)
    print(f"Unknown workshop: {missing.error.kind.value}")  # type: ignore[union-attr]

    print("\nWorkshops")
    pprint(ledger.list_workshops())


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
