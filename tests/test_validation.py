"""Payload checks: required fields, positive amounts, loose email rule."""

import pytest

from workshop_ledger.domain import (
    AddEmployeePayload,
    CreateProjectPayload,
    CreateWorkshopPayload,
    MessageKind,
    RecordExpensePayload,
    UpdateInventoryPayload,
)
from workshop_ledger.validation import (
    MAX_QUANTITY,
    check_employee,
    check_expense,
    check_inventory,
    check_project,
    check_workshop,
    is_email_valid,
)


def workshop_payload(**overrides):
    fields = {"name": "Oak & Co", "contact": "555-0100", "email": "a@b.com"}
    fields.update(overrides)
    return CreateWorkshopPayload(**fields)


def test_valid_workshop_passes():
    assert check_workshop(workshop_payload()) is None


@pytest.mark.parametrize("field", ["name", "contact", "email"])
@pytest.mark.parametrize("value", ["", "   "])
def test_workshop_required_fields(field, value):
    problem = check_workshop(workshop_payload(**{field: value}))
    assert problem.kind is MessageKind.INVALID_PAYLOAD
    assert problem.text == "Required fields are missing."


@pytest.mark.parametrize(
    "email, accepted",
    [
        ("a@b.com", True),
        ("first.last@host", True),
        (".@", True),
        ("ab.com", False),
        ("a@bcom", False),
    ],
)
def test_email_rule_only_looks_for_at_and_dot(email, accepted):
    assert is_email_valid(email) is accepted


def test_workshop_bad_email_message():
    problem = check_workshop(workshop_payload(email="nobody"))
    assert problem.text == "Invalid email address."


def test_project_rules():
    good = CreateProjectPayload(workshop_id=1, name="Table", description="Oak", cost_estimate=1.0)
    assert check_project(good) is None
    for bad in (
        CreateProjectPayload(workshop_id=1, name="", description="Oak", cost_estimate=1.0),
        CreateProjectPayload(workshop_id=1, name="Table", description="", cost_estimate=1.0),
        CreateProjectPayload(workshop_id=1, name="Table", description="Oak", cost_estimate=0.0),
        CreateProjectPayload(workshop_id=1, name="Table", description="Oak", cost_estimate=-5.0),
    ):
        assert check_project(bad).kind is MessageKind.INVALID_PAYLOAD


def test_employee_rules():
    assert check_employee(AddEmployeePayload(1, "Ann", "Joiner", 20.0)) is None
    assert check_employee(AddEmployeePayload(1, "", "Joiner", 20.0)) is not None
    assert check_employee(AddEmployeePayload(1, "Ann", "", 20.0)) is not None
    assert check_employee(AddEmployeePayload(1, "Ann", "Joiner", 0.0)) is not None


def test_expense_rules():
    assert check_expense(RecordExpensePayload(workshop_id=1, amount=0.01)) is None
    problem = check_expense(RecordExpensePayload(workshop_id=1, amount=0.0))
    assert problem.text == "Invalid expense amount"


def test_inventory_rules():
    assert check_inventory(UpdateInventoryPayload(1, "Board", 1, 2.0)) is None
    assert check_inventory(UpdateInventoryPayload(1, "Board", 0, 2.0)) is not None
    assert check_inventory(UpdateInventoryPayload(1, "Board", -3, 2.0)) is not None
    assert check_inventory(UpdateInventoryPayload(1, "Board", 1, 0.0)) is not None


NAN = float("nan")
INF = float("inf")


@pytest.mark.parametrize("amount", [NAN, INF, -INF])
def test_non_finite_amounts_are_not_positive(amount):
    assert check_expense(RecordExpensePayload(workshop_id=1, amount=amount)) is not None
    assert check_project(CreateProjectPayload(1, "Table", "Oak", amount)) is not None
    assert check_employee(AddEmployeePayload(1, "Ann", "Joiner", amount)) is not None
    assert check_inventory(UpdateInventoryPayload(1, "Board", 1, amount)) is not None


def test_quantity_limited_to_unsigned_64_bit():
    assert check_inventory(UpdateInventoryPayload(1, "Board", MAX_QUANTITY, 1.0)) is None
    assert check_inventory(UpdateInventoryPayload(1, "Board", MAX_QUANTITY + 1, 1.0)) is not None
    assert check_inventory(UpdateInventoryPayload(1, "Board", 10**400, 1.0)) is not None
