"""Shared fixtures: an in-memory ledger with a frozen clock."""

import os
from datetime import datetime, timezone

import pytest

# Read once by get_settings(); must be set before the first app is built.
os.environ.setdefault("WORKSHOP_LEDGER_LOG_FORMAT", "text")
os.environ.setdefault("WORKSHOP_LEDGER_LOG_LEVEL", "WARNING")

from workshop_ledger import CreateWorkshopPayload, WorkshopService  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def service():
    return WorkshopService(clock=lambda: FIXED_NOW)


@pytest.fixture
def workshop(service):
    return service.create_workshop(
        CreateWorkshopPayload(name="Oak & Co", contact="555-0100", email="a@b.com")
    ).unwrap()
