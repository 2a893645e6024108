"""FastAPI-based JSON interface for the workshop ledger."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..allocator import IdAllocator, IdAllocatorError
from ..config import get_settings
from ..domain import Message, MessageKind, Result
from ..logging_config import setup_logging
from ..repository import RepositoryError
from ..services import WorkshopService
from ..storage import WorkshopDatabase
from .schemas import (
    EmployeeCreate,
    ExpenseCreate,
    InventoryCreate,
    ProjectCreate,
    WorkshopCreate,
    WorkshopUpdate,
)

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    MessageKind.SUCCESS: status.HTTP_200_OK,
    MessageKind.INVALID_PAYLOAD: status.HTTP_400_BAD_REQUEST,
    MessageKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    MessageKind.ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def message_body(message: Message) -> Dict[str, Any]:
    return {"kind": message.kind.value, "message": message.text}


def error_response(message: Message, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[message.kind],
        content={"error": {**message_body(message), **extra}},
    )


def to_response(result: Result, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    if not result.is_success:
        return error_response(result.error)  # type: ignore[arg-type]
    value = result.value
    if isinstance(value, Message):
        return JSONResponse(status_code=status_code, content=message_body(value))
    return JSONResponse(status_code=status_code, content=jsonable_encoder(value))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Malformed request on %s",
            request.url.path,
            extra={"path": request.url.path, "error_kind": MessageKind.INVALID_PAYLOAD.value},
        )
        details = [
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        return error_response(Message.invalid_payload("Invalid request data"), details=details)

    async def storage_error_handler(request: Request, exc: Exception):
        logger.error(
            "Storage failure on %s: %s",
            request.url.path,
            exc,
            exc_info=exc,
            extra={"path": request.url.path, "error_kind": MessageKind.ERROR.value},
        )
        return error_response(Message.error("Storage failure"))

    for exc_class in (RepositoryError, IdAllocatorError, sqlite3.Error):
        app.add_exception_handler(exc_class, storage_error_handler)


def create_app(database_path: Optional[str] = None) -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database = WorkshopDatabase(
        database_path or settings.database_path,
        max_record_size=settings.max_record_size,
    )
    service = WorkshopService(
        workshop_repo=database.workshops,
        project_repo=database.projects,
        employee_repo=database.employees,
        expense_repo=database.expenses,
        inventory_repo=database.inventory,
        allocator=IdAllocator(database.counter),
    )

    app = FastAPI(title="Workshop Ledger")
    app.state.ledger_service = service
    app.state.database = database
    register_error_handlers(app)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:  # pragma: no cover - framework hook
        database.close()

    # ------------------------------------------------------------------
    # Workshops
    # ------------------------------------------------------------------
    @app.post("/workshops")
    def create_workshop(request: Request, body: WorkshopCreate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.create_workshop(body.to_payload()), status.HTTP_201_CREATED
        )

    @app.get("/workshops")
    def list_workshops(request: Request):
        service: WorkshopService = request.app.state.ledger_service
        return jsonable_encoder(service.list_workshops())

    @app.get("/workshops/count")
    def count_workshops(request: Request):
        service: WorkshopService = request.app.state.ledger_service
        return {"count": service.count_workshops()}

    @app.get("/workshops/{workshop_id}")
    def get_workshop(request: Request, workshop_id: int):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(service.get_workshop_by_id(workshop_id))

    @app.patch("/workshops/{workshop_id}")
    def update_workshop(request: Request, workshop_id: int, body: WorkshopUpdate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.update_workshop_details(
                workshop_id, name=body.name, location=body.location
            )
        )

    @app.delete("/workshops/{workshop_id}")
    def delete_workshop(request: Request, workshop_id: int):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(service.delete_workshop(workshop_id))

    @app.get("/workshops/{workshop_id}/expenses/total")
    def total_expenses(request: Request, workshop_id: int):
        service: WorkshopService = request.app.state.ledger_service
        result = service.calculate_total_expenses(workshop_id)
        if not result.is_success:
            return to_response(result)
        return {"workshop_id": workshop_id, "total_expenses": result.value}

    @app.get("/workshops/{workshop_id}/inventory/value")
    def inventory_value(request: Request, workshop_id: int):
        service: WorkshopService = request.app.state.ledger_service
        result = service.calculate_inventory_value(workshop_id)
        if not result.is_success:
            return to_response(result)
        return {"workshop_id": workshop_id, "inventory_value": result.value}

    # ------------------------------------------------------------------
    # Child records
    # ------------------------------------------------------------------
    @app.post("/projects")
    def create_project(request: Request, body: ProjectCreate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.create_project(body.to_payload()), status.HTTP_201_CREATED
        )

    @app.get("/projects")
    def list_projects(request: Request, workshop_id: Optional[int] = None):
        service: WorkshopService = request.app.state.ledger_service
        return jsonable_encoder(service.list_projects(workshop_id))

    @app.post("/employees")
    def add_employee(request: Request, body: EmployeeCreate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.add_employee(body.to_payload()), status.HTTP_201_CREATED
        )

    @app.get("/employees")
    def list_employees(request: Request, workshop_id: Optional[int] = None):
        service: WorkshopService = request.app.state.ledger_service
        return jsonable_encoder(service.list_employees(workshop_id))

    @app.post("/expenses")
    def record_expense(request: Request, body: ExpenseCreate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.record_expense(body.to_payload()), status.HTTP_201_CREATED
        )

    @app.get("/expenses")
    def list_expenses(request: Request, workshop_id: Optional[int] = None):
        service: WorkshopService = request.app.state.ledger_service
        return jsonable_encoder(service.list_expenses(workshop_id))

    @app.post("/inventory")
    def update_inventory(request: Request, body: InventoryCreate):
        service: WorkshopService = request.app.state.ledger_service
        return to_response(
            service.update_inventory(body.to_payload()), status.HTTP_201_CREATED
        )

    @app.get("/inventory")
    def list_inventory(request: Request, workshop_id: Optional[int] = None):
        service: WorkshopService = request.app.state.ledger_service
        return jsonable_encoder(service.list_inventory(workshop_id))

    return app


__all__ = ["create_app", "register_error_handlers", "to_response"]
