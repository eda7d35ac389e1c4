# src/todo_list/api/app.py

"""
HTTP transport.

Thin FastAPI layer: decodes request bodies, calls one TaskService operation,
maps TaskError subclasses onto status codes. No business rules live here.

Routes (prefix /api/v1):
- POST   /todo-list/tasks            -> create_task     (204)
- PUT    /todo-list/tasks/{id}       -> update_task     (204)
- DELETE /todo-list/tasks/{id}       -> delete_task     (204)
- PUT    /todo-list/tasks/{id}/done  -> mark_task_done  (204)
- GET    /todo-list/tasks?status=    -> list_tasks_by_status (200, JSON array)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictStr
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import TaskError
from ..tasks.task_models import TaskInput, TaskStatus
from ..tasks.task_service import TaskService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class TaskPayload(BaseModel):
    """Request body for create/update. id, status and unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: StrictStr
    active_at: StrictStr = Field(alias="activeAt")

    def to_input(self) -> TaskInput:
        return TaskInput(title=self.title, active_at=self.active_at)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = str(first.get("msg", "invalid value"))
    return f"{loc}: {msg}" if loc else msg


def build_router(service: TaskService) -> APIRouter:
    router = APIRouter(prefix="/todo-list")

    # Plain (sync) endpoints: FastAPI runs them in its thread pool, one per request.

    @router.post("/tasks", status_code=204)
    def create_task(payload: TaskPayload) -> Response:
        service.create_task(payload.to_input())
        return Response(status_code=204)

    @router.put("/tasks/{task_id}", status_code=204)
    def update_task(task_id: str, payload: TaskPayload) -> Response:
        service.update_task(task_id, payload.to_input())
        return Response(status_code=204)

    @router.delete("/tasks/{task_id}", status_code=204)
    def delete_task(task_id: str) -> Response:
        service.delete_task(task_id)
        return Response(status_code=204)

    @router.put("/tasks/{task_id}/done", status_code=204)
    def mark_task_done(task_id: str) -> Response:
        service.mark_task_done(task_id)
        return Response(status_code=204)

    @router.get("/tasks")
    def list_tasks(status: str = TaskStatus.ACTIVE.value) -> JSONResponse:
        tasks = service.list_tasks_by_status(status)
        return JSONResponse(status_code=200, content=[t.to_json() for t in tasks])

    return router


def create_app(service: TaskService, *, title: str = "todo-list") -> FastAPI:
    app = FastAPI(title=title)
    app.include_router(build_router(service), prefix=API_PREFIX)

    @app.exception_handler(TaskError)
    async def _task_error(request: Request, exc: TaskError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.http_status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.info("%s %s rejected: %s", request.method, request.url.path, message)
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown routes, wrong methods, unparsable bodies.
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Runs inside ServerErrorMiddleware, which re-raises afterwards: the
    # traceback is logged by the server, not here.
    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        return _error(500, "internal error")

    return app
