"""
Task List Server — HTTP Routing Layer
======================================
FastAPI application that maps HTTP verbs and paths onto a TaskStore and
translates store errors into status codes.

Launch:
    python -m tasklist.cli start        # Via CLI
    python run.py start                 # Via runner

Endpoints:
    GET    /                → Welcome banner (text)
    GET    /tasks           → All tasks (?status=all|active|done)
    GET    /tasks/{id}      → One task, 404 if absent
    POST   /tasks           → Create, 201 / 400
    PUT    /tasks/{id}      → Update, 200 / 404 / 400
    DELETE /tasks/{id}      → Delete, 204 / 404
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel, ConfigDict

from tasklist import __version__
from tasklist.config import Settings
from tasklist.store import NotFoundError, StoreResult, TaskStore

logger = logging.getLogger(__name__)

WELCOME_BANNER = "Welcome to the Task List API!"

ROUTES = [
    ("GET", "/", "Welcome banner"),
    ("GET", "/tasks", "List tasks (?status=all|active|done)"),
    ("GET", "/tasks/{id}", "Get a task by id"),
    ("POST", "/tasks", "Create a task"),
    ("PUT", "/tasks/{id}", "Update a task"),
    ("DELETE", "/tasks/{id}", "Delete a task"),
]


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class TaskCreate(BaseModel):
    """New task. Strict, so "7" is not an id and 1 is not a title."""

    model_config = ConfigDict(strict=True)

    title: Optional[str] = None
    id: Optional[int] = None


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def _parse_id(raw: str) -> Optional[int]:
    """Path ids are numeric; anything else can never match a task."""
    try:
        return int(raw)
    except ValueError:
        return None


def _dispatch(operation: Callable[..., StoreResult], *args: Any) -> Any:
    """Run a store operation and return its value, or raise HTTPException.

    NotFoundError → 404. Every other failure, expected or not → 400.
    """
    try:
        result = operation(*args)
    except Exception as e:
        logger.exception("Store operation %s failed", operation.__name__)
        raise HTTPException(status_code=400, detail=str(e))

    if result.ok:
        return result.value

    status = 404 if isinstance(result.error, NotFoundError) else 400
    logger.warning("%s → %d: %s", operation.__name__, status, result.error)
    raise HTTPException(status_code=status, detail=str(result.error))


def _not_found(raw_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"task {raw_id} not found")


# ─────────────────────────────────────────────────────────────
#  Routes
# ─────────────────────────────────────────────────────────────

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def index():
    return WELCOME_BANNER


@router.get("/tasks")
async def list_tasks(status: str = "all", store: TaskStore = Depends(get_store)):
    tasks = _dispatch(store.list_tasks, status)
    return JSONResponse([t.to_dict() for t in tasks])


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    parsed = _parse_id(task_id)
    if parsed is None:
        raise _not_found(task_id)
    task = _dispatch(store.get_task, parsed)
    return JSONResponse(task.to_dict())


@router.post("/tasks")
async def create_task(body: TaskCreate, store: TaskStore = Depends(get_store)):
    task = _dispatch(store.add_task, body.model_dump(exclude_none=True))
    return JSONResponse(task.to_dict(), status_code=201)


@router.put("/tasks/{task_id}")
async def update_task(task_id: str, body: Any = Body(...), store: TaskStore = Depends(get_store)):
    # Raw JSON goes straight to the store, which checks the id exists
    # before it validates the patch.
    parsed = _parse_id(task_id)
    if parsed is None:
        raise _not_found(task_id)
    task = _dispatch(store.update_task, parsed, body)
    return JSONResponse(task.to_dict())


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    parsed = _parse_id(task_id)
    if parsed is None:
        raise _not_found(task_id)
    _dispatch(store.delete_task, parsed)
    return Response(status_code=204)


async def _validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors: 400, not FastAPI's default 422."""
    errors = exc.errors()
    message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    logger.warning("%s %s → 400: %s", request.method, request.url.path, message)
    return JSONResponse({"detail": message}, status_code=400)


# ─────────────────────────────────────────────────────────────
#  App Setup
# ─────────────────────────────────────────────────────────────

def create_app(store: Optional[TaskStore] = None) -> FastAPI:
    """Build the application around `store` (a fresh one if omitted)."""
    app = FastAPI(title="Task List API", version=__version__)
    app.state.store = store if store is not None else TaskStore()
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _validation_error)
    return app


def run_server(settings: Settings, store: Optional[TaskStore] = None):
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    app = create_app(store)
    logger.info("Task List API listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
