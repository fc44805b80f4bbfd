"""
Task List — Minimal In-Memory Task REST API
=============================================
A task store with validated CRUD operations and a FastAPI routing layer.

Architecture:
    Store    — In-memory ordered task collection (tasklist.store)
    Server   — HTTP routes mapped onto the store (tasklist.server)
    Config   — Environment-driven settings (tasklist.config)
    CLI      — `tasklist start` / `tasklist routes` (tasklist.cli)
"""

__version__ = "0.1.0"

from tasklist.store import (
    Task, TaskStore, StoreResult,
    TaskStoreError, ValidationError, NotFoundError,
)

__all__ = [
    "Task", "TaskStore", "StoreResult",
    "TaskStoreError", "ValidationError", "NotFoundError",
]
