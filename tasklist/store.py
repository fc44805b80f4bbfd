"""
Task Store — In-Memory Task Collection
========================================
Holds every task in a single ordered sequence and exposes validated
create / read / update / delete operations.

Components:
    Task           — One titled, completable to-do item
    StoreResult    — Tagged success/failure value returned by every operation
    TaskStore      — The owned, lock-guarded collection

Errors are returned, not raised:
    result = store.add_task({"title": "Buy milk"})
    if result.ok:
        task = result.value
    else:
        handle(result.error)       # ValidationError / NotFoundError

Callers that prefer exceptions use result.unwrap().
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_FILTERS = ("all", "active", "done")

# Fields a patch may never overwrite
_PROTECTED_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


# ─────────────────────────────────────────────────────────────
#  Errors
# ─────────────────────────────────────────────────────────────

class TaskStoreError(Exception):
    """Base class for task store failures."""
    pass


class ValidationError(TaskStoreError):
    """Missing or invalid input."""
    pass


class NotFoundError(TaskStoreError):
    """No task with the given id."""
    pass


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ─────────────────────────────────────────────────────────────
#  Task
# ─────────────────────────────────────────────────────────────

@dataclass
class Task:
    """A single to-do item.

    `id` and `created_at` never change once the task is stored;
    `updated_at` stays None until the first update.
    """

    id: int
    title: str
    completed: bool = False
    created_at: str = field(default_factory=utc_timestamp)
    updated_at: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to the camelCase JSON shape served over HTTP."""
        data = {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "createdAt": self.created_at,
        }
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at
        return data


# ─────────────────────────────────────────────────────────────
#  Result
# ─────────────────────────────────────────────────────────────

@dataclass
class StoreResult(Generic[T]):
    """Outcome of a store operation: a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[TaskStoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T = None) -> StoreResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TaskStoreError) -> StoreResult[T]:
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value


# ─────────────────────────────────────────────────────────────
#  Validation helpers
# ─────────────────────────────────────────────────────────────

def _valid_title(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _valid_id(value: Any) -> bool:
    # bool is an int subclass; True is not a task id
    return isinstance(value, int) and not isinstance(value, bool)


# ─────────────────────────────────────────────────────────────
#  Task Store
# ─────────────────────────────────────────────────────────────

class TaskStore:
    """In-memory ordered collection of tasks.

    Every operation takes the instance lock, so one store can be shared
    by any number of callers, whether they run on an event loop or on
    worker threads. Returned tasks are copies; mutating them does not
    touch the stored record.
    """

    def __init__(self):
        self._tasks: list[Task] = []
        self._lock = threading.RLock()
        self._next = 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # ─── Internal ─────────────────────────────────────────

    def _find_index(self, task_id: Any) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return -1

    def _next_id(self) -> int:
        task_id = self._next
        self._next += 1
        return task_id

    def _not_found(self, task_id: Any) -> StoreResult:
        return StoreResult.failure(NotFoundError(f"task {task_id} not found"))

    # ─── Queries ──────────────────────────────────────────

    def list_tasks(self, status: str = "all") -> StoreResult[list[Task]]:
        """All tasks in insertion order, optionally filtered by status.

        status: "all", "active" (not completed) or "done" (completed).
        """
        if status not in STATUS_FILTERS:
            return StoreResult.failure(ValidationError(
                f"status must be one of: {', '.join(STATUS_FILTERS)}"
            ))
        with self._lock:
            tasks = [replace(t) for t in self._tasks]
        if status == "active":
            tasks = [t for t in tasks if not t.completed]
        elif status == "done":
            tasks = [t for t in tasks if t.completed]
        return StoreResult.success(tasks)

    def get_task(self, task_id: Any) -> StoreResult[Task]:
        with self._lock:
            index = self._find_index(task_id)
            if index < 0:
                return self._not_found(task_id)
            return StoreResult.success(replace(self._tasks[index]))

    # ─── Mutations ────────────────────────────────────────

    def add_task(self, candidate: dict) -> StoreResult[Task]:
        """Validate and append a new task.

        Only `title` is required. A caller-supplied integer `id` is kept;
        otherwise the next counter value is assigned. `completed` always
        starts False regardless of the candidate.
        """
        if not isinstance(candidate, dict) or not _valid_title(candidate.get("title")):
            return StoreResult.failure(ValidationError("title is required"))

        with self._lock:
            task_id = candidate.get("id")
            if task_id is None:
                task_id = self._next_id()
            elif not _valid_id(task_id):
                return StoreResult.failure(ValidationError("id must be an integer"))
            elif self._find_index(task_id) >= 0:
                return StoreResult.failure(ValidationError(f"task {task_id} already exists"))

            task = Task(id=task_id, title=candidate["title"])
            self._tasks.append(task)
            self._next = max(self._next, task_id + 1)

        logger.info("Task created id=%s", task.id)
        return StoreResult.success(replace(task))

    def update_task(self, task_id: Any, patch: dict) -> StoreResult[Task]:
        """Merge `patch` onto an existing task and stamp `updatedAt`.

        `id`, `createdAt` and `updatedAt` in the patch are discarded.
        Unknown keys are ignored. An invalid `title` or `completed`
        rejects the whole patch.
        """
        with self._lock:
            index = self._find_index(task_id)
            if index < 0:
                return self._not_found(task_id)

            if not isinstance(patch, dict):
                return StoreResult.failure(ValidationError("patch must be an object"))
            changes = {k: v for k, v in patch.items() if k not in _PROTECTED_FIELDS}
            if "title" in changes and not _valid_title(changes["title"]):
                return StoreResult.failure(ValidationError("title must be a non-empty string"))
            if "completed" in changes and not isinstance(changes["completed"], bool):
                return StoreResult.failure(ValidationError("completed must be a boolean"))

            task = self._tasks[index]
            if "title" in changes:
                task.title = changes["title"]
            if "completed" in changes:
                task.completed = changes["completed"]
            task.updated_at = utc_timestamp()
            updated = replace(task)

        logger.info("Task updated id=%s fields=%s", task_id, sorted(changes))
        return StoreResult.success(updated)

    def delete_task(self, task_id: Any) -> StoreResult[bool]:
        with self._lock:
            index = self._find_index(task_id)
            if index < 0:
                return self._not_found(task_id)
            del self._tasks[index]

        logger.info("Task deleted id=%s", task_id)
        return StoreResult.success(True)

    def clear(self) -> StoreResult[bool]:
        """Drop every task. Used to reset state between test runs."""
        with self._lock:
            self._tasks.clear()
        logger.debug("Task store cleared")
        return StoreResult.success(True)
