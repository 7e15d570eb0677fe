"""
Task repositories: the single owner of the task collection.

Every write goes through a repository, which validates the payload against
``taskboard.validation.TASK_RULES``, assigns ids and keeps ``created_at`` and
``updated_at`` consistent. Callers only ever receive immutable
``taskboard.entities.Task`` snapshots.

Two backends ship with the app. ``DjangoTaskRepository`` stores rows through
the ORM with one transaction per operation. ``InMemoryTaskRepository`` keeps
an ordered dict behind a lock. ``RepositoryFactory`` maps the dotted names used
in the ``TASKBOARD`` setting to backend classes and can be extended at runtime.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator, Iterable, Mapping
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from django.db import DatabaseError, transaction
from django.utils import timezone

from . import models
from .entities import Task
from .exceptions import NotFoundError, StorageError, ValidationError
from .ids import new_task_id
from .validation import EDITABLE_FIELDS, validate_task_fields


logger = logging.getLogger(__name__)


# public sort keys mapped to entity attributes / model fields
ORDER_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
}

DEFAULT_BACKEND = "taskboard.repository.DjangoTaskRepository"

# largest LIMIT/OFFSET a signed 64-bit SQL integer can carry
MAX_WINDOW = 2**63 - 1


def parse_order(order_by: str | None) -> tuple[str, bool] | None:
    """
    Resolve a public sort key like ``-createdAt`` to ``("created_at", True)``.

    Returns None when no ordering was requested. Raises ValidationError for a
    key that is not sortable.
    """
    if order_by is None:
        return None
    descending = order_by.startswith("-")
    key = order_by.removeprefix("-")
    if key not in ORDER_FIELDS:
        raise ValidationError("order", f"Unknown sort key: {key}.")
    return ORDER_FIELDS[key], descending


def check_window(limit: int | None, offset: int) -> None:
    """Reject negative or out-of-range pagination values."""
    if limit is not None and limit < 0:
        raise ValidationError("limit", "Limit must not be negative.")
    if limit is not None and limit > MAX_WINDOW:
        raise ValidationError("limit", f"Limit must not exceed {MAX_WINDOW}.")
    if offset < 0:
        raise ValidationError("offset", "Offset must not be negative.")
    if offset > MAX_WINDOW:
        raise ValidationError("offset", f"Offset must not exceed {MAX_WINDOW}.")


class TaskRepository(ABC):
    """
    Contract shared by all task storage backends.

    Operations either fully succeed or raise one of the errors from
    ``taskboard.exceptions`` with nothing changed. Backends never retry.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.clock = clock or timezone.now
        self.id_factory = id_factory or new_task_id
        self.options = dict(options or {})

    def __repr__(self) -> str:
        """String representation of the repository backend."""
        return f"<{self.__class__.__name__}>"

    @abstractmethod
    def create(self, **fields: object) -> Task:
        """Validate and persist a new task. ``title`` is required."""

    @abstractmethod
    def get(self, task_id: str) -> Task:
        """Return the task with this id. NotFoundError if there is none."""

    @abstractmethod
    def list(
        self,
        *,
        completed: bool | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Task]:
        """Tasks in insertion order unless ``order_by`` names a sort key."""

    @abstractmethod
    def count(self, *, completed: bool | None = None) -> int:
        """Number of tasks matching the ``completed`` filter."""

    @abstractmethod
    def update(self, task_id: str, **fields: object) -> Task:
        """Apply a partial change and re-stamp ``updated_at``."""

    @abstractmethod
    def delete(self, task_id: str) -> None:
        """Remove the task for good. NotFoundError if it is already gone."""

    def _new_task(self, fields: Mapping[str, object]) -> Task:
        """Build a validated, stamped task from a create payload."""
        payload = {"description": None, "completed": False, **fields}
        validate_task_fields(payload)
        now = self.clock()
        return Task(
            id=self.id_factory(),
            title=payload["title"],
            description=payload["description"],
            completed=payload["completed"],
            created_at=now,
            updated_at=now,
        )

    def _apply_update(self, current: Task, fields: Mapping[str, object]) -> Task:
        """Validate a partial payload and return the next version of ``current``."""
        validate_task_fields(fields, partial=True)
        # never let updated_at move backwards, even if the wall clock does
        updated_at = max(self.clock(), current.updated_at)
        return current.evolve(**fields, updated_at=updated_at)


class InMemoryTaskRepository(TaskRepository):
    """
    Process-local repository backed by an insertion-ordered dict.

    A single lock covers each whole read-modify-write, so a delete racing an
    update on the same id resolves in whichever order the lock is taken.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        """Number of stored tasks."""
        return len(self._tasks)

    def create(self, **fields: object) -> Task:
        task = self._new_task(fields)
        with self._lock:
            if task.id in self._tasks:
                msg = f"Duplicate task id: {task.id}"
                raise StorageError(msg)
            self._tasks[task.id] = task
        logger.debug("Task created id=%s", task.id)
        return task

    def get(self, task_id: str) -> Task:
        with self._lock:
            if (task := self._tasks.get(task_id)) is None:
                raise NotFoundError(task_id)
            return task

    def _select(self, completed: bool | None) -> Iterable[Task]:
        with self._lock:
            tasks = list(self._tasks.values())
        if completed is None:
            return tasks
        return [task for task in tasks if task.completed is completed]

    def list(
        self,
        *,
        completed: bool | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Task]:
        order = parse_order(order_by)
        check_window(limit, offset)
        tasks = list(self._select(completed))
        if order is not None:
            attr, descending = order
            tasks.sort(key=lambda task: getattr(task, attr), reverse=descending)
        end = None if limit is None else offset + limit
        return tasks[offset:end]

    def count(self, *, completed: bool | None = None) -> int:
        return len(list(self._select(completed)))

    def update(self, task_id: str, **fields: object) -> Task:
        with self._lock:
            if (current := self._tasks.get(task_id)) is None:
                raise NotFoundError(task_id)
            task = self._apply_update(current, fields)
            self._tasks[task_id] = task
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
        return task

    def delete(self, task_id: str) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                raise NotFoundError(task_id)
        logger.debug("Task deleted id=%s", task_id)


class DjangoTaskRepository(TaskRepository):
    """
    Repository over the ``tasks`` table using the Django ORM.

    Each operation runs in its own transaction on the configured database
    alias (``OPTIONS["DATABASE"]``, default ``"default"``). Updates lock the
    row first; deletes trust the affected row count. Database failures
    surface as StorageError.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.using = self.options.get("DATABASE", "default")

    def __repr__(self) -> str:
        """String representation with the database alias."""
        return f"<{self.__class__.__name__} using='{self.using}'>"

    @contextmanager
    def _storage_errors(self) -> Generator[None, None, None]:
        try:
            yield
        except DatabaseError as e:
            logger.error("Task storage failed on '%s': %s", self.using, e)
            raise StorageError(str(e)) from e

    def _rows(self) -> Any:
        return models.Task.objects.using(self.using)

    @staticmethod
    def _to_entity(row: models.Task) -> Task:
        return Task(
            id=row.id,
            title=row.title,
            description=row.description,
            completed=row.completed,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def create(self, **fields: object) -> Task:
        task = self._new_task(fields)
        with self._storage_errors(), transaction.atomic(using=self.using):
            self._rows().create(
                id=task.id,
                title=task.title,
                description=task.description,
                completed=task.completed,
                created_at=task.created_at,
                updated_at=task.updated_at,
            )
        logger.debug("Task created id=%s", task.id)
        return task

    def get(self, task_id: str) -> Task:
        with self._storage_errors():
            try:
                row = self._rows().get(pk=task_id)
            except models.Task.DoesNotExist:
                raise NotFoundError(task_id) from None
        return self._to_entity(row)

    def _select(self, completed: bool | None) -> Any:
        rows = self._rows()
        if completed is not None:
            rows = rows.filter(completed=completed)
        return rows

    def list(
        self,
        *,
        completed: bool | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Task]:
        order = parse_order(order_by)
        check_window(limit, offset)
        if order is None:
            ordering = ("created_at", "id")
        else:
            field, descending = order
            ordering = (f"-{field}" if descending else field, "id")
        with self._storage_errors():
            rows = self._select(completed).order_by(*ordering)
            rows = rows[offset:] if limit is None else rows[offset : offset + limit]
            return [self._to_entity(row) for row in rows]

    def count(self, *, completed: bool | None = None) -> int:
        with self._storage_errors():
            return self._select(completed).count()

    def update(self, task_id: str, **fields: object) -> Task:
        with self._storage_errors(), transaction.atomic(using=self.using):
            try:
                row = self._rows().select_for_update().get(pk=task_id)
            except models.Task.DoesNotExist:
                raise NotFoundError(task_id) from None
            task = self._apply_update(self._to_entity(row), fields)
            for name in EDITABLE_FIELDS:
                setattr(row, name, getattr(task, name))
            row.updated_at = task.updated_at
            row.save(using=self.using, update_fields=[*EDITABLE_FIELDS, "updated_at"])
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
        return task

    def delete(self, task_id: str) -> None:
        with self._storage_errors(), transaction.atomic(using=self.using):
            deleted, _ = self._rows().filter(pk=task_id).delete()
        if not deleted:
            raise NotFoundError(task_id)
        logger.debug("Task deleted id=%s", task_id)


class RepositoryFactory:
    """
    Creates repository backends from ``TASKBOARD``-style configuration.

    Keeps a registry of dotted backend names. Third-party backends can be
    added with ``register_backend`` before settings are loaded.
    """

    _backends: dict[str, type[TaskRepository]] = {
        "taskboard.repository.DjangoTaskRepository": DjangoTaskRepository,
        "taskboard.repository.InMemoryTaskRepository": InMemoryTaskRepository,
    }

    @classmethod
    def register_backend(cls, name: str, backend_class: type[TaskRepository]) -> None:
        """Register a new repository backend type under a dotted name."""
        cls._backends[name] = backend_class

    @classmethod
    def is_known(cls, name: str) -> bool:
        """True if a backend is registered under this name."""
        return name in cls._backends

    @classmethod
    def create_backend(cls, config: Mapping[str, Any]) -> TaskRepository:
        """
        Instantiate the backend named by ``config["BACKEND"]``.

        ``config["OPTIONS"]`` is handed to the backend unchanged. Raises
        ValueError if the backend name is not registered.
        """
        backend_name = config.get("BACKEND", DEFAULT_BACKEND)

        if backend_name not in cls._backends:
            msg = f"Unsupported backend: {backend_name}"
            raise ValueError(msg)

        return cls._backends[backend_name](options=config.get("OPTIONS", {}))
