"""Errors raised by task repositories.

The repository raises these and never translates them. Turning them into
HTTP responses is the job of ``taskboard.views``.
"""


class TaskError(Exception):
    """Base class for every error raised by a task repository."""


class ValidationError(TaskError):
    """Input fails a field constraint."""

    def __init__(self, field: str, message: str) -> None:
        """Store the offending field name and the rule message."""
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(TaskError):
    """No task has the requested id."""

    def __init__(self, task_id: str) -> None:
        """Store the id that was looked up."""
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class StorageError(TaskError):
    """The persistence layer failed. Not recoverable locally."""
