from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Task:
    """Immutable snapshot of one persisted task.

    Repositories hand these out instead of live objects, so callers can read
    a task but only the repository can change it.
    """

    id: str
    title: str
    description: str | None
    completed: bool
    created_at: datetime
    updated_at: datetime

    def evolve(self, **changes: object) -> "Task":
        """Copy with the given fields replaced."""
        return replace(self, **changes)
