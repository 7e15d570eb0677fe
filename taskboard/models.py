from typing import ClassVar

from django.db import models


class Task(models.Model):
    """Row in the ``tasks`` table.

    Rows are written by ``DjangoTaskRepository``, which assigns the id and
    both timestamps, so none of these fields carry ORM defaults for them.
    """

    id = models.CharField(primary_key=True, max_length=32, editable=False)
    title = models.TextField()
    description = models.TextField(null=True, blank=True)
    completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(editable=False)
    updated_at = models.DateTimeField(editable=False)

    class Meta:
        db_table = "tasks"
        ordering: ClassVar[list[str]] = ["created_at", "id"]
        indexes: ClassVar[list[models.Index]] = [
            models.Index(fields=["completed"], name="idx_tasks_completed"),
            models.Index(fields=["created_at"], name="idx_tasks_created_at"),
        ]

    def __str__(self) -> str:
        return self.title
