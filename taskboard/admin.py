from typing import Any, ClassVar

from django.contrib import admin
from django.forms import ModelForm
from django.http import HttpRequest

from .models import Task
from .repository import DjangoTaskRepository
from .validation import EDITABLE_FIELDS


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for tasks. Saves go through the repository so rules still apply."""

    list_display: ClassVar[list[str]] = [
        "title",
        "completed",
        "created_at",
        "updated_at",
    ]
    list_filter: ClassVar[list[str]] = ["completed"]
    search_fields: ClassVar[list[str]] = ["title"]
    readonly_fields: ClassVar[list[str]] = ["id", "created_at", "updated_at"]
    fields: ClassVar[list[str]] = [*EDITABLE_FIELDS, *readonly_fields]

    def save_model(
        self, request: HttpRequest, obj: Task, form: ModelForm, change: bool
    ) -> None:
        """Create or update through DjangoTaskRepository, then sync ``obj``."""
        repository = DjangoTaskRepository(
            options={"DATABASE": obj._state.db or "default"}
        )
        values: dict[str, Any] = {
            name: form.cleaned_data[name] for name in EDITABLE_FIELDS
        }
        # an empty textarea means no description
        values["description"] = values["description"] or None
        if change:
            task = repository.update(obj.pk, **values)
        else:
            task = repository.create(**values)
        obj.pk = task.id
        obj.created_at = task.created_at
        obj.updated_at = task.updated_at
        obj._state.adding = False
        obj._state.db = repository.using
