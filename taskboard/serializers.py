"""JSON shape of a task and parsing of request payloads."""

import json
from datetime import datetime, timezone
from typing import Any

from .entities import Task
from .exceptions import ValidationError


# keys a client may echo back from a task it fetched; silently dropped on write
READ_ONLY_FIELDS = frozenset({"id", "createdAt", "updatedAt"})

TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})


class MalformedPayload(Exception):
    """Request body is not a JSON object."""


def format_timestamp(value: datetime) -> str:
    """
    ISO-8601 in UTC with microseconds and a ``Z`` suffix.

    Full precision keeps two updates within one millisecond apart on the wire.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="microseconds").replace("+00:00", "Z")


def task_to_dict(task: Task) -> dict[str, Any]:
    """Public representation of a task."""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
        "updatedAt": format_timestamp(task.updated_at),
    }


def parse_task_payload(body: bytes) -> dict[str, Any]:
    """Decode a write payload, dropping read-only keys."""
    try:
        data = json.loads(body.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Invalid JSON: {e}"
        raise MalformedPayload(msg) from e
    if not isinstance(data, dict):
        msg = "Request body must be a JSON object."
        raise MalformedPayload(msg)
    return {key: value for key, value in data.items() if key not in READ_ONLY_FIELDS}


def parse_bool_param(name: str, raw: str | None) -> bool | None:
    """``?completed=true`` style flag. None when the parameter is absent."""
    if raw is None or raw == "":
        return None
    if (value := raw.strip().lower()) in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValidationError(name, "Must be true or false.")


def parse_int_param(name: str, raw: str | None) -> int | None:
    """Non-negative integer query parameter. None when absent."""
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(name, "Must be an integer.") from None
    if value < 0:
        raise ValidationError(name, "Must not be negative.")
    return value
