"""Field rules for task writes.

Rules are evaluated in declared order and the first failing rule wins, so
the error a client sees for a given payload is always the same one.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .exceptions import ValidationError


# Sentinel for "field not supplied at all", distinct from an explicit None
MISSING: object = object()

EDITABLE_FIELDS = ("title", "description", "completed")


@dataclass(frozen=True)
class Rule:
    """One constraint: the field it reads, the predicate and the error text."""

    field: str
    predicate: Callable[[object], bool]
    message: str

    def check(self, fields: Mapping[str, object]) -> None:
        """Raise ValidationError if the predicate rejects the field value."""
        if not self.predicate(fields.get(self.field, MISSING)):
            raise ValidationError(self.field, self.message)


def _present(value: object) -> bool:
    return value is not MISSING and value is not None


def _is_text(value: object) -> bool:
    return isinstance(value, str)


def _not_blank(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_text(value: object) -> bool:
    return value is MISSING or value is None or isinstance(value, str)


def _optional_bool(value: object) -> bool:
    return value is MISSING or isinstance(value, bool)


TASK_RULES: tuple[Rule, ...] = (
    Rule("title", _present, "Title is required."),
    Rule("title", _is_text, "Title must be a string."),
    Rule("title", _not_blank, "Title must not be empty."),
    Rule("description", _optional_text, "Description must be a string or null."),
    Rule("completed", _optional_bool, "Completed must be a boolean."),
)


def validate_task_fields(
    fields: Mapping[str, object],
    rules: tuple[Rule, ...] = TASK_RULES,
    *,
    partial: bool = False,
) -> None:
    """
    Check a create or update payload against the rule list.

    With ``partial=True`` (updates) only rules for supplied fields run, so a
    payload that leaves the title alone keeps the stored one. Unknown field
    names are rejected before any rule runs.
    """
    for name in fields:
        if name not in EDITABLE_FIELDS:
            raise ValidationError(name, "Unknown field.")

    for rule in rules:
        if partial and rule.field not in fields:
            continue
        rule.check(fields)
