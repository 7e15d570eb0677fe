import pytest

from taskboard.exceptions import ValidationError
from taskboard.validation import (
    MISSING,
    TASK_RULES,
    Rule,
    validate_task_fields,
)


class TestValidateTaskFields:
    """validate_task_fields(): ordered rules, first failure wins."""

    def test_valid_full_payload(self) -> None:
        """A complete valid payload passes."""
        validate_task_fields({"title": "ok", "description": None, "completed": False})

    @pytest.mark.parametrize(
        "fields,field,message",
        [
            ({}, "title", "Title is required."),
            ({"title": None}, "title", "Title is required."),
            ({"title": 3}, "title", "Title must be a string."),
            ({"title": " "}, "title", "Title must not be empty."),
            ({"title": "x", "description": 5}, "description", "Description must be a string or null."),
            ({"title": "x", "completed": "yes"}, "completed", "Completed must be a boolean."),
            ({"title": "x", "completed": 1}, "completed", "Completed must be a boolean."),
        ],
    )
    def test_rule_failures(self, fields, field, message) -> None:
        """Each rule reports its own field and message."""
        with pytest.raises(ValidationError) as exc_info:
            validate_task_fields(fields)
        assert exc_info.value.field == field
        assert exc_info.value.message == message

    def test_first_failure_wins(self) -> None:
        """With several bad fields the first declared rule is reported."""
        with pytest.raises(ValidationError) as exc_info:
            validate_task_fields({"title": "", "description": 1, "completed": "no"})
        assert exc_info.value.field == "title"

    def test_partial_skips_absent_fields(self) -> None:
        """Partial payloads only check what they carry."""
        validate_task_fields({"completed": True}, partial=True)
        validate_task_fields({}, partial=True)

    def test_partial_still_checks_present_title(self) -> None:
        """A supplied title must still be non-blank."""
        with pytest.raises(ValidationError, match="must not be empty"):
            validate_task_fields({"title": ""}, partial=True)

    def test_unknown_field(self) -> None:
        """Unknown keys are refused before rules run."""
        with pytest.raises(ValidationError) as exc_info:
            validate_task_fields({"title": "", "priority": 1})
        assert exc_info.value.field == "priority"

    def test_custom_rules(self) -> None:
        """Callers can pass their own rule list."""
        rules = (*TASK_RULES, Rule("title", lambda v: v is MISSING or len(v) <= 5, "Too long."))
        with pytest.raises(ValidationError, match="Too long"):
            validate_task_fields({"title": "way too long"}, rules)
