"""Tests for taskboard.serializers."""

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.entities import Task
from taskboard.exceptions import ValidationError
from taskboard.serializers import (
    MalformedPayload,
    parse_bool_param,
    parse_int_param,
    parse_task_payload,
    task_to_dict,
)


def make_task(**overrides: object) -> Task:
    """Task with fixed values for serializer tests."""
    stamp = datetime(2025, 3, 4, 5, 6, 7, 890123, tzinfo=timezone.utc)
    values = {
        "id": "cabc",
        "title": "Buy milk",
        "description": None,
        "completed": False,
        "created_at": stamp,
        "updated_at": stamp,
    }
    values.update(overrides)
    return Task(**values)


class TestTaskToDict:
    """task_to_dict(): public JSON keys."""

    def test_keys_are_camel_case(self) -> None:
        """Timestamps use createdAt/updatedAt."""
        data = task_to_dict(make_task())
        assert set(data) == {
            "id",
            "title",
            "description",
            "completed",
            "createdAt",
            "updatedAt",
        }
        assert data["description"] is None

    def test_timestamps_keep_microseconds(self) -> None:
        """Timestamps render in UTC with full precision and a Z suffix."""
        data = task_to_dict(make_task())
        assert data["createdAt"] == "2025-03-04T05:06:07.890123Z"

    def test_timestamps_within_one_millisecond_differ(self) -> None:
        """Sub-millisecond updates stay distinguishable."""
        stamp = datetime(2025, 3, 4, 5, 6, 7, 890123, tzinfo=timezone.utc)
        later = stamp.replace(microsecond=890456)
        data = task_to_dict(make_task(updated_at=later))
        assert data["updatedAt"] != data["createdAt"]

    def test_other_offsets_converted_to_utc(self) -> None:
        """Aware datetimes in another zone are shifted to UTC."""
        plus_two = timezone(timedelta(hours=2))
        stamp = datetime(2025, 3, 4, 7, 6, 7, tzinfo=plus_two)
        data = task_to_dict(make_task(created_at=stamp))
        assert data["createdAt"] == "2025-03-04T05:06:07.000000Z"


class TestParseTaskPayload:
    """parse_task_payload(): body decoding."""

    def test_drops_read_only_keys(self) -> None:
        """id and timestamps sent back by a client are ignored."""
        body = b'{"id": "x", "title": "t", "createdAt": "2020", "updatedAt": "2020"}'
        assert parse_task_payload(body) == {"title": "t"}

    def test_keeps_unknown_keys_for_validation(self) -> None:
        """Unknown keys are left for the repository to reject."""
        assert parse_task_payload(b'{"priority": 1}') == {"priority": 1}

    def test_empty_body_is_empty_object(self) -> None:
        """A missing body parses as {}."""
        assert parse_task_payload(b"") == {}

    @pytest.mark.parametrize("body", [b"{nope", b"[1, 2]", b'"title"', b"\xff"])
    def test_malformed(self, body) -> None:
        """Non-object or broken JSON raises MalformedPayload."""
        with pytest.raises(MalformedPayload):
            parse_task_payload(body)


class TestQueryParams:
    """parse_bool_param() and parse_int_param()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(None, None), ("", None), ("true", True), ("FALSE", False), ("1", True), ("no", False)],
    )
    def test_bool(self, raw, expected) -> None:
        """Common spellings map to booleans."""
        assert parse_bool_param("completed", raw) is expected

    def test_bool_invalid(self) -> None:
        """Anything else is a validation error on that parameter."""
        with pytest.raises(ValidationError) as exc_info:
            parse_bool_param("completed", "maybe")
        assert exc_info.value.field == "completed"

    @pytest.mark.parametrize("raw,expected", [(None, None), ("", None), ("0", 0), ("25", 25)])
    def test_int(self, raw, expected) -> None:
        """Digits parse to ints."""
        assert parse_int_param("limit", raw) == expected

    @pytest.mark.parametrize("raw", ["ten", "-1", "1.5"])
    def test_int_invalid(self, raw) -> None:
        """Non-integers and negatives are refused."""
        with pytest.raises(ValidationError):
            parse_int_param("limit", raw)
