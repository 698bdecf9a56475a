# tests/test_validation.py

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from storage.errors import ValidationError
from storage.validation import check_due_date_change, validate_create, validate_update

from .helpers import task_payload, utc_ago, utc_in


def _paths(exc: ValidationError) -> list[str]:
    return [e["path"][0] for e in exc.errors]


def test_valid_create_is_normalized() -> None:
    fields = validate_create(task_payload(status="in_progress", due_date="2099-06-01T10:00:00+02:00"))
    assert fields["status"] == "IN_PROGRESS"
    assert fields["due_date"] == "2099-06-01T08:00:00.000Z"
    assert set(fields) == {"title", "description", "status", "due_date"}


def test_create_defaults() -> None:
    fields = validate_create({"title": "Only title", "due_date": utc_in(days=1)})
    assert fields["status"] == "PENDING"
    assert fields["description"] == ""


def test_title_length_boundary() -> None:
    assert validate_create(task_payload(title="a" * 100))["title"] == "a" * 100
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(title="a" * 101))
    assert _paths(exc.value) == ["title"]


@pytest.mark.parametrize("title", ["Malicious <script>alert(1)</script>", "a > b", "x<y"])
def test_title_rejects_markup(title: str) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(title=title))
    assert _paths(exc.value) == ["title"]
    assert "invalid characters" in exc.value.errors[0]["message"]


def test_title_accepts_international_characters() -> None:
    title = "Case Review: Renée & Noël (Åsa's File)"
    assert validate_create(task_payload(title=title))["title"] == title


@pytest.mark.parametrize("payload", [{"due_date": utc_in(days=1)}, task_payload(title=""), task_payload(title="   ")])
def test_title_required(payload: dict) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create(payload)
    assert exc.value.errors[0] == {"path": ["title"], "message": "Title is required"}


def test_description_rules() -> None:
    assert validate_create(task_payload(description="Line one\nLine two"))["description"] == "Line one\nLine two"
    assert validate_create(task_payload(description=None))["description"] == ""
    assert validate_create(task_payload(description="x" * 2000))["description"] == "x" * 2000
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(description="x" * 2001))
    assert _paths(exc.value) == ["description"]
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(description="<b>bold</b>"))
    assert _paths(exc.value) == ["description"]


@pytest.mark.parametrize("title", ["two\nlines", "Trailing\n", "\nLeading"])
def test_title_rejects_line_breaks(title: str) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(title=title))
    assert _paths(exc.value) == ["title"]


def test_status_must_be_known() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(status="DONE"))
    assert _paths(exc.value) == ["status"]


@pytest.mark.parametrize(
    "due_date", ["next tuesday", "2050-01-01T12:00:00", "", None, "9999-12-31T23:59:00-01:00"]
)
def test_due_date_must_be_absolute(due_date) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(due_date=due_date))
    assert _paths(exc.value) == ["due_date"]
    assert "Due date" in exc.value.errors[0]["message"]


def test_due_date_missing_on_create() -> None:
    payload = task_payload()
    del payload["due_date"]
    with pytest.raises(ValidationError) as exc:
        validate_create(payload)
    assert exc.value.errors[0] == {"path": ["due_date"], "message": "Due date is required"}


def test_due_date_must_be_in_future_on_create() -> None:
    now = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    with pytest.raises(ValidationError) as exc:
        validate_create(task_payload(due_date="2030-01-01T12:00:00Z"), now=now)
    assert exc.value.errors[0]["message"] == "Due date must be in the future"
    with pytest.raises(ValidationError):
        validate_create(task_payload(due_date=utc_ago(minutes=1)))
    assert validate_create(task_payload(due_date="2030-01-01T12:00:00.001Z"), now=now)


def test_multiple_errors_are_reported_together() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_create({"title": "<x>", "status": "nope", "due_date": "soon"})
    assert sorted(_paths(exc.value)) == ["due_date", "status", "title"]


def test_update_keeps_only_sent_fields() -> None:
    assert validate_update({"status": "completed"}) == {"status": "COMPLETED"}
    assert validate_update({}) == {}
    assert validate_update({"id": 5, "created_at": "x"}) == {}


def test_update_rejects_blank_title_and_null_status() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_update({"title": ""})
    assert _paths(exc.value) == ["title"]
    with pytest.raises(ValidationError) as exc:
        validate_update({"status": None})
    assert _paths(exc.value) == ["status"]


def test_body_must_be_an_object() -> None:
    with pytest.raises(ValidationError) as exc:
        validate_update(["title"])
    assert _paths(exc.value) == ["body"]


def test_past_due_date_rejected_only_when_changed() -> None:
    existing = SimpleNamespace(due_date="2020-01-01T00:00:00.000Z")
    # Unchanged past date (different notation, same instant) is not re-validated.
    check_due_date_change(existing, {"due_date": "2020-01-01T01:00:00.000+01:00"})
    check_due_date_change(existing, {"title": "x"})
    with pytest.raises(ValidationError) as exc:
        check_due_date_change(existing, {"due_date": "2021-01-01T00:00:00.000Z"})
    assert _paths(exc.value) == ["due_date"]
    check_due_date_change(existing, {"due_date": utc_in(hours=1)})
