"""Request validation for task mutations.

Shape and content rules live on the pydantic models; the future-date rule for
updates needs the stored task and is applied by ``check_due_date_change``.
Everything here runs before the repository is touched.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from storage.entity.dto import TaskStatus
from storage.errors import ValidationError
from storage.service.audit import due_date_equal
from storage.util import format_utc_iso8601, parse_instant

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000

_PUNCTUATION = r".,:;_\-()'\"?!£$%&"
TITLE_PATTERN = re.compile(rf"[\w {_PUNCTUATION}]+")
DESCRIPTION_PATTERN = re.compile(rf"[\w \t\r\n{_PUNCTUATION}]+")

_REQUIRED_MESSAGES = {
    "title": "Title is required",
    "due_date": "Due date is required",
}


def _check_title(value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
    if not TITLE_PATTERN.fullmatch(value):
        raise ValueError("Title contains invalid characters (check for special symbols)")
    return value


def _check_description(value: Optional[str]) -> str:
    if value is None or value == "":
        return ""
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less")
    if not DESCRIPTION_PATTERN.fullmatch(value):
        raise ValueError("Description contains invalid characters")
    return value


def _check_status(value: Any) -> str:
    if isinstance(value, str):
        normalized = value.strip().upper()
        if normalized in TaskStatus.__members__:
            return normalized
    allowed = ", ".join(s.value for s in TaskStatus)
    raise ValueError(f"Status must be one of: {allowed}")


def _check_due_date(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Due date is required")
    instant = parse_instant(value)
    if instant is None:
        raise ValueError("Due date must be a valid ISO 8601 timestamp with a UTC offset (e.g. 2030-01-01T09:00:00Z)")
    return format_utc_iso8601(instant)


class _TaskRules(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, value):
        return _check_title(value)

    @field_validator("description", check_fields=False)
    @classmethod
    def validate_description(cls, value):
        return _check_description(value)

    @field_validator("status", check_fields=False)
    @classmethod
    def validate_status(cls, value):
        return _check_status(value)

    @field_validator("due_date", check_fields=False)
    @classmethod
    def validate_due_date(cls, value):
        return _check_due_date(value)


class TaskCreate(_TaskRules):
    title: Optional[str]
    description: Optional[str] = ""
    status: str = TaskStatus.PENDING.value
    due_date: Any


class TaskUpdate(_TaskRules):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Any = None
    due_date: Any = None


def _field_errors(exc: PydanticValidationError) -> List[Dict]:
    errors = []
    for err in exc.errors():
        path = [str(p) for p in err["loc"]] or ["body"]
        if err["type"] == "missing":
            message = _REQUIRED_MESSAGES.get(path[0], f"{path[0]} is required")
        elif err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        errors.append({"path": path, "message": message})
    return errors


def _require_mapping(payload: Any) -> Mapping:
    if not isinstance(payload, Mapping):
        raise ValidationError.single("body", "Request body must be a JSON object")
    return payload


def _is_future(due_date: str, now: Optional[datetime]) -> bool:
    now = now or datetime.now(timezone.utc)
    instant = parse_instant(due_date)
    return instant is not None and instant > now


def validate_create(payload: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Validate a full task body; returns normalized fields."""
    payload = _require_mapping(payload)
    try:
        model = TaskCreate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e
    if not _is_future(model.due_date, now):
        raise ValidationError.single("due_date", "Due date must be in the future")
    return model.model_dump()


def validate_update(payload: Any) -> Dict[str, Any]:
    """Validate a partial task body; returns only the fields that were sent."""
    payload = _require_mapping(payload)
    try:
        model = TaskUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(_field_errors(e)) from e
    return model.model_dump(include=model.model_fields_set)


def check_due_date_change(existing: Any, changes: Mapping[str, Any], now: Optional[datetime] = None) -> None:
    """Reject a due date moved to the past; an unchanged past date is left alone."""
    if "due_date" not in changes:
        return
    if due_date_equal(existing.due_date, changes["due_date"]):
        return
    if not _is_future(changes["due_date"], now):
        raise ValidationError.single("due_date", "Due date must be in the future")
