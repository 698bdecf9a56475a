"""Field-level change detection for the task audit trail.

``AUDIT_FIELDS`` declares, in a fixed order, every tracked field with its
label, equality predicate and formatter. ``generate_change_log`` walks that
order and never raises: unparseable or missing values are rendered as text
instead of blocking the audit write.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from storage.util import format_display_date, parse_instant, to_epoch_millis


def _default_equal(a: Any, b: Any) -> bool:
    return a == b


def _default_format(value: Any) -> str:
    return "" if value is None else str(value)


def status_equal(a: Any, b: Any) -> bool:
    return str(a).upper() == str(b).upper()


def format_status(value: Any) -> str:
    """IN_PROGRESS -> In Progress."""
    if not value:
        return ""
    words = str(value).replace("_", " ").lower()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), words)


def due_date_equal(a: Any, b: Any) -> bool:
    if not a and not b:
        return True
    if not a or not b:
        return False
    left, right = parse_instant(a), parse_instant(b)
    if left is None or right is None:
        return str(a) == str(b)
    return to_epoch_millis(left) == to_epoch_millis(right)


@dataclass(frozen=True)
class AuditField:
    name: str
    label: str
    is_equal: Callable[[Any, Any], bool] = _default_equal
    format: Callable[[Any], str] = _default_format


AUDIT_FIELDS: Sequence[AuditField] = (
    AuditField("title", "Title"),
    AuditField("description", "Description"),
    AuditField("status", "Status", is_equal=status_equal, format=format_status),
    AuditField("due_date", "Due date", is_equal=due_date_equal, format=format_display_date),
)


def _read(snapshot: Any, name: str) -> Any:
    if isinstance(snapshot, Mapping):
        return snapshot.get(name)
    return getattr(snapshot, name, None)


def generate_change_log(original: Any, incoming: Mapping[str, Any]) -> List[str]:
    """Describe every tracked field in ``incoming`` that differs from ``original``.

    Fields absent from ``incoming`` are left alone. The result follows
    ``AUDIT_FIELDS`` order; an empty list means nothing changed.
    """
    changes = []
    for audit_field in AUDIT_FIELDS:
        if audit_field.name not in incoming:
            continue
        old_value = _read(original, audit_field.name)
        new_value = incoming[audit_field.name]
        if audit_field.is_equal(old_value, new_value):
            continue
        changes.append(
            f"{audit_field.label} changed from "
            f"'{audit_field.format(old_value)}' to '{audit_field.format(new_value)}'"
        )
    return changes


def join_change_log(changes: Sequence[str]) -> Optional[str]:
    """Newline-joined summary for a single history row, or None when empty."""
    if not changes:
        return None
    return "\n".join(changes)
