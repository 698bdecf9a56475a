# tests/helpers.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from storage.util import format_utc_iso8601


def utc_in(**delta) -> str:
    """UTC timestamp string offset from now, e.g. utc_in(days=1)."""
    return format_utc_iso8601(datetime.now(timezone.utc) + timedelta(**delta))


def utc_ago(**delta) -> str:
    return format_utc_iso8601(datetime.now(timezone.utc) - timedelta(**delta))


def task_payload(**overrides) -> dict:
    payload = {
        "title": "Integration Test Task",
        "description": "Created by pytest",
        "status": "PENDING",
        "due_date": utc_in(days=1),
    }
    payload.update(overrides)
    return payload
