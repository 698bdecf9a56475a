"""Task service: validation, audit diff and persistence in the right order."""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from storage.entity.dto import Task
from storage.errors import NotFoundError
from storage.repository import task as task_repo
from storage.service.audit import generate_change_log, join_change_log
from storage.util import format_history_date
from storage.validation import check_due_date_change, validate_create, validate_update


def create_task(payload: Any) -> Task:
    fields = validate_create(payload)
    return task_repo.create_task(Task(**fields))


def get_task(task_id: int) -> Task:
    task = task_repo.get_task(task_id)
    if not task:
        raise NotFoundError(task_id)
    return task


def list_tasks(
    status_filters: Optional[Iterable[str]] = None,
    sort_by: str = task_repo.DEFAULT_SORT,
    sort_order: str = "ASC",
) -> List[Task]:
    return task_repo.list_tasks(status_filters or (), sort_by=sort_by, sort_order=sort_order)


def list_deleted_tasks() -> List[Task]:
    return task_repo.list_deleted_tasks()


def update_task(task_id: int, payload: Any) -> Task:
    changes = validate_update(payload)
    existing = get_task(task_id)
    check_due_date_change(existing, changes)

    summary = join_change_log(generate_change_log(existing, changes))
    merged = replace(existing, **changes)
    updated = task_repo.update_task(task_id, merged, summary)
    if updated is None:
        # Deleted between the read above and the write.
        raise NotFoundError(task_id)
    if summary is None:
        logger.debug("Task {} updated with no tracked changes", task_id)
    return updated


def delete_task(task_id: int) -> None:
    get_task(task_id)
    if not task_repo.soft_delete_task(task_id):
        raise NotFoundError(task_id)


def get_history(task_id: int) -> List[Dict]:
    """History entries newest first, shaped for display.

    Soft-deleted tasks keep a readable history; only ids that never existed
    are reported as not found.
    """
    if not task_repo.get_task(task_id, include_deleted=True):
        raise NotFoundError(task_id)
    return [
        {
            "id": entry.id,
            "summary": entry.change_summary,
            "changed_at": entry.changed_at,
            "changed_at_display": format_history_date(entry.changed_at),
        }
        for entry in task_repo.list_history(task_id)
    ]
