"""Function-based task repository using SQLAlchemy sessions.

Every write runs in a single ``get_db()`` session: the task row and its
history row commit together or not at all.
"""

import functools
from typing import Iterable, List, Optional

from loguru import logger
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from storage.database.base import get_db
from storage.entity.dto import Task, TaskHistoryEntry, TaskStatus
from storage.entity.task import TaskEntity
from storage.entity.task_history import TaskHistoryEntity
from storage.errors import PersistenceError
from storage.util import get_utc_iso8601_timestamp

TASK_CREATED = "Task created"
TASK_DELETED = "Task deleted"

OVERDUE = "OVERDUE"
VALID_STATUS_FILTERS = {s.value for s in TaskStatus} | {OVERDUE}

_SORT_COLUMNS = {
    "id": TaskEntity.id,
    "title": TaskEntity.title,
    "status": TaskEntity.status,
    "due_date": TaskEntity.due_date,
    "created_at": TaskEntity.created_at,
}
DEFAULT_SORT = "due_date"
_SORT_ORDERS = ("ASC", "DESC")


def _persistence_guard(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception("{} failed, transaction rolled back", func.__name__)
            raise PersistenceError(f"{func.__name__} failed", cause=e) from e
    return wrapper


def _entity_to_dto(entity: TaskEntity) -> Task:
    return Task(
        id=entity.id,
        title=entity.title,
        description=entity.description or "",
        status=entity.status,
        due_date=entity.due_date,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
        deleted_at=entity.deleted_at,
    )


def _history_to_dto(entity: TaskHistoryEntity) -> TaskHistoryEntry:
    return TaskHistoryEntry(
        id=entity.id,
        task_id=entity.task_id,
        change_summary=entity.change_summary,
        changed_at=entity.changed_at,
    )


@_persistence_guard
def create_task(task: Task) -> Task:
    now = get_utc_iso8601_timestamp()
    with get_db() as session:
        entity = TaskEntity(
            title=task.title,
            description=task.description or "",
            status=task.status or TaskStatus.PENDING.value,
            due_date=task.due_date,
            created_at=now,
            updated_at=now,
        )
        entity.history.append(TaskHistoryEntity(change_summary=TASK_CREATED, changed_at=now))
        session.add(entity)
        session.flush()
        logger.info("Task created id={} status={} due_date={}", entity.id, entity.status, entity.due_date)
        return _entity_to_dto(entity)


@_persistence_guard
def update_task(task_id: int, task: Task, change_summary: Optional[str] = None) -> Optional[Task]:
    """Overwrite the mutable fields of a live task.

    Returns None when no live row matched (missing or soft-deleted); in that
    case nothing is written, history included.
    """
    now = get_utc_iso8601_timestamp()
    with get_db() as session:
        count = (
            session.query(TaskEntity)
            .filter(TaskEntity.id == task_id, TaskEntity.deleted_at.is_(None))
            .update(
                {
                    TaskEntity.title: task.title,
                    TaskEntity.description: task.description or "",
                    TaskEntity.status: task.status,
                    TaskEntity.due_date: task.due_date,
                    TaskEntity.updated_at: now,
                },
                synchronize_session=False,
            )
        )
        if count == 0:
            logger.info("Task update skipped id={}: not found or deleted", task_id)
            return None
        if change_summary:
            session.add(TaskHistoryEntity(task_id=task_id, change_summary=change_summary, changed_at=now))
        session.flush()
        row = session.get(TaskEntity, task_id, populate_existing=True)
        logger.info("Task updated id={} history_written={}", task_id, bool(change_summary))
        return _entity_to_dto(row)


@_persistence_guard
def soft_delete_task(task_id: int) -> bool:
    """Mark a live task deleted and log it. A second call changes nothing."""
    now = get_utc_iso8601_timestamp()
    with get_db() as session:
        count = (
            session.query(TaskEntity)
            .filter(TaskEntity.id == task_id, TaskEntity.deleted_at.is_(None))
            .update({TaskEntity.deleted_at: now}, synchronize_session=False)
        )
        if count == 0:
            return False
        session.add(TaskHistoryEntity(task_id=task_id, change_summary=TASK_DELETED, changed_at=now))
        session.flush()
        logger.info("Task soft-deleted id={}", task_id)
        return True


@_persistence_guard
def get_task(task_id: int, include_deleted: bool = False) -> Optional[Task]:
    with get_db() as session:
        query = session.query(TaskEntity).filter(TaskEntity.id == task_id)
        if not include_deleted:
            query = query.filter(TaskEntity.deleted_at.is_(None))
        row = query.first()
        return _entity_to_dto(row) if row else None


def normalize_status_filters(status_filters: Iterable[str]) -> List[str]:
    """Upper-case and keep only whitelisted filters, preserving first occurrence order."""
    result = []
    for raw in status_filters or ():
        value = str(raw).strip().upper()
        if value in VALID_STATUS_FILTERS and value not in result:
            result.append(value)
    return result


@_persistence_guard
def list_tasks(
    status_filters: Iterable[str] = (),
    sort_by: str = DEFAULT_SORT,
    sort_order: str = "ASC",
) -> List[Task]:
    filters = normalize_status_filters(status_filters)
    sort_column = _SORT_COLUMNS.get(sort_by, _SORT_COLUMNS[DEFAULT_SORT])
    order = (sort_order or "").upper()
    if order not in _SORT_ORDERS:
        order = "ASC"

    with get_db() as session:
        query = session.query(TaskEntity).filter(TaskEntity.deleted_at.is_(None))
        if filters:
            conditions = []
            statuses = [f for f in filters if f != OVERDUE]
            if statuses:
                conditions.append(TaskEntity.status.in_(statuses))
            if OVERDUE in filters:
                conditions.append(
                    (TaskEntity.due_date < get_utc_iso8601_timestamp())
                    & (TaskEntity.status != TaskStatus.COMPLETED.value)
                )
            query = query.filter(or_(*conditions))
        query = query.order_by(
            sort_column.desc() if order == "DESC" else sort_column.asc(),
            TaskEntity.id.asc(),
        )
        return [_entity_to_dto(row) for row in query.all()]


@_persistence_guard
def list_deleted_tasks() -> List[Task]:
    with get_db() as session:
        query = (
            session.query(TaskEntity)
            .filter(TaskEntity.deleted_at.isnot(None))
            .order_by(TaskEntity.deleted_at.desc(), TaskEntity.id.desc())
        )
        return [_entity_to_dto(row) for row in query.all()]


@_persistence_guard
def list_history(task_id: int) -> List[TaskHistoryEntry]:
    """All history rows for a task, newest first, including deleted tasks."""
    with get_db() as session:
        query = (
            session.query(TaskHistoryEntity)
            .filter(TaskHistoryEntity.task_id == task_id)
            .order_by(TaskHistoryEntity.changed_at.desc(), TaskHistoryEntity.id.desc())
        )
        return [_history_to_dto(row) for row in query.all()]
