"""Errors raised by the task core.

The HTTP layer maps them to 400 / 404 / 500; the CLI prints them and exits
non-zero.
"""

from typing import Dict, List, Optional


class TaskTrailError(Exception):
    pass


class ValidationError(TaskTrailError):
    """Bad input shape, content or business rule. Nothing was written."""

    def __init__(self, errors: List[Dict]):
        self.errors = errors
        super().__init__("; ".join(f"{'.'.join(map(str, e['path']))}: {e['message']}" for e in errors))

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"path": [field], "message": message}])


class NotFoundError(TaskTrailError):
    """Missing or soft-deleted task."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} could not be found")


class PersistenceError(TaskTrailError):
    """Storage or transaction failure; the whole operation was rolled back."""

    def __init__(self, message: str = "Storage operation failed", cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
