import functools

import click

from storage.errors import PersistenceError, TaskTrailError, ValidationError
from tasktrail.config import get_config


def task_command(func):
    """Initialize the database, then turn task errors into CLI errors."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        get_config()
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            lines = [f"{'.'.join(err['path'])}: {err['message']}" for err in e.errors]
            raise click.ClickException("Invalid input\n  " + "\n  ".join(lines))
        except PersistenceError:
            raise click.ClickException("Storage error, nothing was changed")
        except TaskTrailError as e:
            raise click.ClickException(str(e))
    return wrapper
