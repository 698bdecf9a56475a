import click

from .add import task_add
from .list import task_list
from .get import task_get
from .update import task_update
from .delete import task_delete
from .history import task_history
from .list_deleted import task_list_deleted

@click.group('task')
def task_group():
    """Manage tasks."""
    pass

task_group.add_command(task_add)
task_group.add_command(task_list)
task_group.add_command(task_get)
task_group.add_command(task_update)
task_group.add_command(task_delete)
task_group.add_command(task_history)
task_group.add_command(task_list_deleted)
