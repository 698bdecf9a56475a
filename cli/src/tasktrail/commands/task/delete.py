import click
from storage.service import task as task_service
from .common import task_command


@click.command('delete')
@click.argument('task_id', type=int)
@task_command
def task_delete(task_id):
    """Soft delete a task."""
    task_service.delete_task(task_id)
    click.echo(f"Deleted task #{task_id}")
