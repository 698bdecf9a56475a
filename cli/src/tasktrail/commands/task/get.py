import click
from storage.service import task as task_service
from storage.service.audit import format_status
from tasktrail.time_util import utc_to_local
from .common import task_command


@click.command('get')
@click.argument('task_id', type=int)
@task_command
def task_get(task_id):
    """Show task details."""
    task = task_service.get_task(task_id)

    click.echo(f"ID:        {task.id}")
    click.echo(f"Title:     {task.title}")
    click.echo(f"Status:    {format_status(task.status)}")
    click.echo(f"Due:       {utc_to_local(task.due_date)}")
    if task.description:
        click.echo(f"Desc:      {task.description}")
    click.echo(f"Created:   {utc_to_local(task.created_at)}")
    click.echo(f"Updated:   {utc_to_local(task.updated_at)}")
