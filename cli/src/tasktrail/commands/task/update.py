import click
from storage.service import task as task_service
from tasktrail.time_util import local_to_utc
from .common import task_command


@click.command('update')
@click.argument('task_id', type=int)
@click.option('--title', '-t', default=None, help='New title')
@click.option('--desc', '-d', default=None, help='New description')
@click.option('--status', '-s', default=None, type=click.Choice(['PENDING', 'IN_PROGRESS', 'COMPLETED'], case_sensitive=False), help='New status')
@click.option('--due', '-u', default=None, help='New due date (local, or UTC ending in Z)')
@task_command
def task_update(task_id, title, desc, status, due):
    """Update a task."""
    fields = {}
    if title is not None:
        fields['title'] = title
    if desc is not None:
        fields['description'] = desc
    if status is not None:
        fields['status'] = status
    if due is not None:
        try:
            fields['due_date'] = local_to_utc(due)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint='--due')

    if not fields:
        click.echo("No fields to update")
        return

    task = task_service.update_task(task_id, fields)
    click.echo(f"Updated task #{task.id} '{task.title}'")
