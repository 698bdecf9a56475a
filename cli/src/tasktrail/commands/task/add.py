import click
from storage.service import task as task_service
from tasktrail.time_util import local_to_utc, utc_to_local
from .common import task_command


@click.command('add')
@click.argument('title')
@click.option('--desc', '-d', default=None, help='Description')
@click.option('--due', '-u', required=True, help='Due date (local, e.g. 2026-02-16T10:00, or UTC ending in Z)')
@click.option('--status', '-s', default=None, type=click.Choice(['PENDING', 'IN_PROGRESS', 'COMPLETED'], case_sensitive=False), help='Initial status')
@task_command
def task_add(title, desc, due, status):
    """Add a new task."""
    try:
        due_utc = local_to_utc(due)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--due')
    payload = {"title": title, "due_date": due_utc}
    if desc is not None:
        payload["description"] = desc
    if status is not None:
        payload["status"] = status
    task = task_service.create_task(payload)
    click.echo(f"Created task #{task.id} '{task.title}' (due {utc_to_local(task.due_date)})")
