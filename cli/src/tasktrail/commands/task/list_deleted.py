import click
from tabulate import tabulate
from storage.service import task as task_service
from tasktrail.time_util import utc_to_local
from .common import task_command


@click.command('list-deleted')
@task_command
def task_list_deleted():
    """List soft-deleted tasks."""
    tasks = task_service.list_deleted_tasks()
    if not tasks:
        click.echo("No deleted tasks found")
        return

    table = [[t.id, t.title, utc_to_local(t.deleted_at)] for t in tasks]
    click.echo(tabulate(table, headers=["ID", "Title", "Deleted At"], tablefmt="simple"))
