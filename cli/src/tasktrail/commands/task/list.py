import click
from tabulate import tabulate
from storage.service import task as task_service
from storage.service.audit import format_status
from tasktrail.time_util import utc_to_local
from .common import task_command


@click.command('list')
@click.option('--status', '-s', multiple=True, help='Filter by status (PENDING, IN_PROGRESS, COMPLETED, OVERDUE); repeatable')
@click.option('--sort', 'sort_by', default='due_date', type=click.Choice(['id', 'title', 'status', 'due_date', 'created_at']), help='Sort column')
@click.option('--reverse', '-r', 'descending', is_flag=True, default=False, help='Sort descending')
@task_command
def task_list(status, sort_by, descending):
    """List tasks."""
    tasks = task_service.list_tasks(list(status), sort_by=sort_by, sort_order='DESC' if descending else 'ASC')
    if not tasks:
        click.echo("No tasks found")
        return

    table = []
    for t in tasks:
        table.append([
            t.id,
            t.title,
            format_status(t.status),
            utc_to_local(t.due_date),
        ])
    click.echo(tabulate(table, headers=["ID", "Title", "Status", "Due"], tablefmt="simple"))
