import click
from storage.service import task as task_service
from .common import task_command


@click.command('history')
@click.argument('task_id', type=int)
@task_command
def task_history(task_id):
    """Show the audit trail of a task, newest first."""
    entries = task_service.get_history(task_id)
    for entry in entries:
        lines = entry["summary"].split("\n")
        click.echo(f"{entry['changed_at_display']}  {lines[0]}")
        for line in lines[1:]:
            click.echo(f"{' ' * len(entry['changed_at_display'])}  {line}")
