import os

import click
from dotenv import load_dotenv

from storage.logging_setup import setup_logging
from tasktrail.commands.serve import serve
from tasktrail.commands.task.click import task_group
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    """Task tracking with an audit trail."""
    load_dotenv()
    setup_logging(os.getenv("TASKTRAIL_LOG_LEVEL", "WARNING"))


# Register commands
cli.add_command(task_group)
cli.add_command(serve)
