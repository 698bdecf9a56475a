import click
import uvicorn


@click.command('serve')
@click.option('--host', default='127.0.0.1', help='Bind address')
@click.option('--port', '-p', default=8000, type=int, help='Port')
@click.option('--reload', is_flag=True, default=False, help='Reload on code changes')
def serve(host, port, reload):
    """Run the HTTP API."""
    uvicorn.run("api.main:app", host=host, port=port, reload=reload)
