# cli/commands/db.py
import click
import uvicorn
from ..utils import get_database

@click.command(name='init-db')
@click.option('--drop', is_flag=True, help='Drop all tables before creating them')
@click.pass_context
def init_db(ctx, drop: bool):
    """Create the database schema"""
    database = get_database(ctx)
    if drop:
        click.confirm('This deletes all users, books and chat rooms. Continue?', abort=True)
        database.drop_all()
    database.init_db()
    click.echo(click.style("Database initialized", fg='green'))

@click.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', default=8000, type=int, envvar='PORT', help='Port to listen on')
@click.option('--reload', is_flag=True, help='Reload on code changes')
@click.pass_context
def serve(ctx, host: str, port: int, reload: bool):
    """Run the REST API with uvicorn"""
    click.echo(click.style(f"Serving Bookshare API on {host}:{port}", fg='blue'))
    uvicorn.run("api.main:create_app", factory=True, host=host, port=port, reload=reload)
