# cli/main.py
import click
from bookshare.config import Settings, configure_logging
from bookshare.sa.database import Database
from .commands.db import init_db, serve
from .commands.user import user
from .commands.book import book
from .commands.chat import chat
from .commands.index import index

@click.group()
@click.option('--database-url', '--db', default=None, help='Database URL (defaults to DATABASE_URL)')
@click.pass_context
def cli(ctx, database_url):
    """Bookshare CLI"""
    settings = Settings.from_env()
    if database_url:
        settings.database_url = database_url
    configure_logging(settings)
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    ctx.obj['database'] = Database(settings.database_url, timeout=settings.store_timeout)
    ctx.call_on_close(ctx.obj['database'].dispose)

cli.add_command(init_db)
cli.add_command(serve)
cli.add_command(user)
cli.add_command(book)
cli.add_command(chat)
cli.add_command(index)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
