# cli/commands/user.py
import click
from bookshare.auth import IdentityProvider
from bookshare.sa.repositories.user import UserRepository
from ..utils import command_session

@click.group()
def user():
    """User management commands"""
    pass

@user.command()
@click.argument('handle')
@click.password_option(help='Password for the new user')
@click.pass_context
def create(ctx, handle: str, password: str):
    """Register a user with HANDLE"""
    settings = ctx.obj['settings']
    with command_session(ctx) as session:
        provider = IdentityProvider(session, settings.secret_key, settings.token_max_age)
        new_user = provider.register(handle, password)
        click.echo(click.style("Created user ", fg='green') +
                   click.style(f"{new_user.handle} (ID: {new_user.id})", fg='cyan'))

@user.command(name='list')
@click.option('--query', default=None, help='Filter users by handle')
@click.option('--limit', default=20, type=int, help='Maximum number of users to show')
@click.pass_context
def list_users(ctx, query: str, limit: int):
    """List registered users"""
    with command_session(ctx) as session:
        users = UserRepository(session).search_users(query=query, limit=limit)
        if not users:
            click.echo("\nNo users found.")
            return
        for u in users:
            click.echo(f" - {u.handle} (ID: {u.id}, chat partners: {len(u.chat_partners)})")
