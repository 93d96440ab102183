# cli/commands/book.py
import click
from bookshare.errors import NotFound
from bookshare.sa.repositories.user import UserRepository
from bookshare.services.books import BookService
from ..utils import command_session

@click.group()
def book():
    """Book management commands"""
    pass

@book.command(name='list')
@click.option('--query', default=None, help='Search books by title')
@click.option('--owner', default=None, help='Only books owned by this handle')
@click.option('--limit', default=20, type=int, help='Maximum number of books to show')
@click.pass_context
def list_books(ctx, query: str, owner: str, limit: int):
    """List shared books, newest first"""
    with command_session(ctx) as session:
        owner_id = None
        if owner:
            owner_user = UserRepository(session).get_by_handle(owner)
            if owner_user is None:
                raise NotFound("user", owner)
            owner_id = owner_user.id

        books = BookService(session).list_books(query=query, owner_id=owner_id, limit=limit)
        if not books:
            click.echo("\nNo books found.")
            return
        for b in books:
            options = [name[len('for_'):] for name, enabled in b.sharing_options.items() if enabled]
            click.echo(
                f" - {b.title} by {b.author} (ID: {b.id}, owner: {b.owner.handle}, "
                f"likes: {len(b.likes)}, sharing: {', '.join(options) or 'none'})"
            )

@book.command()
@click.argument('owner')
@click.option('--title', required=True, help='Book title')
@click.option('--author', required=True, help='Book author')
@click.option('--description', required=True, help='Book description')
@click.option('--for-sale', is_flag=True, help='Offer the book for sale')
@click.option('--for-exchange', is_flag=True, help='Offer the book for exchange')
@click.option('--for-borrow', is_flag=True, help='Offer the book for borrowing')
@click.option('--for-discussion', is_flag=True, help='Open the book for discussion')
@click.pass_context
def add(ctx, owner: str, title: str, author: str, description: str,
        for_sale: bool, for_exchange: bool, for_borrow: bool, for_discussion: bool):
    """Share a book on behalf of the user with handle OWNER"""
    with command_session(ctx) as session:
        owner_user = UserRepository(session).get_by_handle(owner)
        if owner_user is None:
            raise NotFound("user", owner)
        new_book = BookService(session).create_book(
            owner_user.id, title, author, description,
            for_sale=for_sale, for_exchange=for_exchange,
            for_borrow=for_borrow, for_discussion=for_discussion
        )
        click.echo(click.style("Shared book ", fg='green') +
                   click.style(f"{new_book.title} (ID: {new_book.id})", fg='cyan'))
