# cli/utils.py
import click
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy.orm import Session

from bookshare.errors import BookshareError
from bookshare.sa.database import Database


def get_database(ctx: click.Context) -> Database:
    return ctx.obj['database']


@contextmanager
def command_session(ctx: click.Context) -> Iterator[Session]:
    """Open a session for one command, reporting domain errors in red and exiting non-zero"""
    session = get_database(ctx).get_session()
    try:
        yield session
    except BookshareError as e:
        session.rollback()
        click.echo(click.style(f"\nError: {e.message}", fg='red'), err=True)
        ctx.exit(1)
    finally:
        session.close()


def echo_pair(label: str, value, color: str = 'cyan') -> None:
    click.echo(click.style(f"{label}: ", fg='blue') + click.style(str(value), fg=color))
