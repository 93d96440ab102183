# cli/commands/chat.py
import click
from bookshare.errors import NotFound
from bookshare.sa.repositories.user import UserRepository
from bookshare.services.chat import ChatService
from ..utils import command_session

@click.group()
def chat():
    """Chat room inspection commands"""
    pass

@chat.command()
@click.argument('handle')
@click.pass_context
def rooms(ctx, handle: str):
    """List the chat rooms of the user with HANDLE"""
    with command_session(ctx) as session:
        member = UserRepository(session).get_by_handle(handle)
        if member is None:
            raise NotFound("user", handle)
        summaries = ChatService(session).list_chat_rooms(member.id)
        if not summaries:
            click.echo(f"\n{handle} has no chat rooms.")
            return
        for s in summaries:
            preview = s.last_message.text if s.last_message else ''
            click.echo(f" - Room {s.chat_room_id} with {s.partner_display_handle} (book {s.book_id}): {preview}")

@chat.command()
@click.argument('chat_room_id', type=int)
@click.option('--as', 'handle', required=True, help='Read as this participant')
@click.pass_context
def messages(ctx, chat_room_id: int, handle: str):
    """Show the messages of CHAT_ROOM_ID as one of its participants"""
    with command_session(ctx) as session:
        member = UserRepository(session).get_by_handle(handle)
        if member is None:
            raise NotFound("user", handle)
        for m in ChatService(session).list_messages(chat_room_id, member.id):
            click.echo(click.style(f"[{m.timestamp_iso8601}] ", fg='blue') +
                       click.style(m.sender_display_handle, fg='cyan') + f": {m.text}")
