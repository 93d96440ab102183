# bookshare/services/chat.py
import logging
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import List, Optional
from sqlalchemy.orm import Session

from bookshare.errors import NotFound, Forbidden, InvalidArgument, validate_id
from bookshare.sa.database import store_guard
from bookshare.sa.models import ChatRoom, Message
from bookshare.sa.repositories.chat import ChatRoomRepository
from bookshare.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4000


@dataclass(frozen=True)
class RenderedMessage:
    text: str
    sender_display_handle: str
    timestamp_iso8601: str


@dataclass(frozen=True)
class ChatRoomSummary:
    chat_room_id: int
    book_id: int
    partner_id: int
    partner_display_handle: str
    last_message: Optional[RenderedMessage]


def to_iso8601(value: datetime) -> str:
    # SQLite hands timestamps back without tzinfo; they are always stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


def render_message(message: Message) -> RenderedMessage:
    return RenderedMessage(
        text=message.text,
        sender_display_handle=message.sender.handle,
        timestamp_iso8601=to_iso8601(message.created_at),
    )


def validate_text(text: Optional[str]) -> str:
    if not isinstance(text, str) or not text.strip():
        raise InvalidArgument("Message text must not be empty")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise InvalidArgument(f"Message text must be at most {MAX_MESSAGE_LENGTH} characters")
    return text


class ChatService:
    """Appends to and reads from existing chat rooms on behalf of a participant."""

    def __init__(self, session: Session):
        self.session = session
        self.rooms = ChatRoomRepository(session)
        self.users = UserRepository(session)

    def append_message(self, chat_room_id: int, sender_user_id: int, text: str) -> RenderedMessage:
        validate_id(chat_room_id, "chat room id")
        validate_id(sender_user_id, "user id")
        text = validate_text(text)

        with store_guard(self.session, "append_message"):
            room = self._get_room_for(chat_room_id, sender_user_id)
            message = self.rooms.append_message(room, sender_user_id, text)
            self.session.commit()
            return render_message(message)

    def list_messages(self, chat_room_id: int, requesting_user_id: int) -> List[RenderedMessage]:
        validate_id(chat_room_id, "chat room id")
        validate_id(requesting_user_id, "user id")

        with store_guard(self.session, "list_messages"):
            room = self._get_room_for(chat_room_id, requesting_user_id)
            return [render_message(m) for m in self.rooms.get_messages(room.id)]

    def list_chat_rooms(self, user_id: int) -> List[ChatRoomSummary]:
        """Resolve a user's chat-partner index into room summaries"""
        validate_id(user_id, "user id")

        summaries = []
        with store_guard(self.session, "list_chat_rooms"):
            for entry in self.users.list_chat_partners(user_id):
                room = self.rooms.get_by_id(entry.chat_room_id)
                if room is None:
                    logger.warning(
                        f"Chat partner entry {user_id}->{entry.partner_id} points at missing "
                        f"chat room {entry.chat_room_id}; skipping"
                    )
                    continue
                last = self.rooms.get_last_message(room.id)
                summaries.append(ChatRoomSummary(
                    chat_room_id=room.id,
                    book_id=room.book_id,
                    partner_id=entry.partner_id,
                    partner_display_handle=entry.partner.handle,
                    last_message=render_message(last) if last else None,
                ))
        return summaries

    def _get_room_for(self, chat_room_id: int, user_id: int) -> ChatRoom:
        room = self.rooms.get_by_id(chat_room_id)
        if room is None:
            raise NotFound("chat room", chat_room_id)
        if not room.has_participant(user_id):
            raise Forbidden(f"User {user_id} is not a participant of chat room {chat_room_id}")
        return room
