# bookshare/sa/repositories/chat.py
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from bookshare.sa.models import ChatRoom, Message

class ChatRoomRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, chat_room_id: int) -> Optional[ChatRoom]:
        return self.session.query(ChatRoom).filter(ChatRoom.id == chat_room_id).one_or_none()

    def get_by_pair(self, user_a: int, user_b: int) -> Optional[ChatRoom]:
        """Get the room shared by two users, in either order"""
        low, high = ChatRoom.ordered_pair(user_a, user_b)
        return (
            self.session.query(ChatRoom)
            .filter(
                ChatRoom.participant_low_id == low,
                ChatRoom.participant_high_id == high
            )
            .one_or_none()
        )

    def all_rooms(self) -> List[ChatRoom]:
        return self.session.query(ChatRoom).order_by(ChatRoom.id).all()

    def create_room(self, book_id: int, user_a: int, user_b: int, sender_id: int, text: str) -> ChatRoom:
        """Stage a new room seeded with its first message.

        Room and message are flushed together; a room that already exists for
        the pair raises IntegrityError. The caller owns the commit.
        """
        low, high = ChatRoom.ordered_pair(user_a, user_b)
        room = ChatRoom(book_id=book_id, participant_low_id=low, participant_high_id=high)
        room.messages.append(Message(sender_id=sender_id, text=text))
        self.session.add(room)
        self.session.flush()
        return room

    def append_message(self, room: ChatRoom, sender_id: int, text: str) -> Message:
        """Stage a message at the end of the room. The caller owns the commit."""
        message = Message(chat_room_id=room.id, sender_id=sender_id, text=text)
        self.session.add(message)
        self.session.flush()
        return message

    def get_messages(self, chat_room_id: int) -> List[Message]:
        """Messages of a room in write order, oldest first, senders loaded"""
        return (
            self.session.query(Message)
            .filter(Message.chat_room_id == chat_room_id)
            .options(joinedload(Message.sender))
            .order_by(Message.id)
            .all()
        )

    def get_last_message(self, chat_room_id: int) -> Optional[Message]:
        return (
            self.session.query(Message)
            .filter(Message.chat_room_id == chat_room_id)
            .options(joinedload(Message.sender))
            .order_by(Message.id.desc())
            .first()
        )
