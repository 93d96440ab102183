# bookshare/sa/models/chat.py
from datetime import datetime
from typing import Tuple
from sqlalchemy import Integer, Text, ForeignKey, DateTime, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, utcnow

class ChatRoom(Base):
    """A conversation between exactly two users.

    The pair is stored low id first so the unique constraint covers the
    unordered pair; it is what turns concurrent room creation into a conflict.
    """
    __tablename__ = 'chat_room'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False)  # originating book, kept after deletion
    participant_low_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    participant_high_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    participant_low = relationship('User', foreign_keys=[participant_low_id])
    participant_high = relationship('User', foreign_keys=[participant_high_id])
    messages = relationship('Message', back_populates='chat_room', order_by='Message.id')

    __table_args__ = (
        UniqueConstraint('participant_low_id', 'participant_high_id', name='uix_chat_room_pair'),
        CheckConstraint('participant_low_id < participant_high_id', name='ck_chat_room_pair_order'),
    )

    @staticmethod
    def ordered_pair(user_a: int, user_b: int) -> Tuple[int, int]:
        return (user_a, user_b) if user_a < user_b else (user_b, user_a)

    @property
    def participant_ids(self) -> Tuple[int, int]:
        return (self.participant_low_id, self.participant_high_id)

    def has_participant(self, user_id: int) -> bool:
        return user_id in self.participant_ids

class Message(Base):
    __tablename__ = 'message'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    chat_room_id: Mapped[int] = mapped_column(ForeignKey('chat_room.id'), nullable=False)
    sender_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    chat_room = relationship('ChatRoom', back_populates='messages')
    sender = relationship('User')

    __table_args__ = (
        Index('idx_message_chat_room_id', 'chat_room_id', 'id'),
    )
