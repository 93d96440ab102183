# bookshare/sa/models/user.py
from sqlalchemy import Integer, String, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class ChatPartner(Base, TimestampMixin):
    """Chat-partner index entry: which room a user shares with a given partner.

    The primary key allows one entry per (user, partner). `chat_room_id` is a
    plain reference so a dangling entry can be detected instead of cascaded.
    """
    __tablename__ = 'chat_partner'

    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), primary_key=True)
    partner_id: Mapped[int] = mapped_column(ForeignKey('user.id'), primary_key=True)
    chat_room_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    user = relationship('User', foreign_keys=[user_id], back_populates='chat_partners')
    partner = relationship('User', foreign_keys=[partner_id])

    __table_args__ = (
        Index('idx_chat_partner_chat_room_id', 'chat_room_id'),
    )

class User(Base, TimestampMixin):
    __tablename__ = 'user'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    handle: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Relationships
    books = relationship('Book', back_populates='owner')
    chat_partners = relationship('ChatPartner', foreign_keys=[ChatPartner.user_id], back_populates='user')
