# bookshare/sa/models/__init__.py
from .base import Base, TimestampMixin
from .user import User, ChatPartner
from .book import Book, BookLike, SHARING_OPTIONS
from .chat import ChatRoom, Message

__all__ = [
    'Base',
    'TimestampMixin',
    'User',
    'ChatPartner',
    'Book',
    'BookLike',
    'SHARING_OPTIONS',
    'ChatRoom',
    'Message'
]
