# bookshare/sa/__init__.py
from .database import Database, store_guard
from .models import (
    Base, User, ChatPartner, Book, BookLike, ChatRoom, Message
)

__all__ = [
    'Database',
    'store_guard',
    'Base',
    'User',
    'ChatPartner',
    'Book',
    'BookLike',
    'ChatRoom',
    'Message'
]
