# bookshare/sa/repositories/__init__.py
from .user import UserRepository
from .book import BookRepository
from .chat import ChatRoomRepository

__all__ = ['UserRepository', 'BookRepository', 'ChatRoomRepository']
