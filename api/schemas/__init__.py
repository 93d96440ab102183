# api/schemas/__init__.py
from .common import PaginatedResponse
from .auth import Credentials, RegisteredUser, Token
from .book import Book, BookCreate, BookUpdate, SharingOptions, UserRef
from .chat import Message, MessageCreate, LikeResponse, ChatRoomSummary

__all__ = [
    'PaginatedResponse',
    'Credentials',
    'RegisteredUser',
    'Token',
    'Book',
    'BookCreate',
    'BookUpdate',
    'SharingOptions',
    'UserRef',
    'Message',
    'MessageCreate',
    'LikeResponse',
    'ChatRoomSummary'
]
