# api/routes/__init__.py
from . import auth, books, chatrooms

__all__ = ['auth', 'books', 'chatrooms']
