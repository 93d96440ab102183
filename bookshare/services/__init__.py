# bookshare/services/__init__.py
from .books import BookService
from .chat import ChatService, RenderedMessage, ChatRoomSummary
from .index_audit import IndexAuditor, IndexProblem, ProblemKind
from .pairing import PairingEngine, LikeResult

__all__ = [
    'BookService',
    'ChatService',
    'RenderedMessage',
    'ChatRoomSummary',
    'IndexAuditor',
    'IndexProblem',
    'ProblemKind',
    'PairingEngine',
    'LikeResult'
]
