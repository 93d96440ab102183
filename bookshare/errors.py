# bookshare/errors.py
from typing import Any, Optional


class BookshareError(Exception):
    """Base class for errors raised by the bookshare services"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(BookshareError):
    """A referenced entity does not exist"""

    def __init__(self, entity: str, identifier: Any):
        super().__init__(f"{entity.capitalize()} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class AlreadyLiked(BookshareError):
    def __init__(self, user_id: int, book_id: int):
        super().__init__(f"User {user_id} has already liked book {book_id}")
        self.user_id = user_id
        self.book_id = book_id


class Forbidden(BookshareError):
    pass


class InvalidArgument(BookshareError):
    pass


class Inconsistent(BookshareError):
    """Stored data contradicts itself, e.g. an index entry points at a missing document.

    Never healed silently; operators repair it with `bookshare index`.
    """

    def __init__(self, what: str, detail: str):
        super().__init__(f"Inconsistent {what}: {detail}")
        self.what = what
        self.detail = detail


class StoreUnavailable(BookshareError):
    """Transient storage failure. Safe for the caller to retry."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class AuthError(BookshareError):
    pass


def validate_id(value: Any, name: str) -> int:
    """Return `value` as an id, or raise InvalidArgument if it is not a positive integer"""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgument(f"Invalid {name}: {value!r}")
    return value
