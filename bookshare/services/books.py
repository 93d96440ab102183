# bookshare/services/books.py
import logging
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session

from bookshare.errors import NotFound, Forbidden, InvalidArgument, validate_id
from bookshare.sa.database import store_guard
from bookshare.sa.models import Book, SHARING_OPTIONS
from bookshare.sa.repositories.book import BookRepository

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ('title', 'author', 'description')


def _clean_content(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"Book {field} must not be empty")
    return value.strip()


class BookService:
    """Book listing and owner-only content management. Likes go through PairingEngine."""

    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)

    def create_book(
        self,
        owner_id: int,
        title: str,
        author: str,
        description: str,
        **sharing_options: bool
    ) -> Book:
        validate_id(owner_id, "user id")
        content = {
            'title': _clean_content('title', title),
            'author': _clean_content('author', author),
            'description': _clean_content('description', description),
        }
        options = self._clean_sharing_options(sharing_options)

        with store_guard(self.session, "create_book"):
            book = self.books.create_book(owner_id, **content, **options)
        logger.info(f"User {owner_id} shared book {book.id} ({book.title})")
        return book

    def get_book(self, book_id: int) -> Book:
        validate_id(book_id, "book id")
        with store_guard(self.session, "get_book"):
            book = self.books.get_by_id(book_id)
        if book is None:
            raise NotFound("book", book_id)
        return book

    def list_books(
        self,
        query: Optional[str] = None,
        owner_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Book]:
        with store_guard(self.session, "list_books"):
            return self.books.search_books(query=query, owner_id=owner_id, limit=limit, offset=offset)

    def count_books(self, query: Optional[str] = None, owner_id: Optional[int] = None) -> int:
        with store_guard(self.session, "count_books"):
            return self.books.count_books(query=query, owner_id=owner_id)

    def update_book(self, book_id: int, acting_user_id: int, **changes: Any) -> Book:
        """Update content fields and sharing options of a book, as its owner

        Raises:
            Forbidden: The acting user does not own the book
            InvalidArgument: Unknown field or blank content
        """
        unknown = set(changes) - set(CONTENT_FIELDS) - set(SHARING_OPTIONS)
        if unknown:
            raise InvalidArgument(f"Cannot update book fields: {', '.join(sorted(unknown))}")

        cleaned: Dict[str, Any] = {}
        for field, value in changes.items():
            if field in CONTENT_FIELDS:
                cleaned[field] = _clean_content(field, value)
        cleaned.update(self._clean_sharing_options(
            {k: v for k, v in changes.items() if k in SHARING_OPTIONS}
        ))

        book = self._owned_book(book_id, acting_user_id)
        with store_guard(self.session, "update_book"):
            return self.books.update_book(book, cleaned)

    def delete_book(self, book_id: int, acting_user_id: int) -> None:
        """Delete a book and its likes. Chat rooms started from it are kept."""
        book = self._owned_book(book_id, acting_user_id)
        with store_guard(self.session, "delete_book"):
            self.books.delete_book(book)
        logger.info(f"User {acting_user_id} deleted book {book_id}")

    def _owned_book(self, book_id: int, acting_user_id: int) -> Book:
        validate_id(acting_user_id, "user id")
        book = self.get_book(book_id)
        if book.owner_id != acting_user_id:
            raise Forbidden(f"User {acting_user_id} does not own book {book_id}")
        return book

    @staticmethod
    def _clean_sharing_options(options: Dict[str, Any]) -> Dict[str, bool]:
        cleaned = {}
        for option, value in options.items():
            if option not in SHARING_OPTIONS:
                raise InvalidArgument(f"Unknown sharing option: {option}")
            if not isinstance(value, bool):
                raise InvalidArgument(f"Sharing option {option} must be true or false")
            cleaned[option] = value
        return cleaned
