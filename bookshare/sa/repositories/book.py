# bookshare/sa/repositories/book.py
from typing import Optional, List, Dict, Any
from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload
from bookshare.sa.models import Book, BookLike

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book by its ID with owner and likes loaded"""
        return (
            self.session.query(Book)
            .filter(Book.id == book_id)
            .options(
                joinedload(Book.owner),
                joinedload(Book.likes).joinedload(BookLike.user)
            )
            .first()
        )

    def create_book(self, owner_id: int, title: str, author: str, description: str, **sharing_options: bool) -> Book:
        book = Book(
            owner_id=owner_id,
            title=title,
            author=author,
            description=description,
            **sharing_options
        )
        self.session.add(book)
        self.session.commit()
        return book

    def update_book(self, book: Book, changes: Dict[str, Any]) -> Book:
        for field, value in changes.items():
            setattr(book, field, value)
        self.session.commit()
        return book

    def delete_book(self, book: Book) -> None:
        self.session.delete(book)
        self.session.commit()

    def search_books(
        self,
        query: Optional[str] = None,
        owner_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[Book]:
        """Search books by title, newest first.

        Args:
            query: Search query string
            owner_id: Only include books owned by this user
            limit: Maximum number of results to return
            offset: Number of records to skip

        Returns:
            List of Book objects with owner and likes loaded
        """
        base_query = self.session.query(Book).options(
            joinedload(Book.owner),
            joinedload(Book.likes).joinedload(BookLike.user)
        )
        base_query = self._apply_filters(base_query, query, owner_id)
        return base_query.order_by(desc(Book.created_at), desc(Book.id)).offset(offset).limit(limit).all()

    def count_books(self, query: Optional[str] = None, owner_id: Optional[int] = None) -> int:
        return self._apply_filters(self.session.query(Book), query, owner_id).count()

    def _apply_filters(self, base_query, query: Optional[str], owner_id: Optional[int]):
        if query and query.strip():
            base_query = base_query.filter(Book.title.ilike(f"%{query.strip()}%"))
        if owner_id is not None:
            base_query = base_query.filter(Book.owner_id == owner_id)
        return base_query

    def has_liked(self, book_id: int, user_id: int) -> bool:
        return (
            self.session.query(BookLike)
            .filter(BookLike.book_id == book_id, BookLike.user_id == user_id)
            .first()
        ) is not None

    def all_likes(self) -> List[BookLike]:
        """All likes, oldest first, with their books loaded"""
        return (
            self.session.query(BookLike)
            .options(joinedload(BookLike.book))
            .order_by(BookLike.created_at, BookLike.book_id, BookLike.user_id)
            .all()
        )

    def add_like(self, book_id: int, user_id: int) -> BookLike:
        """Stage a like. A duplicate raises IntegrityError on flush; the caller owns the commit."""
        like = BookLike(book_id=book_id, user_id=user_id)
        self.session.add(like)
        self.session.flush()
        return like
