# api/routes/books.py

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from bookshare.auth import Identity
from bookshare.config import Settings
from bookshare.services.books import BookService
from bookshare.services.pairing import PairingEngine
from api.dependencies import get_db, get_current_identity, get_settings
from api.schemas.book import Book, BookCreate, BookUpdate
from api.schemas.chat import LikeResponse
from api.schemas.common import PaginatedResponse

router = APIRouter(prefix="/books", tags=["books"])

@router.get("", response_model=PaginatedResponse[Book])
def get_books(
    query: Optional[str] = Query(None, description="Search books by title"),
    owner_id: Optional[int] = Query(None, ge=1, description="Only books owned by this user"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Items per page"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """
    Get a paginated list of shared books, newest first.

    Args:
        query: Optional search string to filter books by title
        owner_id: Optional owner to filter books
        page: Page number (1-based)
        size: Number of items per page

    Returns:
        PaginatedResponse of books with owner, likes and sharing options
    """
    service = BookService(db)

    total_items = service.count_books(query=query, owner_id=owner_id)
    total_pages = (total_items + size - 1) // size
    offset = (page - 1) * size

    books = service.list_books(query=query, owner_id=owner_id, limit=size, offset=offset)

    return PaginatedResponse[Book](
        page=page,
        total_pages=total_pages,
        total_items=total_items,
        data=[Book.model_validate(book) for book in books],
    )

@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    service = BookService(db)
    book = service.create_book(
        identity.user_id,
        payload.title,
        payload.author,
        payload.description,
        **payload.sharing_options.model_dump()
    )
    return Book.model_validate(service.get_book(book.id))

@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    return Book.model_validate(BookService(db).get_book(book_id))

@router.patch("/{book_id}", response_model=Book)
def update_book(
    book_id: int,
    payload: BookUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Update a book's content or sharing options. Only the owner may do this."""
    changes = payload.model_dump(exclude_unset=True, exclude={"sharing_options"})
    if payload.sharing_options is not None:
        changes.update(payload.sharing_options.model_dump(exclude_unset=True))

    service = BookService(db)
    book = service.update_book(book_id, identity.user_id, **changes)
    return Book.model_validate(book)

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    BookService(db).delete_book(book_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{book_id}/like", response_model=LikeResponse)
def like_book(
    book_id: int,
    identity: Identity = Depends(get_current_identity),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """
    Like a book and get the chat room shared with its owner.

    The liker is always the authenticated caller. A repeated like answers 409
    so clients can treat it as a no-op.
    """
    engine = PairingEngine(db, max_retries=settings.pairing_max_retries)
    result = engine.like_book(identity.user_id, book_id)
    return LikeResponse.model_validate(result)
