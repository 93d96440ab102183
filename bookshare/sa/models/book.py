# bookshare/sa/models/book.py
from datetime import datetime
from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin, utcnow

SHARING_OPTIONS = ('for_sale', 'for_exchange', 'for_borrow', 'for_discussion')

class BookLike(Base):
    """A user's like of a book. The primary key makes a like idempotent."""
    __tablename__ = 'book_like'

    book_id: Mapped[int] = mapped_column(ForeignKey('book.id'), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('user.id'), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    book = relationship('Book', back_populates='likes')
    user = relationship('User')

class Book(Base, TimestampMixin):
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    owner_id: Mapped[int] = mapped_column(ForeignKey('user.id'), nullable=False)
    for_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    for_exchange: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    for_borrow: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    for_discussion: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship('User', back_populates='books')
    likes = relationship('BookLike', back_populates='book', cascade='all, delete-orphan')

    # Convenience relationship
    liked_by = relationship('User', secondary='book_like', viewonly=True)

    __table_args__ = (
        Index('idx_book_owner_id', 'owner_id'),
        Index('idx_book_title', 'title'),
    )

    @property
    def sharing_options(self) -> dict:
        return {option: bool(getattr(self, option)) for option in SHARING_OPTIONS}
