# bookshare/sa/repositories/user.py
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from bookshare.errors import InvalidArgument
from bookshare.sa.models import User, ChatPartner

class UserRepository:
    """Repository for managing User entities and their chat-partner index."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def create_user(self, handle: str, password_hash: str) -> User:
        """Create a new user.

        Args:
            handle: The unique display handle of the user
            password_hash: Already hashed password

        Returns:
            The created User object

        Raises:
            InvalidArgument: If a user with the given handle already exists
        """
        existing = self.get_by_handle(handle)
        if existing:
            raise InvalidArgument(f"User with handle '{handle}' already exists")

        user = User(handle=handle, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise InvalidArgument(f"User with handle '{handle}' already exists")

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user to retrieve

        Returns:
            The User object if found, None otherwise
        """
        return self.session.query(User).filter(User.id == user_id).one_or_none()

    def get_by_handle(self, handle: str) -> Optional[User]:
        return self.session.query(User).filter(User.handle == handle).one_or_none()

    def count_users(self) -> int:
        return self.session.query(User).count()

    def search_users(self, query: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[User]:
        """Search for users by handle.

        Args:
            query: The search query string
            limit: Maximum number of results to return (default: 20)
            offset: Number of records to skip (default: 0)

        Returns:
            List of matching User objects ordered by handle
        """
        base_query = self.session.query(User)
        if query:
            base_query = base_query.filter(User.handle.ilike(f"%{query}%"))
        return base_query.order_by(User.handle).offset(offset).limit(limit).all()

    def get_chat_partner(self, user_id: int, partner_id: int) -> Optional[ChatPartner]:
        """Get the chat-partner index entry of `user_id` for `partner_id`, if any"""
        return (
            self.session.query(ChatPartner)
            .filter(
                ChatPartner.user_id == user_id,
                ChatPartner.partner_id == partner_id
            )
            .one_or_none()
        )

    def list_chat_partners(self, user_id: int) -> List[ChatPartner]:
        """Get a user's chat-partner index, most recently created first"""
        return (
            self.session.query(ChatPartner)
            .filter(ChatPartner.user_id == user_id)
            .order_by(ChatPartner.created_at.desc(), ChatPartner.partner_id)
            .all()
        )

    def all_chat_partners(self) -> List[ChatPartner]:
        return (
            self.session.query(ChatPartner)
            .order_by(ChatPartner.user_id, ChatPartner.partner_id)
            .all()
        )

    def add_chat_partner(self, user_id: int, partner_id: int, chat_room_id: int) -> ChatPartner:
        """Stage a chat-partner index entry. The caller owns the commit."""
        entry = ChatPartner(user_id=user_id, partner_id=partner_id, chat_room_id=chat_room_id)
        self.session.add(entry)
        self.session.flush()
        return entry
