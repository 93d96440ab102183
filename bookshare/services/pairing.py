# bookshare/services/pairing.py
import logging
from dataclasses import dataclass
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookshare.errors import (
    NotFound, AlreadyLiked, InvalidArgument, Inconsistent, StoreUnavailable, validate_id
)
from bookshare.sa.database import store_guard
from bookshare.sa.models import ChatRoom
from bookshare.sa.repositories.book import BookRepository
from bookshare.sa.repositories.chat import ChatRoomRepository
from bookshare.sa.repositories.user import UserRepository
from bookshare.services.chat import RenderedMessage, render_message

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class LikeResult:
    chat_room_id: int
    owner_display_handle: str
    messages: List[RenderedMessage]


def notification_text(liker_handle: str, book_title: str) -> str:
    return f'{liker_handle} liked your book "{book_title}"'


class PairingEngine:
    """Records likes and pairs the liker with the book's owner in one chat room per user pair.

    A like runs as a saga over separate commits:
      1. the like is recorded on the book,
      2. the notification is appended to the pair's room, creating the room
         and both chat-partner index entries in a single commit if needed.
    Room creation is an optimistic conditional write: the unique constraint on
    the participant pair rejects a second room, and the loser retries the
    lookup. A failure after step 1 is logged for reconciliation, not rolled back.
    """

    def __init__(self, session: Session, max_retries: int = DEFAULT_MAX_RETRIES):
        """
        Args:
            session: SQLAlchemy session scoped to the current request
            max_retries: Attempts at the find-or-create step before giving up
        """
        self.session = session
        self.max_retries = max(1, max_retries)
        self.books = BookRepository(session)
        self.users = UserRepository(session)
        self.rooms = ChatRoomRepository(session)

    def like_book(self, acting_user_id: int, book_id: int) -> LikeResult:
        """Like a book and return the chat room shared with its owner.

        Args:
            acting_user_id: Authenticated id of the liker
            book_id: ID of the liked book

        Returns:
            LikeResult with the room id, the owner's handle and the room's messages

        Raises:
            InvalidArgument: Malformed ids, or the liker owns the book
            NotFound: Book or liker does not exist
            AlreadyLiked: The liker already liked this book
            Inconsistent: The chat-partner index disagrees with the stored rooms
            StoreUnavailable: The store failed, or room creation kept conflicting
        """
        validate_id(acting_user_id, "user id")
        validate_id(book_id, "book id")

        with store_guard(self.session, "like_book"):
            book = self.books.get_by_id(book_id)
            if book is None:
                raise NotFound("book", book_id)
            liker = self.users.get_by_id(acting_user_id)
            if liker is None:
                raise NotFound("user", acting_user_id)
            if book.owner_id == acting_user_id:
                raise InvalidArgument("You cannot like your own book")

            owner_id = book.owner_id
            owner_handle = book.owner.handle
            text = notification_text(liker.handle, book.title)

            self._record_like(book_id, acting_user_id)

            try:
                room_id = self._pair(book_id, acting_user_id, owner_id, text)
            except Exception:
                logger.error(
                    f"Like of book {book_id} by user {acting_user_id} was recorded but pairing "
                    f"with owner {owner_id} did not complete; chat partner index needs reconciliation"
                )
                raise

            messages = [render_message(m) for m in self.rooms.get_messages(room_id)]

        return LikeResult(chat_room_id=room_id, owner_display_handle=owner_handle, messages=messages)

    def pair_like(self, book_id: int, liker_id: int) -> int:
        """Run the find-or-create step for a like that is already recorded.

        Used to finish a like whose pairing failed after the like was committed.
        Returns the id of the room the notification was appended to.
        """
        validate_id(book_id, "book id")
        validate_id(liker_id, "user id")

        with store_guard(self.session, "pair_like"):
            book = self.books.get_by_id(book_id)
            liker = self.users.get_by_id(liker_id)
            if book is None or liker is None or not self.books.has_liked(book_id, liker_id):
                raise NotFound("like", f"{liker_id}->{book_id}")
            room_id = self._pair(book_id, liker_id, book.owner_id, notification_text(liker.handle, book.title))

        logger.info(f"Paired recorded like of book {book_id} by user {liker_id} into chat room {room_id}")
        return room_id

    def _record_like(self, book_id: int, user_id: int) -> None:
        if self.books.has_liked(book_id, user_id):
            raise AlreadyLiked(user_id, book_id)
        try:
            self.books.add_like(book_id, user_id)
            self.session.commit()
        except IntegrityError:
            # a concurrent duplicate like won the insert
            self.session.rollback()
            raise AlreadyLiked(user_id, book_id)

    def _pair(self, book_id: int, liker_id: int, owner_id: int, text: str) -> int:
        """Append `text` to the pair's room, creating it if needed. Returns the room id."""
        for attempt in range(1, self.max_retries + 1):
            entry = self.users.get_chat_partner(liker_id, owner_id)
            if entry is not None:
                room = self._indexed_room(entry.chat_room_id, liker_id, owner_id)
                self.rooms.append_message(room, liker_id, text)
                self.session.commit()
                logger.info(f"Reused chat room {room.id} for users {liker_id} and {owner_id}")
                return room.id

            mirror = self.users.get_chat_partner(owner_id, liker_id)
            if mirror is not None:
                raise self._inconsistent(
                    f"user {owner_id} has a chat partner entry for user {liker_id} "
                    f"(chat room {mirror.chat_room_id}) but user {liker_id} has none back"
                )

            existing = self.rooms.get_by_pair(liker_id, owner_id)
            if existing is not None:
                raise self._inconsistent(
                    f"chat room {existing.id} exists for users {liker_id} and {owner_id} "
                    f"but user {liker_id} has no chat partner entry for it"
                )

            try:
                room = self.rooms.create_room(book_id, liker_id, owner_id, sender_id=liker_id, text=text)
                self.users.add_chat_partner(liker_id, owner_id, room.id)
                self.users.add_chat_partner(owner_id, liker_id, room.id)
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                logger.info(
                    f"Chat room creation for users {liker_id} and {owner_id} conflicted "
                    f"(attempt {attempt}/{self.max_retries})"
                )
                continue

            logger.info(f"Created chat room {room.id} for users {liker_id} and {owner_id} from book {book_id}")
            return room.id

        raise StoreUnavailable(
            f"Could not pair users {liker_id} and {owner_id} after {self.max_retries} conflicting attempts"
        )

    def _indexed_room(self, chat_room_id: int, liker_id: int, owner_id: int) -> ChatRoom:
        room = self.rooms.get_by_id(chat_room_id)
        if room is None:
            raise self._inconsistent(
                f"user {liker_id} has a chat partner entry for user {owner_id} "
                f"pointing at missing chat room {chat_room_id}"
            )
        if set(room.participant_ids) != {liker_id, owner_id}:
            raise self._inconsistent(
                f"chat room {chat_room_id} indexed for users {liker_id} and {owner_id} "
                f"has participants {room.participant_ids}"
            )
        mirror = self.users.get_chat_partner(owner_id, liker_id)
        if mirror is None or mirror.chat_room_id != chat_room_id:
            raise self._inconsistent(
                f"user {owner_id} has no chat partner entry mirroring chat room {chat_room_id} "
                f"for user {liker_id}"
            )
        return room

    def _inconsistent(self, detail: str) -> Inconsistent:
        logger.critical(f"Chat partner index inconsistency: {detail}")
        return Inconsistent("chat_partner_index", detail)
