# bookshare/services/index_audit.py
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Dict, Tuple
from sqlalchemy.orm import Session

from bookshare.sa.database import store_guard
from bookshare.sa.models import ChatPartner, ChatRoom
from bookshare.sa.repositories.book import BookRepository
from bookshare.sa.repositories.chat import ChatRoomRepository
from bookshare.sa.repositories.user import UserRepository
from bookshare.services.pairing import PairingEngine

logger = logging.getLogger(__name__)


class ProblemKind(str, Enum):
    MISSING_ROOM = "missing_room"                   # entry points at a room that does not exist
    PARTICIPANT_MISMATCH = "participant_mismatch"   # room exists but is not shared by the pair
    MISSING_MIRROR = "missing_mirror"               # partner has no entry back
    MISMATCHED_MIRROR = "mismatched_mirror"         # partner's entry points at another room
    UNINDEXED_ROOM = "unindexed_room"               # room exists with no entry from either side
    UNPAIRED_LIKE = "unpaired_like"                 # like recorded but the pair was never paired


@dataclass(frozen=True)
class IndexProblem:
    kind: ProblemKind
    user_id: int
    partner_id: int
    chat_room_id: Optional[int]
    book_id: Optional[int] = None

    def describe(self) -> str:
        if self.kind == ProblemKind.UNPAIRED_LIKE:
            return f"{self.kind.value}: user {self.user_id} liked book {self.book_id} of user {self.partner_id}"
        return f"{self.kind.value}: user {self.user_id} / partner {self.partner_id} / chat room {self.chat_room_id}"


class IndexAuditor:
    """Checks the chat-partner index against the stored chat rooms.

    The pairing engine refuses to work on a drifted index; this is the
    operator-side counterpart that finds the drift and repairs what can be
    repaired without guessing.
    """

    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepository(session)
        self.users = UserRepository(session)
        self.rooms = ChatRoomRepository(session)

    def audit(self) -> List[IndexProblem]:
        with store_guard(self.session, "index_audit"):
            entries = self.users.all_chat_partners()
            rooms = {room.id: room for room in self.rooms.all_rooms()}
            likes = self.books.all_likes()

        by_pair: Dict[Tuple[int, int], ChatPartner] = {(e.user_id, e.partner_id): e for e in entries}
        indexed_rooms = set()
        problems = []

        for entry in entries:
            room = rooms.get(entry.chat_room_id)
            if room is None:
                problems.append(self._problem(ProblemKind.MISSING_ROOM, entry))
                continue
            if set(room.participant_ids) != {entry.user_id, entry.partner_id}:
                problems.append(self._problem(ProblemKind.PARTICIPANT_MISMATCH, entry))
                continue
            indexed_rooms.add(room.id)

            mirror = by_pair.get((entry.partner_id, entry.user_id))
            if mirror is None:
                problems.append(self._problem(ProblemKind.MISSING_MIRROR, entry))
            elif mirror.chat_room_id != entry.chat_room_id:
                problems.append(self._problem(ProblemKind.MISMATCHED_MIRROR, entry))

        for room_id, room in rooms.items():
            if room_id not in indexed_rooms:
                problems.append(self._log(IndexProblem(
                    kind=ProblemKind.UNINDEXED_ROOM,
                    user_id=room.participant_low_id,
                    partner_id=room.participant_high_id,
                    chat_room_id=room_id,
                )))

        room_pairs = {room.participant_ids for room in rooms.values()}
        for like in likes:
            owner_id = like.book.owner_id
            if (like.user_id, owner_id) in by_pair or (owner_id, like.user_id) in by_pair:
                continue
            if ChatRoom.ordered_pair(like.user_id, owner_id) in room_pairs:
                continue
            problems.append(self._log(IndexProblem(
                kind=ProblemKind.UNPAIRED_LIKE,
                user_id=like.user_id,
                partner_id=owner_id,
                chat_room_id=None,
                book_id=like.book_id,
            )))

        return problems

    def repair_mirrors(self) -> int:
        """Add missing mirrored entries whose forward entry is sound.

        Returns:
            Number of entries added
        """
        missing = [p for p in self.audit() if p.kind == ProblemKind.MISSING_MIRROR]
        with store_guard(self.session, "index_repair"):
            for problem in missing:
                self.users.add_chat_partner(problem.partner_id, problem.user_id, problem.chat_room_id)
                logger.info(
                    f"Added chat partner entry {problem.partner_id}->{problem.user_id} "
                    f"for chat room {problem.chat_room_id}"
                )
            self.session.commit()
        return len(missing)

    def repair_unpaired_likes(self) -> int:
        """Pair likes that were recorded without a chat room.

        Each like gets its notification in the pair's room, which is created
        for the first like of a pair and reused for the rest.

        Returns:
            Number of likes paired
        """
        unpaired = [p for p in self.audit() if p.kind == ProblemKind.UNPAIRED_LIKE]
        engine = PairingEngine(self.session)
        for problem in unpaired:
            engine.pair_like(problem.book_id, problem.user_id)
        return len(unpaired)

    def _problem(self, kind: ProblemKind, entry: ChatPartner) -> IndexProblem:
        return self._log(IndexProblem(
            kind=kind,
            user_id=entry.user_id,
            partner_id=entry.partner_id,
            chat_room_id=entry.chat_room_id,
        ))

    @staticmethod
    def _log(problem: IndexProblem) -> IndexProblem:
        logger.warning(f"Chat partner index problem {problem.describe()}")
        return problem
