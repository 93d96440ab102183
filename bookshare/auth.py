# bookshare/auth.py
import logging
from dataclasses import dataclass
from typing import Optional
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from bookshare.errors import AuthError, InvalidArgument
from bookshare.sa.models import User
from bookshare.sa.repositories.user import UserRepository

logger = logging.getLogger(__name__)

MIN_HANDLE_LENGTH = 3
MAX_HANDLE_LENGTH = 255
MIN_PASSWORD_LENGTH = 6
TOKEN_SALT = "bookshare-auth"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller. The only source of a user id for the services."""
    user_id: int
    display_handle: str


class IdentityProvider:
    """Registers users, issues bearer tokens and resolves them back to an Identity."""

    def __init__(self, session: Session, secret_key: str, token_max_age: int = 3600):
        """
        Args:
            session: SQLAlchemy session
            secret_key: Key used to sign bearer tokens
            token_max_age: Token lifetime in seconds
        """
        self.users = UserRepository(session)
        self.token_max_age = token_max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)

    def register(self, handle: str, password: str) -> User:
        handle = (handle or "").strip()
        if not MIN_HANDLE_LENGTH <= len(handle) <= MAX_HANDLE_LENGTH:
            raise InvalidArgument(
                f"Handle must be between {MIN_HANDLE_LENGTH} and {MAX_HANDLE_LENGTH} characters"
            )
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise InvalidArgument(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = self.users.create_user(handle, generate_password_hash(password))
        logger.info(f"Registered user {user.id} ({user.handle})")
        return user

    def login(self, handle: str, password: str) -> str:
        """Check credentials and return a signed bearer token"""
        user = self.users.get_by_handle((handle or "").strip())
        if user is None or not check_password_hash(user.password_hash, password or ""):
            raise AuthError("Invalid credentials")
        return self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return self._serializer.dumps({"id": user.id})

    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthError("Missing bearer token")
        try:
            payload = self._serializer.loads(token, max_age=self.token_max_age)
        except SignatureExpired:
            raise AuthError("Token expired")
        except BadSignature:
            raise AuthError("Invalid token")

        user_id = payload.get("id") if isinstance(payload, dict) else None
        user = self.users.get_by_id(user_id) if isinstance(user_id, int) else None
        if user is None:
            logger.warning(f"Valid token for unknown user {user_id!r}")
            raise AuthError("Invalid token")
        return Identity(user_id=user.id, display_handle=user.handle)
