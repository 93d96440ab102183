# api/dependencies.py
from typing import Iterator, Optional
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from bookshare.auth import Identity, IdentityProvider
from bookshare.config import Settings
from bookshare.errors import AuthError


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Iterator[Session]:
    """Get a database session.

    A FastAPI dependency giving each request its own session from the
    Database attached to the app. The session is closed when the request
    is complete.

    Yields:
        Session: A SQLAlchemy session
    """
    session = request.app.state.database.get_session()
    try:
        yield session
    finally:
        session.close()


def get_identity_provider(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> IdentityProvider:
    return IdentityProvider(db, settings.secret_key, settings.token_max_age)


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    identity_provider: IdentityProvider = Depends(get_identity_provider)
) -> Identity:
    """Resolve the `Authorization: Bearer <token>` header to the caller's identity"""
    if not authorization:
        raise AuthError("Missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Authorization header must be 'Bearer <token>'")
    return identity_provider.authenticate(token.strip())
