# tests/conftest.py
import sys
import pytest
from pathlib import Path

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from bookshare.config import Settings
from bookshare.sa.database import Database
from bookshare.sa.models import Book, User
from bookshare.sa.repositories.book import BookRepository
from bookshare.sa.repositories.user import UserRepository

# Repository tests don't need real hashes; hashing is covered in test_auth
FAKE_PASSWORD_HASH = "pbkdf2:sha256:1$salt$hash"

@pytest.fixture
def test_db_url(tmp_path):
    """SQLite file in a temporary directory, so several connections can share it"""
    return f"sqlite:///{tmp_path / 'test_bookshare.db'}"

@pytest.fixture
def settings(test_db_url):
    return Settings(
        database_url=test_db_url,
        secret_key="test-secret",
        token_max_age=3600,
        store_timeout=10.0,
        pairing_max_retries=3,
        cors_origins=["http://localhost"],
    )

@pytest.fixture
def database(settings):
    """Create a test database instance with a fresh schema"""
    db = Database(settings.database_url, timeout=settings.store_timeout)
    db.init_db()
    yield db
    db.dispose()

@pytest.fixture
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def make_user(db_session):
    """Factory creating users with a given handle"""
    def _make_user(handle: str) -> User:
        return UserRepository(db_session).create_user(handle, FAKE_PASSWORD_HASH)
    return _make_user

@pytest.fixture
def make_book(db_session):
    """Factory creating a book owned by a user"""
    def _make_book(owner: User, title: str, **sharing_options) -> Book:
        return BookRepository(db_session).create_book(
            owner.id,
            title=title,
            author=f"Author of {title}",
            description=f"A copy of {title}",
            **sharing_options
        )
    return _make_book

@pytest.fixture
def alice(make_user):
    return make_user("alice")

@pytest.fixture
def bob(make_user):
    return make_user("bob")

@pytest.fixture
def carol(make_user):
    return make_user("carol")

@pytest.fixture
def dune(make_book, alice):
    """Book "Dune" owned by alice"""
    return make_book(alice, "Dune")
