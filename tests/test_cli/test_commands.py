# tests/test_cli/test_commands.py
import pytest
from click.testing import CliRunner

from bookshare.sa.database import Database
from bookshare.sa.repositories.user import UserRepository
from bookshare.services.pairing import PairingEngine
from cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, test_db_url):
    """Run a CLI command against the test database"""
    def _invoke(*args):
        return runner.invoke(cli, ['--db', test_db_url, *args])
    return _invoke


@pytest.fixture
def seeded(invoke):
    assert invoke('init-db').exit_code == 0
    assert invoke('user', 'create', 'alice', '--password', 'hunter22').exit_code == 0
    assert invoke('user', 'create', 'bob', '--password', 'hunter22').exit_code == 0
    result = invoke('book', 'add', 'alice', '--title', 'Dune', '--author', 'Frank Herbert',
                    '--description', 'Paperback', '--for-exchange')
    assert result.exit_code == 0
    return invoke


def test_init_db(invoke):
    result = invoke('init-db')
    assert result.exit_code == 0
    assert "Database initialized" in result.output


def test_user_create_and_list(seeded):
    result = seeded('user', 'list')
    assert result.exit_code == 0
    assert "alice" in result.output
    assert "bob" in result.output


def test_user_create_duplicate(seeded):
    result = seeded('user', 'create', 'alice', '--password', 'hunter22')
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_book_list(seeded):
    result = seeded('book', 'list')
    assert result.exit_code == 0
    assert "Dune by Frank Herbert" in result.output
    assert "owner: alice" in result.output
    assert "sharing: exchange" in result.output

    assert "No books found" in seeded('book', 'list', '--owner', 'bob').output


def test_book_add_for_unknown_owner(seeded):
    result = seeded('book', 'add', 'nobody', '--title', 'Emma', '--author', 'Jane Austen',
                    '--description', 'Hardcover')
    assert result.exit_code == 1
    assert "not found" in result.output


def test_chat_rooms_and_messages(seeded, test_db_url):
    database = Database(test_db_url)
    with database.get_db() as session:
        users = UserRepository(session)
        alice, bob = users.get_by_handle('alice'), users.get_by_handle('bob')
        room_id = PairingEngine(session).like_book(bob.id, alice.books[0].id).chat_room_id
    database.dispose()

    result = seeded('chat', 'rooms', 'alice')
    assert result.exit_code == 0
    assert f"Room {room_id} with bob" in result.output

    result = seeded('chat', 'messages', str(room_id), '--as', 'bob')
    assert result.exit_code == 0
    assert 'bob liked your book "Dune"' in result.output

    result = seeded('chat', 'messages', str(room_id), '--as', 'alice')
    assert result.exit_code == 0


def test_index_audit_and_repair(seeded):
    result = seeded('index', 'audit')
    assert result.exit_code == 0
    assert "consistent" in result.output

    result = seeded('index', 'repair')
    assert result.exit_code == 0
    assert "Added 0" in result.output
    assert "Paired 0" in result.output
