# tests/test_sa/test_schema.py
import pytest
from bookshare.sa.models import User, ChatPartner, Book, BookLike, ChatRoom, Message
from tests.test_sa.utils import DBInspector, compare_model_to_db


@pytest.mark.parametrize("model", [User, ChatPartner, Book, BookLike, ChatRoom, Message])
def test_model_matches_schema(db_session, model):
    """Test each model matches the created database table"""
    differences = compare_model_to_db(db_session, model)
    assert not differences, f"Schema differences found: {differences}"

def test_all_tables_created(db_session):
    tables = set(DBInspector(db_session).get_all_tables())
    assert {"user", "chat_partner", "book", "book_like", "chat_room", "message"} <= tables

def test_chat_room_pair_is_unique(db_session):
    """The pair constraint is what makes concurrent room creation conflict"""
    info = DBInspector(db_session).get_table_info("chat_room")
    unique_columns = [set(u['column_names']) for u in info['unique_constraints']]
    assert {"participant_low_id", "participant_high_id"} in unique_columns

def test_chat_partner_keyed_by_user_and_partner(db_session):
    info = DBInspector(db_session).get_table_info("chat_partner")
    assert set(info['primary_key']['constrained_columns']) == {"user_id", "partner_id"}

def test_book_like_keyed_by_book_and_user(db_session):
    info = DBInspector(db_session).get_table_info("book_like")
    assert set(info['primary_key']['constrained_columns']) == {"book_id", "user_id"}
