# tests/test_auth.py
import pytest
from itsdangerous import URLSafeTimedSerializer

from bookshare.auth import IdentityProvider, Identity, TOKEN_SALT
from bookshare.errors import AuthError, InvalidArgument


@pytest.fixture
def identity_provider(db_session, settings):
    return IdentityProvider(db_session, settings.secret_key, token_max_age=settings.token_max_age)


def test_register_hashes_password(identity_provider):
    user = identity_provider.register("dana", "hunter22")

    assert user.id is not None
    assert user.handle == "dana"
    assert user.password_hash != "hunter22"


def test_login_and_authenticate(identity_provider):
    user = identity_provider.register("dana", "hunter22")

    token = identity_provider.login("dana", "hunter22")

    assert identity_provider.authenticate(token) == Identity(user_id=user.id, display_handle="dana")


@pytest.mark.parametrize("handle,password", [
    ("da", "hunter22"),
    ("   ", "hunter22"),
    ("x" * 256, "hunter22"),
    ("dana", "short"),
    ("dana", None),
])
def test_register_validation(identity_provider, handle, password):
    with pytest.raises(InvalidArgument):
        identity_provider.register(handle, password)


def test_register_duplicate_handle(identity_provider):
    identity_provider.register("dana", "hunter22")

    with pytest.raises(InvalidArgument, match="already exists"):
        identity_provider.register("dana", "other-password")


@pytest.mark.parametrize("handle,password", [("dana", "wrong-password"), ("nobody", "hunter22")])
def test_login_rejects_bad_credentials(identity_provider, handle, password):
    identity_provider.register("dana", "hunter22")

    with pytest.raises(AuthError, match="Invalid credentials"):
        identity_provider.login(handle, password)


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
def test_authenticate_rejects_garbage(identity_provider, token):
    with pytest.raises(AuthError):
        identity_provider.authenticate(token)


def test_authenticate_rejects_tampered_token(identity_provider):
    identity_provider.register("dana", "hunter22")
    token = identity_provider.login("dana", "hunter22")

    with pytest.raises(AuthError, match="Invalid token"):
        identity_provider.authenticate(("x" if token[0] != "x" else "y") + token[1:])


def test_authenticate_rejects_foreign_key(identity_provider, db_session):
    identity_provider.register("dana", "hunter22")
    forged = IdentityProvider(db_session, "some-other-secret").login("dana", "hunter22")

    with pytest.raises(AuthError):
        identity_provider.authenticate(forged)


def test_expired_token(db_session, settings):
    provider = IdentityProvider(db_session, settings.secret_key, token_max_age=-1)
    provider.register("dana", "hunter22")
    token = provider.login("dana", "hunter22")

    with pytest.raises(AuthError, match="expired"):
        provider.authenticate(token)


def test_token_for_unknown_user(identity_provider, settings):
    token = URLSafeTimedSerializer(settings.secret_key, salt=TOKEN_SALT).dumps({"id": 424242})

    with pytest.raises(AuthError):
        identity_provider.authenticate(token)
