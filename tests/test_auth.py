"""Tests for AuthService: registration, login and sessions."""

import threading

import pytest

from metria.auth import AuthService, DuplicateEmailError, InvalidCredentialsError
from metria.auth.passwords import hash_password, verify_password
from metria.store import SESSIONS, USERS


@pytest.fixture
def auth(store):
    return AuthService(store)


def _register(auth, email="ana@acme.com", password="s3cret", **profile):
    return auth.register({"name": "Ana", "email": email, **profile}, password)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret")
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_is_rejected(self):
        assert verify_password("s3cret", "not-a-hash") is False


class TestRegister:
    def test_register_returns_session(self, auth, store):
        session = _register(auth, company="Acme")
        assert session.token
        assert session.user.email == "ana@acme.com"
        assert session.user.company == "Acme"
        assert session.user.role.value == "user"
        assert store.get(SESSIONS, session.token)["user_id"] == session.user.id

    def test_default_avatar(self, auth):
        session = _register(auth)
        assert session.user.avatar.startswith("https://ui-avatars.com/api/?name=Ana")

    def test_password_is_hashed(self, auth, store):
        session = _register(auth)
        record = store.get(USERS, session.user.id)
        assert record["password_hash"] != "s3cret"
        assert "password_hash" not in session.user.to_record()

    def test_duplicate_email(self, auth):
        _register(auth)
        with pytest.raises(DuplicateEmailError, match="Email already registered."):
            _register(auth, email="  ANA@acme.com ")


class TestLogin:
    def test_login_success(self, auth):
        registered = _register(auth)
        session = auth.login("Ana@Acme.com", "s3cret")
        assert session.user.id == registered.user.id
        assert session.token != registered.token

    def test_wrong_password(self, auth):
        _register(auth)
        with pytest.raises(InvalidCredentialsError, match="Invalid credentials."):
            auth.login("ana@acme.com", "nope")

    def test_unknown_email(self, auth):
        with pytest.raises(InvalidCredentialsError):
            auth.login("ghost@acme.com", "s3cret")


class TestSessions:
    def test_get_session(self, auth):
        session = _register(auth)
        assert auth.get_session(session.token).id == session.user.id

    def test_unknown_or_empty_token(self, auth):
        assert auth.get_session("bogus") is None
        assert auth.get_session(None) is None
        assert auth.get_session("") is None

    def test_logout_ends_session(self, auth):
        session = _register(auth)
        auth.logout(session.token)
        assert auth.get_session(session.token) is None

    def test_check_user_exists(self, auth):
        _register(auth)
        assert auth.check_user_exists("ana@acme.com").name == "Ana"
        assert auth.check_user_exists("other@acme.com") is None

    def test_get_all_users(self, auth):
        _register(auth)
        _register(auth, email="bia@acme.com")
        assert {u.email for u in auth.get_all_users()} == {"ana@acme.com", "bia@acme.com"}


class TestConcurrentRegistration:
    def test_same_email_registers_once(self, auth, store):
        outcomes = []

        def register():
            try:
                _register(auth)
                outcomes.append("ok")
            except DuplicateEmailError:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=register) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("duplicate") == 3
        assert len(store.find_by_field(USERS, "email", "ana@acme.com")) == 1
