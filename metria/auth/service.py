"""Session and account management on top of the record store."""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote_plus
from uuid import uuid4

from metria.models.enums import UserRole
from metria.models.records import User
from metria.store.record_store import SESSIONS, USERS, RecordStore

from .errors import DuplicateEmailError, InvalidCredentialsError
from .passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("name", "company", "avatar", "phone", "job_title", "city", "state", "country")


@dataclass(frozen=True)
class AuthSession:
    user: User
    token: str


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _default_avatar(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote_plus(name or 'User')}&background=random"


class AuthService:
    """Register, log in and resolve sessions.

    Password hashes never leave this class: every returned ``User`` is built
    from the public profile fields only.
    """

    def __init__(self, store: RecordStore):
        self._store = store

    def register(self, profile: dict[str, Any], password: str) -> AuthSession:
        """Create an account and open a session for it."""
        email = _normalize_email(profile.get("email", ""))
        if self._find_user_record(email) is not None:
            raise DuplicateEmailError(email)

        name = profile.get("name") or "User"
        record: dict[str, Any] = {
            field: profile.get(field) for field in _PROFILE_FIELDS
        }
        record.update({
            "id": str(uuid4()),
            "name": name,
            "email": email,
            "role": UserRole.USER.value,
            "avatar": profile.get("avatar") or _default_avatar(name),
            "password_hash": hash_password(password),
        })
        # The early check above skips hashing for known emails; this one is atomic.
        if not self._store.add_if_absent(USERS, record, "email"):
            raise DuplicateEmailError(email)
        logger.info(f"Registered user {record['id']}")

        return self.create_session(User.from_record(record))

    def login(self, email: str, password: str) -> AuthSession:
        record = self._find_user_record(_normalize_email(email))
        if record is None or not verify_password(password, record.get("password_hash", "")):
            raise InvalidCredentialsError()
        return self.create_session(User.from_record(record))

    def create_session(self, user: User) -> AuthSession:
        """Open a session for an already authenticated user."""
        token = secrets.token_urlsafe(32)
        self._store.add(SESSIONS, {
            "id": token,
            "user_id": user.id,
            "created_at": int(time.time() * 1000),
        })
        return AuthSession(user=user, token=token)

    def get_session(self, token: Optional[str]) -> Optional[User]:
        """Return the user behind ``token``, or None for unknown tokens."""
        if not token:
            return None
        session = self._store.get(SESSIONS, token)
        if session is None:
            return None
        record = self._store.get(USERS, session["user_id"])
        if record is None:
            return None
        return User.from_record(record)

    def logout(self, token: str) -> None:
        self._store.delete(SESSIONS, token)

    def check_user_exists(self, email: str) -> Optional[User]:
        record = self._find_user_record(_normalize_email(email))
        return User.from_record(record) if record else None

    def get_all_users(self) -> list[User]:
        return [User.from_record(r) for r in self._store.get_all(USERS)]

    def _find_user_record(self, email: str) -> Optional[dict[str, Any]]:
        matches = self._store.find_by_field(USERS, "email", email)
        return matches[0] if matches else None
