"""Login sessions and registered accounts.

Passwords are stored as salted PBKDF2 hashes and compared in constant
time; plaintext never reaches storage.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from novaticket.constants import SESSION_KEY, USERS_KEY
from novaticket.ids import IdAllocator
from novaticket.storage import StorageContext, StorageWriteFailed

if TYPE_CHECKING:
    from novaticket.sync import SyncBroadcaster

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[\w.-]+@gmail\.com$")
PASSWORD_MIN = 5
FULL_NAME_MIN = 3
HASH_ITERATIONS = 100_000

INVALID_LOGIN = "Invalid email or password. Please try again."
DUPLICATE_EMAIL = "An account with this email already exists"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def hash_password(password: str, salt: str | None = None, iterations: int = HASH_ITERATIONS) -> str:
    """Hash a password as ``pbkdf2_sha256$iterations$salt$hex``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check password against a hash from hash_password."""
    try:
        algorithm, iterations, salt, _ = encoded.split("$", 3)
        iterations = int(iterations)
    except (AttributeError, ValueError):
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    return hmac.compare_digest(hash_password(password, salt, iterations), encoded)


@dataclass(frozen=True)
class User:
    id: int
    email: str
    password: str
    full_name: str
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password,
            "fullName": self.full_name,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> User:
        return cls(
            id=raw["id"],
            email=raw["email"],
            password=raw["password"],
            full_name=raw.get("fullName", ""),
            created_at=raw.get("createdAt", ""),
        )


@dataclass(frozen=True)
class Session:
    email: str
    full_name: str
    login_time: str
    is_authenticated: bool = True

    def to_dict(self) -> dict:
        return {
            "isAuthenticated": self.is_authenticated,
            "email": self.email,
            "fullName": self.full_name,
            "loginTime": self.login_time,
        }

    @property
    def first_name(self) -> str:
        parts = self.full_name.split()
        return parts[0] if parts else ""


@dataclass
class AuthResult:
    """Result of a signup or login attempt."""

    user: User | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.errors and self.error is None


class SessionGate:
    """Admits or turns away protected views based on the stored session."""

    def __init__(self, context: StorageContext, broadcaster: SyncBroadcaster | None = None) -> None:
        self.context = context
        self.broadcaster = broadcaster

    def current(self) -> Session | None:
        """The stored session, or None if absent or unreadable."""
        raw = self.context.get_item(SESSION_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            return Session(
                email=data["email"],
                full_name=data.get("fullName", ""),
                login_time=data.get("loginTime", ""),
                is_authenticated=bool(data.get("isAuthenticated", True)),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("ignoring unreadable session: %s", e)
            return None

    def is_authenticated(self) -> bool:
        session = self.current()
        return session is not None and session.is_authenticated

    def open(self, user: User) -> Session:
        """Store a session for user. Raises StorageWriteFailed."""
        old = self.context.get_item(SESSION_KEY)
        session = Session(email=user.email, full_name=user.full_name, login_time=_now())
        text = json.dumps(session.to_dict())
        self.context.set_item(SESSION_KEY, text)
        if self.broadcaster is not None:
            self.broadcaster.notify(SESSION_KEY, old, text)
        return session

    def clear(self) -> str | None:
        """Log out. Later is_authenticated() calls in any view return False.

        Returns an error message if the session could not be removed.
        """
        old = self.context.get_item(SESSION_KEY)
        if old is None:
            return None
        try:
            self.context.remove_item(SESSION_KEY)
        except StorageWriteFailed as e:
            logger.error("could not remove session: %s", e)
            return f"Could not log out: {e}"
        if self.broadcaster is not None:
            self.broadcaster.notify(SESSION_KEY, old, None)
        return None


def _validate(email: str, password: str, full_name: str | None = None, confirm: str | None = None, signup=False):
    errors: dict[str, str] = {}
    if not email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.match(email.strip()):
        errors["email"] = "Email must be a valid Gmail address"

    if not password.strip():
        errors["password"] = "Password is required"
    elif len(password) < PASSWORD_MIN:
        errors["password"] = f"Password must be at least {PASSWORD_MIN} characters"

    if signup:
        name = (full_name or "").strip()
        if not name:
            errors["full_name"] = "Full name is required"
        elif len(name) < FULL_NAME_MIN:
            errors["full_name"] = f"Full name must be at least {FULL_NAME_MIN} characters"

        if not (confirm or "").strip():
            errors["confirm_password"] = "Please confirm your password"
        elif password != confirm:
            errors["confirm_password"] = "Passwords do not match"
    return errors


class UserRegistry:
    """Accounts stored under USERS_KEY."""

    def __init__(self, context: StorageContext, gate: SessionGate, ids: IdAllocator | None = None) -> None:
        self.context = context
        self.gate = gate
        self._ids = ids or IdAllocator()

    def users(self) -> list[User]:
        raw = self.context.get_item(USERS_KEY)
        if raw is None:
            return []
        try:
            return [User.from_dict(u) for u in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("ignoring unreadable user list: %s", e)
            return []

    def find(self, email: str) -> User | None:
        email = email.strip()
        for user in self.users():
            if user.email == email:
                return user
        return None

    def signup(self, email: str, password: str, confirm_password: str, full_name: str) -> AuthResult:
        """Register a new account. Does not log in."""
        errors = _validate(email, password, full_name, confirm_password, signup=True)
        if errors:
            return AuthResult(errors=errors)
        users = self.users()
        email = email.strip()
        if any(u.email == email for u in users):
            return AuthResult(error=DUPLICATE_EMAIL)
        self._ids.observe(u.id for u in users)
        user = User(
            id=self._ids.allocate(),
            email=email,
            password=hash_password(password),
            full_name=full_name.strip(),
            created_at=_now(),
        )
        try:
            self.context.set_item(USERS_KEY, json.dumps([u.to_dict() for u in [*users, user]]))
        except StorageWriteFailed as e:
            logger.error("could not save account: %s", e)
            return AuthResult(error=f"Could not save account: {e}")
        logger.info("registered %s", email)
        return AuthResult(user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and open a session."""
        errors = _validate(email, password)
        if errors:
            return AuthResult(errors=errors)
        user = self.find(email)
        if user is None or not verify_password(password, user.password):
            return AuthResult(error=INVALID_LOGIN)
        try:
            self.gate.open(user)
        except StorageWriteFailed as e:
            logger.error("could not save session: %s", e)
            return AuthResult(error=f"Could not save session: {e}")
        return AuthResult(user=user)
