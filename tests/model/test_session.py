"""Tests for accounts, login and the session gate."""

import json

from novaticket.constants import SESSION_KEY, TOPIC_SESSION, USERS_KEY
from novaticket.model.session import DUPLICATE_EMAIL, INVALID_LOGIN, hash_password, verify_password
from novaticket.services import Services
from novaticket.storage import MemoryBackend, StoragePartition, StorageWriteFailed


def _signup(services, email="jane.doe@gmail.com", password="secret1", name="Jane Doe"):
    return services.users.signup(email, password, password, name)


def test_hash_and_verify():
    encoded = hash_password("secret1")
    assert encoded.startswith("pbkdf2_sha256$")
    assert "secret1" not in encoded
    assert verify_password("secret1", encoded)
    assert not verify_password("secret2", encoded)


def test_hash_is_salted():
    assert hash_password("secret1") != hash_password("secret1")


def test_verify_rejects_malformed():
    assert not verify_password("secret1", "secret1")
    assert not verify_password("secret1", "md5$1$salt$abc")


def test_signup_stores_hashed_password(services):
    result = _signup(services)
    assert result.ok
    stored = json.loads(services.context.get_item(USERS_KEY))
    assert stored[0]["email"] == "jane.doe@gmail.com"
    assert stored[0]["fullName"] == "Jane Doe"
    assert stored[0]["password"] != "secret1"
    assert not services.gate.is_authenticated()


def test_signup_validation(services):
    result = services.users.signup("jane@yahoo.com", "abc", "abd", "Jo")
    assert result.errors == {
        "email": "Email must be a valid Gmail address",
        "password": "Password must be at least 5 characters",
        "full_name": "Full name must be at least 3 characters",
        "confirm_password": "Passwords do not match",
    }
    assert services.context.get_item(USERS_KEY) is None


def test_signup_required_fields(services):
    result = services.users.signup("", "", "", "")
    assert result.errors == {
        "email": "Email is required",
        "password": "Password is required",
        "full_name": "Full name is required",
        "confirm_password": "Please confirm your password",
    }


def test_signup_duplicate_email(services):
    _signup(services)
    result = _signup(services, name="Another Jane")
    assert result.error == DUPLICATE_EMAIL
    assert len(services.users.users()) == 1


def test_login_opens_session(services):
    _signup(services)
    calls = []
    services.broadcaster.subscribe(TOPIC_SESSION, calls.append)

    result = services.users.login("jane.doe@gmail.com", "secret1")

    assert result.ok
    session = services.gate.current()
    assert session.email == "jane.doe@gmail.com"
    assert session.full_name == "Jane Doe"
    assert session.first_name == "Jane"
    assert json.loads(services.context.get_item(SESSION_KEY))["isAuthenticated"] is True
    assert calls == [TOPIC_SESSION]


def test_login_wrong_password(services):
    _signup(services)
    result = services.users.login("jane.doe@gmail.com", "wrong-password")
    assert result.error == INVALID_LOGIN
    assert not services.gate.is_authenticated()


def test_login_unknown_user(services):
    result = services.users.login("nobody@gmail.com", "secret1")
    assert result.error == INVALID_LOGIN


def test_login_validation(services):
    result = services.users.login("not-an-email", "")
    assert set(result.errors) == {"email", "password"}


def test_clear_logs_out_every_view(partition, services):
    other = Services.open(partition)
    _signup(services)
    services.users.login("jane.doe@gmail.com", "secret1")
    assert other.gate.is_authenticated()

    heard = []
    other.context.add_listener(heard.append)
    services.gate.clear()

    assert not services.gate.is_authenticated()
    assert not other.gate.is_authenticated()
    assert heard[0].key == SESSION_KEY
    assert heard[0].new_value is None


def test_clear_without_session_is_silent(services):
    calls = []
    services.broadcaster.subscribe(TOPIC_SESSION, calls.append)
    services.gate.clear()
    assert calls == []


def test_unreadable_session_is_logged_out(services):
    services.context.set_item(SESSION_KEY, "garbage")
    assert services.gate.current() is None
    assert not services.gate.is_authenticated()


class StuckSessionBackend(MemoryBackend):
    """Storage that refuses to delete keys."""

    def remove_item(self, key):
        raise StorageWriteFailed("storage disabled")


def test_clear_failure_is_reported():
    services = Services.open(StoragePartition(StuckSessionBackend()))
    _signup(services)
    services.users.login("jane.doe@gmail.com", "secret1")
    calls = []
    services.broadcaster.subscribe(TOPIC_SESSION, calls.append)

    failure = services.gate.clear()

    assert failure == "Could not log out: storage disabled"
    assert services.gate.is_authenticated()
    assert calls == []
