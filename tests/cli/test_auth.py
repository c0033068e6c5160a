"""Tests for 'novaticket signup/login/logout/whoami'."""

import json
from argparse import Namespace

import pytest

from novaticket.cli._common import open_services
from novaticket.cli.auth import login, logout, signup, whoami
from novaticket.storage import DirectoryBackend, StorageWriteFailed


def _signup_args(data_dir, email="sam.lee@gmail.com", name="Sam Lee", password="hunter22", json=False):
    return Namespace(data=str(data_dir), json=json, email=email, name=name, password=password)


def _login_args(data_dir, email="jane.doe@gmail.com", password="secret1", json=False):
    return Namespace(data=str(data_dir), json=json, email=email, password=password)


def test_signup(data_dir, capsys):
    assert signup(_signup_args(data_dir)) == 0
    assert "Account created for sam.lee@gmail.com. Please log in." in capsys.readouterr().out
    services = open_services(str(data_dir))
    assert services.users.find("sam.lee@gmail.com").full_name == "Sam Lee"
    assert not services.gate.is_authenticated()


def test_signup_prompts_for_password(data_dir, monkeypatch):
    answers = iter(["hunter22", "hunter22"])
    monkeypatch.setattr("novaticket.cli.auth.getpass", lambda prompt="": next(answers))
    assert signup(_signup_args(data_dir, password=None)) == 0
    assert open_services(str(data_dir)).users.login("sam.lee@gmail.com", "hunter22").ok


def test_signup_prompt_mismatch(data_dir, monkeypatch, capsys):
    answers = iter(["hunter22", "hunter23"])
    monkeypatch.setattr("novaticket.cli.auth.getpass", lambda prompt="": next(answers))
    with pytest.raises(SystemExit):
        signup(_signup_args(data_dir, password=None))
    assert "Passwords do not match" in capsys.readouterr().err


def test_signup_invalid_json(data_dir, capsys):
    with pytest.raises(SystemExit) as exc:
        signup(_signup_args(data_dir, email="sam@outlook.com", json=True))
    assert exc.value.code == 1
    errors = json.loads(capsys.readouterr().err)["errors"]
    assert errors == {"email": "Email must be a valid Gmail address"}


def test_signup_duplicate(account, capsys):
    with pytest.raises(SystemExit):
        signup(_signup_args(account, email="jane.doe@gmail.com"))
    assert "already exists" in capsys.readouterr().err


def test_login(account, capsys):
    assert login(_login_args(account)) == 0
    assert "Logged in as Jane Doe <jane.doe@gmail.com>" in capsys.readouterr().out
    assert open_services(str(account)).gate.is_authenticated()


def test_login_json(account, capsys):
    assert login(_login_args(account, json=True)) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["isAuthenticated"] is True
    assert data["fullName"] == "Jane Doe"


def test_login_wrong_password(account, capsys):
    with pytest.raises(SystemExit):
        login(_login_args(account, password="wrong-password"))
    assert "Invalid email or password" in capsys.readouterr().err
    assert not open_services(str(account)).gate.is_authenticated()


def test_whoami(logged_in, capsys):
    assert whoami(Namespace(data=str(logged_in), json=False)) == 0
    assert "Jane Doe <jane.doe@gmail.com>" in capsys.readouterr().out


def test_whoami_logged_out(account, capsys):
    with pytest.raises(SystemExit):
        whoami(Namespace(data=str(account), json=False))
    assert "not logged in" in capsys.readouterr().err


def test_logout(logged_in, capsys):
    assert logout(Namespace(data=str(logged_in), json=False)) == 0
    assert "Logged out" in capsys.readouterr().out
    assert not open_services(str(logged_in)).gate.is_authenticated()


def test_logout_twice(logged_in):
    args = Namespace(data=str(logged_in), json=False)
    assert logout(args) == 0
    assert logout(args) == 0


def test_logout_storage_failure(logged_in, monkeypatch, capsys):
    def refuse(self, key):
        raise StorageWriteFailed(f"cannot remove '{key}': read-only")

    monkeypatch.setattr(DirectoryBackend, "remove_item", refuse)
    with pytest.raises(SystemExit) as exc:
        logout(Namespace(data=str(logged_in), json=True))
    assert exc.value.code == 1
    assert "Could not log out" in json.loads(capsys.readouterr().err)["error"]
    assert open_services(str(logged_in)).gate.is_authenticated()
