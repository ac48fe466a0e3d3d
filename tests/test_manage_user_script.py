from __future__ import annotations

import sys
from pathlib import Path

import pytest

from revcart.core.security import hash_password
from revcart.db.models import UserRole
from revcart.repositories.sql_repository import SQLRepository

SCRIPTS = Path(__file__).resolve().parents[1] / "scripts"
if str(SCRIPTS) not in sys.path:
    sys.path.insert(0, str(SCRIPTS))

import manage_user  # noqa: E402


def test_role_and_deactivate(db_env, capsys):
    repo = SQLRepository()
    user = repo.save_user(full_name="Root", email="root@example.com", password_hash=hash_password("x"), authorities=["ROLE_CUSTOMER"])

    manage_user.main(["--email", "root@example.com", "--role", "ADMIN", "--deactivate"])

    updated = repo.find_user_by_email("root@example.com")
    assert updated.role == UserRole.ADMIN
    assert updated.authorities == ["ROLE_ADMIN"]
    assert updated.active is False
    assert [a.action for a in repo.list_activity(user.id)] == ["ROLE_CHANGED", "DEACTIVATED"]
    assert "Role: ADMIN" in capsys.readouterr().out


def test_unknown_user_exits(db_env):
    with pytest.raises(SystemExit):
        manage_user.main(["--email", "ghost@example.com", "--activate"])
