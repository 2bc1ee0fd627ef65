from __future__ import annotations

import json
from dataclasses import replace

from werkzeug.security import check_password_hash

from src.timesheet_system.timesheet_system.core.enums import Role
from src.timesheet_system.timesheet_system.users.json_user_repository import JsonUserRepository
from src.timesheet_system.timesheet_system.users.seed import ADMIN_USER_ID, default_users, ensure_seed_users


def test_seed_is_idempotent_and_hashed(tmp_path):
    path = tmp_path / "users.data.json"
    repo = JsonUserRepository(path)
    seed = default_users(admin_email="admin", admin_password="admin")

    assert ensure_seed_users(repo, seed) == 3
    assert ensure_seed_users(repo, seed) == 0

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert {r["id"] for r in raw} == {ADMIN_USER_ID, "emp001", "emp002"}
    assert all("password" not in r for r in raw)

    admin = repo.get_by_id(ADMIN_USER_ID)
    assert admin.role == Role.ADMIN
    assert check_password_hash(admin.password_hash, "admin")


def test_crud_round_trip(tmp_path, employee_user):
    repo = JsonUserRepository(tmp_path / "users.data.json")
    repo.add(employee_user)

    assert repo.get_by_email("employee1@example.com") == employee_user
    assert [u.user_id for u in repo.list_by_role(Role.EMPLOYEE)] == ["emp001"]

    renamed = replace(employee_user, name="Johnny")
    assert repo.update(renamed) is True
    assert repo.get_by_id("emp001").name == "Johnny"

    assert repo.delete_by_id("emp001") is True
    assert repo.delete_by_id("emp001") is False
    assert repo.update(renamed) is False


def test_corrupt_file_reads_as_empty(tmp_path, caplog):
    path = tmp_path / "users.data.json"
    path.write_text("[{", encoding="utf-8")

    assert JsonUserRepository(path).get_by_id("emp001") is None
    assert "Could not read users" in caplog.text


def test_non_utf8_file_reads_as_empty(tmp_path, caplog):
    path = tmp_path / "users.data.json"
    path.write_bytes(b"\xff\xfe[garbage\x80")

    assert JsonUserRepository(path).get_by_id("emp001") is None
    assert "Could not read users" in caplog.text


def test_rewrite_keeps_unreadable_users(tmp_path, employee_user):
    path = tmp_path / "users.data.json"
    unreadable = {"id": "emp009", "email": "x@example.com", "name": "X", "role": "manager", "passwordHash": "h"}
    path.write_text(json.dumps([unreadable]), encoding="utf-8")
    repo = JsonUserRepository(path)

    repo.add(employee_user)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert unreadable in raw
    assert [u.user_id for u in repo.list_by_role(Role.EMPLOYEE)] == ["emp001"]
