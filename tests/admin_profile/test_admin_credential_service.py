from __future__ import annotations

import logging
from datetime import timedelta

import pytest
from werkzeug.security import check_password_hash

from src.timesheet_system.timesheet_system.admin_profile.service import AdminCredentialService
from src.timesheet_system.timesheet_system.admin_profile.store import InMemoryPendingUpdateStore
from src.timesheet_system.timesheet_system.core.enums import CredentialChangeFailure


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def notify(self, admin, token, expires_at):
        self.calls.append((admin.user_id, token, expires_at))


@pytest.fixture
def pending():
    return InMemoryPendingUpdateStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def service(users_repo, pending, clock, notifier):
    tokens = iter(["tok-1", "tok-2", "tok-3"])
    return AdminCredentialService(
        users_repo,
        pending,
        clock=clock,
        token_factory=lambda: next(tokens),
        notifier=notifier,
    )


def test_initiate_and_confirm_round_trip(service, users_repo, pending, clock, fixed_now, notifier):
    started = service.initiate("admin001", new_username="boss", new_password="s3cret!")

    assert started.success
    assert started.token == "tok-1"
    assert started.expires_at == fixed_now + timedelta(minutes=15)
    assert notifier.calls == [("admin001", "tok-1", started.expires_at)]
    assert "s3cret!" not in repr(pending.get())

    clock.advance(minutes=10)
    done = service.confirm("admin001", "tok-1")

    assert done.success
    assert done.user.email == "boss"
    stored = users_repo.get_by_id("admin001")
    assert stored.email == "boss"
    assert check_password_hash(stored.password_hash, "s3cret!")
    assert pending.get() is None

    again = service.confirm("admin001", "tok-1")
    assert not again.success
    assert again.failure == CredentialChangeFailure.NOT_FOUND


def test_password_only_change_keeps_username(service, users_repo):
    service.initiate("admin001", new_password="another")
    assert service.confirm("admin001", "tok-1").success
    assert users_repo.get_by_id("admin001").email == "admin"


@pytest.mark.parametrize(
    "admin_id, username, password, failure",
    [
        ("", "boss", None, CredentialChangeFailure.VALIDATION),
        ("admin001", None, None, CredentialChangeFailure.VALIDATION),
        ("admin001", "  ", "", CredentialChangeFailure.VALIDATION),
        ("admin001", "big boss", None, CredentialChangeFailure.VALIDATION),
        ("admin001", "employee1@example.com", None, CredentialChangeFailure.VALIDATION),
        ("emp001", "boss", None, CredentialChangeFailure.ADMIN_NOT_FOUND),
        ("nobody", "boss", None, CredentialChangeFailure.ADMIN_NOT_FOUND),
    ],
)
def test_initiate_failures_store_nothing(service, pending, admin_id, username, password, failure):
    result = service.initiate(admin_id, new_username=username, new_password=password)

    assert not result.success
    assert result.failure == failure
    assert result.token is None
    assert pending.get() is None


def test_expired_token_is_rejected_and_cleared(service, users_repo, pending, clock):
    service.initiate("admin001", new_username="boss")

    clock.advance(minutes=15, seconds=1)
    result = service.confirm("admin001", "tok-1")

    assert result.failure == CredentialChangeFailure.TOKEN_EXPIRED
    assert pending.get() is None
    assert users_repo.get_by_id("admin001").email == "admin"


def test_confirm_exactly_at_expiry_still_succeeds(service, clock):
    service.initiate("admin001", new_username="boss")
    clock.advance(minutes=15)
    assert service.confirm("admin001", "tok-1").success


def test_mismatch_keeps_pending_update(service, users_repo, pending, caplog):
    service.initiate("admin001", new_username="boss")

    with caplog.at_level(logging.WARNING):
        wrong_token = service.confirm("admin001", "nope")
    wrong_user = service.confirm("emp001", "tok-1")

    assert wrong_token.failure == CredentialChangeFailure.TOKEN_MISMATCH
    assert wrong_user.failure == CredentialChangeFailure.TOKEN_MISMATCH
    assert pending.get() is not None
    assert users_repo.get_by_id("admin001").email == "admin"
    assert "nope" not in caplog.text
    assert service.confirm("admin001", "tok-1").success


def test_second_initiate_replaces_first(service):
    service.initiate("admin001", new_username="first")
    service.initiate("admin001", new_username="second")

    assert service.confirm("admin001", "tok-1").failure == CredentialChangeFailure.TOKEN_MISMATCH
    done = service.confirm("admin001", "tok-2")
    assert done.success
    assert done.user.email == "second"


def test_confirm_requires_input(service):
    assert service.confirm("", "tok-1").failure == CredentialChangeFailure.VALIDATION
    assert service.confirm("admin001", "").failure == CredentialChangeFailure.VALIDATION


def test_discard_pending_only_for_owner(service, pending):
    service.initiate("admin001", new_username="boss")

    assert service.discard_pending("emp001") is False
    assert service.discard_pending("admin001") is True
    assert pending.get() is None
