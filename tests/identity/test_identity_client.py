from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from rollcall.core.constants import CREDENTIALS, USERS
from rollcall.core.enums import Role
from rollcall.core.exceptions import AuthError, ValidationError
from rollcall.identity.client import IdentityClient
from rollcall.identity.provider import DocumentIdentityProvider
from rollcall.store import bootstrap


@pytest.fixture
def identity(accounts):
    return IdentityClient(DocumentIdentityProvider(accounts))


def test_sign_in_returns_user_id_and_caches_session(identity):
    assert identity.current_user_id() is None

    assert identity.sign_in("stu1@uni.edu", "secret2") == "stu-1"
    assert identity.current_user_id() == "stu-1"
    assert identity.current_email() == "stu1@uni.edu"
    assert identity.require_user_id() == "stu-1"


def test_email_lookup_ignores_case_and_whitespace(identity):
    assert identity.sign_in("  STU1@uni.edu ", "secret2") == "stu-1"


def test_unknown_email_and_bad_password_are_auth_errors(identity):
    with pytest.raises(AuthError):
        identity.sign_in("nobody@uni.edu", "secret2")
    with pytest.raises(AuthError):
        identity.sign_in("stu1@uni.edu", "wrong")
    assert identity.current_user_id() is None


def test_credential_stored_with_mixed_case_email_can_sign_in(identity, accounts):
    accounts.set(CREDENTIALS, "prof-2", {"email": "Grace.Hopper@Uni.edu", "passwordHash": generate_password_hash("cobol")})

    assert identity.sign_in("Grace.Hopper@Uni.edu", "cobol") == "prof-2"
    assert identity.current_email() == "Grace.Hopper@Uni.edu"


def test_seeded_accounts_are_stored_lowercased_and_sign_in_with_any_case(store, monkeypatch):
    monkeypatch.setattr(
        bootstrap,
        "DEMO_ACCOUNTS",
        [("demo-professor", " Professor@Example.EDU", "professor123", "Ada Lovelace", Role.PROFESSOR, "Mathematics")],
    )

    assert bootstrap.ensure_demo_accounts(store) == ["demo-professor"]
    assert store.all(CREDENTIALS)["demo-professor"]["email"] == "professor@example.edu"
    assert store.all(USERS)["demo-professor"]["email"] == "professor@example.edu"

    identity = IdentityClient(DocumentIdentityProvider(store))
    assert identity.sign_in("PROFESSOR@example.edu", "professor123") == "demo-professor"


def test_corrupted_hash_is_auth_error(identity, accounts):
    accounts.set(CREDENTIALS, "stu-1", {"email": "stu1@uni.edu", "passwordHash": "CHANGE_ME"})

    with pytest.raises(AuthError):
        identity.sign_in("stu1@uni.edu", "secret2")


def test_store_failure_is_auth_error(identity, accounts):
    accounts.fail("query", CREDENTIALS, "network unreachable")

    with pytest.raises(AuthError, match="network unreachable"):
        identity.sign_in("stu1@uni.edu", "secret2")


@pytest.mark.parametrize("email, password", [("", "x"), ("   ", "x"), ("stu1@uni.edu", "")])
def test_blank_input_is_validation_error_without_remote_call(identity, accounts, email, password):
    calls_before = len(accounts.calls)

    with pytest.raises(ValidationError):
        identity.sign_in(email, password)
    assert len(accounts.calls) == calls_before


def test_sign_out_is_idempotent(identity):
    identity.sign_out()
    identity.sign_in("stu1@uni.edu", "secret2")
    identity.sign_out()
    identity.sign_out()

    assert identity.current_user_id() is None
    with pytest.raises(AuthError, match="Not authenticated"):
        identity.require_user_id()
