"""Tests for auth/types.py - Pydantic models for auth domain."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from auth.types import (
    User,
    UserRecord,
    RegisterRequest,
    LoginRequest,
    LoginResult,
)


class TestUserValidation:
    """Tests that User model rejects invalid data."""

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            User(
                id=1,
                username="alice",
                email="not-an-email",
                created_at=datetime.now(timezone.utc),
            )

    def test_rejects_missing_id(self):
        with pytest.raises(ValidationError):
            User(
                username="alice",
                email="alice@example.com",
                created_at=datetime.now(timezone.utc),
            )

    def test_serializes_with_camel_case_keys(self, test_user):
        data = test_user.model_dump(mode="json", by_alias=True)

        assert set(data) == {"id", "username", "email", "createdAt"}


class TestUserRecord:
    """UserRecord carries the hash; to_public() drops it."""

    def test_to_public_drops_password_hash(self, user_row):
        record = UserRecord.model_validate(user_row())

        public = record.to_public()

        assert type(public) is User
        assert "password_hash" not in public.model_dump()
        assert "passwordHash" not in public.model_dump(by_alias=True)

    def test_repr_hides_password_hash(self, user_row):
        record = UserRecord.model_validate(user_row(password_hash="$2b$secret"))

        assert "$2b$secret" not in repr(record)


class TestRegisterRequest:
    """Registration payload normalization and required fields."""

    def test_trims_username_and_lowercases_email(self):
        req = RegisterRequest(username="  alice ", email=" Alice@Example.COM ", password="secret1")

        assert req.username == "alice"
        assert req.email == "alice@example.com"

    def test_password_not_trimmed(self):
        req = RegisterRequest(username="alice", email="alice@example.com", password=" secret ")

        assert req.password == " secret "

    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username="   ")

        message = str(exc_info.value)
        assert "Username is required" in message
        assert "Email is required" in message
        assert "Password is required" in message

    def test_blank_email_counts_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(username="alice", email="  ", password="secret1")

        assert "Email is required" in str(exc_info.value)


class TestLoginRequest:
    """Login payload accepts several spellings of the identifier."""

    @pytest.mark.parametrize("key", ["usernameOrEmail", "username_or_email", "username"])
    def test_accepts_identifier_keys(self, key):
        req = LoginRequest.model_validate({key: "alice", "password": "secret1"})

        assert req.username_or_email == "alice"

    def test_trims_identifier(self):
        req = LoginRequest.model_validate({"usernameOrEmail": "  alice  ", "password": "pw"})

        assert req.username_or_email == "alice"

    def test_requires_both_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest.model_validate({"usernameOrEmail": "alice"})

        assert "Username or email and password are required" in str(exc_info.value)


class TestLoginResult:

    def test_dumps_token_and_user(self, test_user):
        result = LoginResult(token="abc.def.ghi", user=test_user)

        data = result.model_dump(mode="json", by_alias=True)

        assert data["token"] == "abc.def.ghi"
        assert data["user"]["createdAt"] == "2024-01-01T12:00:00Z"
