"""Pydantic models for auth domain."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """A registered user, safe to return to clients (no password hash)."""

    id: int
    username: str
    email: EmailStr
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class UserRecord(User):
    """A user row as stored, including the password hash.

    Never leaves the auth package - convert with to_public() first.
    """

    password_hash: str = Field(..., repr=False)

    def to_public(self) -> User:
        return User(
            id=self.id,
            username=self.username,
            email=self.email,
            created_at=self.created_at,
        )


class RegisterRequest(BaseModel):
    """Request payload for registration.

    Fields are optional at the type level so that missing and blank values
    produce the same "X is required" message.
    """

    username: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def trim_username(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @model_validator(mode="after")
    def require_fields(self) -> "RegisterRequest":
        missing = [
            name for name, value in (
                ("Username", self.username),
                ("Email", self.email),
                ("Password", self.password),
            )
            if not value
        ]
        if missing:
            raise ValueError("; ".join(f"{name} is required" for name in missing))
        return self


class LoginRequest(BaseModel):
    """Request payload for login. Accepts the legacy "username" key as well."""

    username_or_email: str | None = Field(
        None,
        validation_alias=AliasChoices("usernameOrEmail", "username_or_email", "username"),
    )
    password: str | None = None

    @field_validator("username_or_email")
    @classmethod
    def trim_identifier(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @model_validator(mode="after")
    def require_fields(self) -> "LoginRequest":
        if not self.username_or_email or not self.password:
            raise ValueError("Username or email and password are required")
        return self


class TokenClaims(BaseModel):
    """Decoded, verified contents of a bearer token."""

    user_id: int
    username: str | None = None
    issued_at: datetime
    expires_at: datetime


class LoginResult(BaseModel):
    """Returned after successful login."""

    token: str = Field(..., description="Signed bearer token")
    user: User
