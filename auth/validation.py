"""Boundary validation for auth request bodies."""

from typing import Any

from auth.types import LoginRequest, RegisterRequest
from core.validation import ValidationResult, parse_model


def validate_registration(payload: Any, password_min_length: int) -> ValidationResult[RegisterRequest]:
    """Validate a registration body, including the configured password length."""
    result = parse_model(RegisterRequest, payload)
    if not result.ok:
        return result

    if len(result.value.password) < password_min_length:
        return ValidationResult.failure(
            f"Password must be at least {password_min_length} characters"
        )
    return result


def validate_login(payload: Any) -> ValidationResult[LoginRequest]:
    return parse_model(LoginRequest, payload)
