"""Typed domain exceptions.

Services raise these; api/errors.py translates them to HTTP responses.
"""


class DomainError(Exception):
    """Base class for expected, user-facing failures."""


class ValidationError(DomainError):
    """Input is missing or malformed. User-correctable.

    Carries the individual field messages when validation collected more
    than one problem.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or [message]
        super().__init__(message)


class NotFoundError(DomainError):
    """Requested resource does not exist."""


class ForbiddenError(DomainError):
    """Authenticated, but not permitted to act on this resource."""


class ConflictError(DomainError):
    """Uniqueness violation (e.g. username or email already taken)."""
