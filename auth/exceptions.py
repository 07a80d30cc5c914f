"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class AuthenticationError(AuthError):
    """
    Credential missing, invalid, or expired.

    Always surfaced to clients as a generic 401. Subclasses exist for
    internal logging only - responses must not reveal which one occurred.
    """


class InvalidCredentialsError(AuthenticationError):
    """
    Username/password pair did not verify.

    Raised for both unknown users and wrong passwords so the two cases
    are indistinguishable to the caller.
    """


class InvalidTokenError(AuthenticationError):
    """
    Bearer token is malformed, has a bad signature, is expired,
    or names a user that no longer exists.
    """
