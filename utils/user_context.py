"""Propagate the authenticated user's identity through the call stack using contextvars."""

from contextvars import ContextVar

_current_user_id: ContextVar[int | None] = ContextVar("current_user_id", default=None)


def get_current_user_id() -> int:
    """
    Get current user ID from context.

    Raises RuntimeError if no user context is set.
    This is fail-fast behavior - if you're in a code path that
    requires user context and it's not set, that's a bug.
    """
    user_id = _current_user_id.get()
    if user_id is None:
        raise RuntimeError(
            "No user context set. This usually means you're calling "
            "user-scoped code outside of an authenticated request."
        )
    return user_id


def set_current_user_id(user_id: int) -> None:
    """
    Set current user ID in context.

    Called by auth middleware after verifying the bearer token.
    """
    _current_user_id.set(user_id)


def clear_current_user_id() -> None:
    """
    Clear user context.

    Called by auth middleware after request completes.
    Must be called in finally block to prevent context leakage.
    """
    _current_user_id.set(None)
