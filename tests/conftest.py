"""Shared test fixtures for the task manager test suite."""

from datetime import date, datetime, timezone
from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

# Reset vault client singleton so no test inherits cached secrets
import clients.vault_client as vault_module
vault_module._vault_client_instance = None
vault_module._secret_cache.clear()

from auth.config import AuthConfig
from auth.types import User, UserRecord
from utils.user_context import set_current_user_id, clear_current_user_id


# =============================================================================
# TEST USER CONSTANTS
# =============================================================================

# Primary test user - use for single-user tests
TEST_USER_ID = 1
TEST_USERNAME = "alice"
TEST_USER_EMAIL = "alice@example.com"

# Secondary test user - use for ownership tests
TEST_USER_B_ID = 2
TEST_USERNAME_B = "bob"
TEST_USER_B_EMAIL = "bob@example.com"

TEST_JWT_SECRET = "test-signing-secret-with-enough-entropy"

CREATED_AT = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# ROW BUILDERS
# =============================================================================


def make_user_row(user_id=TEST_USER_ID, username=TEST_USERNAME, email=TEST_USER_EMAIL,
                  password_hash="$2b$04$notarealhash"):
    """A users row as PostgresClient returns it."""
    return {
        "id": user_id,
        "username": username,
        "email": email,
        "password_hash": password_hash,
        "created_at": CREATED_AT,
    }


def make_task_row(task_id=1, user_id=TEST_USER_ID, title="Buy milk", description=None,
                  status="PENDING", due_date=date(2024, 3, 15), created_at=CREATED_AT,
                  updated_at=CREATED_AT):
    """A tasks row as PostgresClient returns it."""
    return {
        "id": task_id,
        "user_id": user_id,
        "title": title,
        "description": description,
        "status": status,
        "due_date": due_date,
        "created_at": created_at,
        "updated_at": updated_at,
    }


# =============================================================================
# USER CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_user_context():
    """Ensure clean user context before and after each test."""
    clear_current_user_id()
    yield
    clear_current_user_id()


@pytest.fixture
def test_user_id() -> int:
    """The primary test user's ID."""
    return TEST_USER_ID


@pytest.fixture
def test_user_b_id() -> int:
    """The secondary test user's ID (for ownership tests)."""
    return TEST_USER_B_ID


@pytest.fixture
def authenticated_context(test_user_id):
    """Provide an authenticated user context for the primary test user."""
    set_current_user_id(test_user_id)
    yield test_user_id


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def auth_config() -> AuthConfig:
    """Config with the cheapest bcrypt work factor so tests stay fast."""
    return AuthConfig(bcrypt_rounds=4)


@pytest.fixture
def test_user() -> User:
    return UserRecord.model_validate(make_user_row()).to_public()


@pytest.fixture
def test_user_b() -> User:
    return UserRecord.model_validate(
        make_user_row(TEST_USER_B_ID, TEST_USERNAME_B, TEST_USER_B_EMAIL)
    ).to_public()


@pytest.fixture
def task_row():
    """Factory for tasks rows: task_row(task_id=2, due_date=None, ...)."""
    return make_task_row


@pytest.fixture
def user_row():
    """Factory for users rows: user_row(user_id=2, username="bob", ...)."""
    return make_user_row


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================

VALID_TOKEN = "valid-token"
VALID_TOKEN_B = "valid-token-b"


@pytest.fixture
def mock_auth_service(test_user, test_user_b):
    """AuthService mock that accepts two fixed tokens, one per test user."""
    from auth.service import AuthService
    from auth.exceptions import InvalidTokenError

    tokens = {VALID_TOKEN: test_user, VALID_TOKEN_B: test_user_b}

    def authenticate(token, ip_address=None):
        if token not in tokens:
            raise InvalidTokenError("Invalid or expired token")
        return tokens[token]

    mock = Mock(spec=AuthService)
    mock.authenticate.side_effect = authenticate
    return mock


@pytest.fixture
def mock_task_service():
    from core.services.task_service import TaskService
    return Mock(spec=TaskService)


@pytest.fixture
def app(mock_auth_service, mock_task_service, auth_config):
    """Full application wired to mocked services."""
    from main import Services, create_app

    return create_app(
        Services(auth=mock_auth_service, task=mock_task_service),
        auth_config=auth_config,
    )


@pytest.fixture
def client(app):
    """Client authenticated as the primary test user."""
    return TestClient(
        app,
        raise_server_exceptions=False,
        headers={"Authorization": f"Bearer {VALID_TOKEN}"},
    )


@pytest.fixture
def client_b(app):
    """Client authenticated as the secondary test user."""
    return TestClient(
        app,
        raise_server_exceptions=False,
        headers={"Authorization": f"Bearer {VALID_TOKEN_B}"},
    )


@pytest.fixture
def unauthed_client(app):
    """Client with no Authorization header."""
    return TestClient(app, raise_server_exceptions=False)
