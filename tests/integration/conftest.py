"""Fixtures for tests against a real PostgreSQL database.

Set TASKMANAGER_TEST_DATABASE_URL to a disposable database to run these.
The schema is applied once per session and every table is truncated
before each test.
"""

import os
from pathlib import Path

import pytest

from clients.postgres_client import PostgresClient

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "schema.sql"


def pytest_collection_modifyitems(config, items):
    """Mark everything in this directory as an integration test."""
    for item in items:
        if "integration" in item.path.parts:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def db_url():
    url = os.getenv("TASKMANAGER_TEST_DATABASE_URL")
    if not url:
        pytest.skip("TASKMANAGER_TEST_DATABASE_URL not set")
    return url


@pytest.fixture(scope="session")
def db(db_url):
    """Session-scoped PostgresClient with the schema applied."""
    client = PostgresClient(db_url, min_connections=1, max_connections=5)
    client.execute(SCHEMA_PATH.read_text())
    yield client
    client.close()


@pytest.fixture(autouse=True)
def reset_db_state(db):
    """Empty every table before each test."""
    db.execute(
        "TRUNCATE audit_log, security_events, tasks, users RESTART IDENTITY CASCADE"
    )


@pytest.fixture
def create_user(db):
    """Insert a user directly and return its id."""
    def _create(username, email=None, password_hash="$2b$04$notarealhash"):
        return db.execute_scalar(
            "INSERT INTO users (username, email, password_hash) VALUES (%s, %s, %s) RETURNING id",
            (username, email or f"{username}@example.com", password_hash),
        )
    return _create
