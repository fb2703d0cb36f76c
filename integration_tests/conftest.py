"""Pytest configuration for integration tests."""

import tempfile
from pathlib import Path

import pytest

from wellness_hub.auth.security import hash_password
from wellness_hub.db import UserRepository, init_db
from wellness_hub.models.user import User


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
async def db_path():
    """An initialized temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "integration.db"
        await init_db(path)
        yield path


@pytest.fixture
async def user(db_path) -> User:
    return await UserRepository(db_path).create(
        User(email="integration@example.com", password_hash=hash_password("integration-pw"))
    )
