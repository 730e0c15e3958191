"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

import pytest


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.accounts = AsyncMock()
        self.profiles = AsyncMock()
        self.audit_records = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def account_id() -> UUID:
    """A random account ID."""
    return uuid4()


@pytest.fixture
def hasher() -> MagicMock:
    """Password hasher stub: hashes to a fixed value, verifies as configured."""
    mock = MagicMock()
    mock.hash.return_value = "hashed-password"
    mock.verify.return_value = True
    return mock


@pytest.fixture
def token_issuer() -> MagicMock:
    """Token issuer stub returning a fixed token."""
    mock = MagicMock()
    mock.create_token.return_value = "issued-token"
    return mock
