"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any
from uuid import UUID

# Disable rate limiting in tests; SQLite has no READ COMMITTED level
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_ISOLATION_LEVEL"] = ""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.account_service import AccountService
from domain.services.audit_service import AuditService
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

TEST_EMAIL = "a@x.com"
TEST_PASSWORD = "pw123456"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a file-backed SQLite engine per test.

    A file database gives every session its own connection, so concurrent
    units of work really contend for locks. Transactions start with
    BEGIN IMMEDIATE: writers queue up instead of reading stale snapshots.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Cheapest bcrypt cost, to keep tests fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def audit_service(uow_factory: Callable[[], SQLAlchemyUnitOfWork]) -> AuditService:
    return AuditService(uow_factory)


@pytest.fixture
def account_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    password_hasher: BcryptPasswordHasher,
    auth_provider: JWTAuthProvider,
) -> AccountService:
    return AccountService(
        uow_factory,
        password_hasher=password_hasher,
        token_issuer=auth_provider,
    )


@pytest.fixture
def profile_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    audit_service: AuditService,
) -> ProfileService:
    return ProfileService(uow_factory, audit_service=audit_service)


@pytest.fixture
async def registered_account_id(
    account_service: AccountService,
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> UUID:
    """Register the standard test account and return its ID."""
    await account_service.register(
        email=TEST_EMAIL,
        password=TEST_PASSWORD,
        name="Kim",
        age=20,
        gender="M",
        profile_image=None,
    )
    async with uow_factory() as uow:
        account = await uow.accounts.get_by_email(TEST_EMAIL)
    assert account is not None
    return account.id


@pytest.fixture
async def auth_headers(
    account_service: AccountService, registered_account_id: UUID
) -> dict[str, str]:
    """Authorization headers for the registered test account."""
    token = await account_service.authenticate(TEST_EMAIL, TEST_PASSWORD)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(
    account_service: AccountService,
    profile_service: ProfileService,
    audit_service: AuditService,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the test database.

    Service and auth provider dependencies are overridden so every request
    runs against the per-test SQLite file and the test signing key.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_account_service,
        get_audit_service,
        get_profile_service,
    )
    from main import create_app

    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_account_service] = lambda: account_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_audit_service] = lambda: audit_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
