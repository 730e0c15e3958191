"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from api.dependencies.auth import get_auth_provider
from core.config import settings
from domain.services.account_service import AccountService
from domain.services.audit_service import AuditService
from domain.services.profile_service import ProfileService
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(
            async_session_factory,
            isolation_level=settings.db_isolation_level or None,
        )

    return factory


@lru_cache
def get_audit_service() -> AuditService:
    """Get Audit service instance."""
    return AuditService(get_uow_factory())


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(
        get_uow_factory(),
        password_hasher=BcryptPasswordHasher(),
        token_issuer=get_auth_provider(),
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        audit_service=get_audit_service(),
    )
