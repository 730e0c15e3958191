"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import DuplicateAccountError, TransactionError
from infrastructure.database.repositories.sqlalchemy_account_repo import (
    SQLAlchemyAccountRepository,
    is_unique_email_violation,
)
from infrastructure.database.repositories.sqlalchemy_audit_repo import SQLAlchemyAuditRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository

logger = structlog.get_logger()


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    One instance is one transaction scope. The transaction starts on enter
    (at ``isolation_level`` when given), is committed only by an explicit
    ``commit()`` and is rolled back on any exception. Driver errors leave
    the scope as ``TransactionError`` with the driver error chained.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        isolation_level: Optional[str] = None,
    ) -> None:
        self._session_factory = session_factory
        self._isolation_level = isolation_level
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def accounts(self) -> SQLAlchemyAccountRepository:
        """Get account repository."""
        return SQLAlchemyAccountRepository(self._require_session())

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def audit_records(self) -> SQLAlchemyAuditRepository:
        """Get profile audit repository."""
        return SQLAlchemyAuditRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction.

        Raises:
            DuplicateAccountError: If the unique email constraint fails here
            TransactionError: For any other storage failure
        """
        if self._session:
            try:
                await self._session.commit()
            except IntegrityError as e:
                if is_unique_email_violation(e):
                    raise DuplicateAccountError() from e
                raise TransactionError() from e
            except SQLAlchemyError as e:
                raise TransactionError() from e

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager, create session and begin the transaction."""
        self._session = self._session_factory()
        if self._isolation_level:
            try:
                await self._session.connection(
                    execution_options={"isolation_level": self._isolation_level}
                )
            except SQLAlchemyError as e:
                await self._session.close()
                self._session = None
                raise TransactionError() from e
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager, rolling back on error, and cleanup."""
        if not self._session:
            return
        try:
            if exc_type:
                await self.rollback()
        except SQLAlchemyError:
            logger.exception("rollback_failed")
        finally:
            await self._session.close()
            self._session = None

        if isinstance(exc_val, SQLAlchemyError):
            logger.error(
                "transaction_failed",
                error=str(exc_val),
                error_type=type(exc_val).__name__,
            )
            raise TransactionError() from exc_val
        if isinstance(exc_val, TransactionError) and exc_val.__cause__ is not None:
            logger.error(
                "transaction_failed",
                error=str(exc_val.__cause__),
                error_type=type(exc_val.__cause__).__name__,
            )
