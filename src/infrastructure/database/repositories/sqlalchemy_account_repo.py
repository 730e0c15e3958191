"""SQLAlchemy implementation of Account repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from core.exceptions import DuplicateAccountError
from domain.entities.account import Account, AccountProfile
from infrastructure.database.models import UNIQUE_EMAIL_CONSTRAINT, AccountModel
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)


def is_unique_email_violation(error: IntegrityError) -> bool:
    """Whether an integrity error comes from the unique email constraint.

    PostgreSQL reports the constraint name, SQLite the column.
    """
    message = str(error.orig)
    return UNIQUE_EMAIL_CONSTRAINT in message or "accounts.email" in message


class SQLAlchemyAccountRepository:
    """SQLAlchemy implementation of IAccountRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Account | None:
        """Get an account by ID."""
        stmt = select(AccountModel).where(AccountModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by its exact email."""
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_with_profile(self, id: UUID) -> AccountProfile | None:
        """Get an account joined with its profile in a single query."""
        stmt = (
            select(AccountModel)
            .options(joinedload(AccountModel.profile))
            .where(AccountModel.id == id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None

        return AccountProfile(
            id=model.id,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
            profile=(
                SQLAlchemyProfileRepository.to_entity(model.profile)
                if model.profile
                else None
            ),
        )

    async def create(self, account: Account) -> Account:
        """Create a new account.

        The unique index on email is the final arbiter when two sign-ups
        race past the existence check.
        """
        model = self._to_model(account)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if not is_unique_email_violation(e):
                raise
            raise DuplicateAccountError(account.email) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: AccountModel) -> Account:
        """Convert ORM model to domain entity."""
        return Account(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Account) -> AccountModel:
        """Convert domain entity to ORM model."""
        return AccountModel(
            id=entity.id,
            email=entity.email,
            password_hash=entity.password_hash,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
