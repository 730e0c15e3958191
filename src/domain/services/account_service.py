"""Account service: registration, sign-in and profile lookup."""

import asyncio
from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InvalidCredentialsError,
)
from domain.entities.account import Account, AccountProfile, Profile
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher, TokenUser

logger = structlog.get_logger()


class AccountService:
    """Service layer for account credentials and the joined profile view."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        token_issuer: IAuthProvider,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._tokens = token_issuer

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        age: int,
        gender: str,
        profile_image: str | None = None,
    ) -> None:
        """Create an account and its profile in one transaction.

        The existence check runs in its own read scope before hashing.
        Two sign-ups racing past it are settled by the unique email index,
        which the repository reports as DuplicateAccountError.

        Raises:
            DuplicateAccountError: If the email is already registered
            TransactionError: If the write transaction fails
        """
        async with self._uow_factory() as uow:
            existing = await uow.accounts.get_by_email(email)
        if existing:
            raise DuplicateAccountError(email)

        password_hash = await asyncio.to_thread(self._hasher.hash, password)

        async with self._uow_factory() as uow:
            account = await uow.accounts.create(
                Account(email=email, password_hash=password_hash)
            )
            await uow.profiles.create(
                Profile(
                    account_id=account.id,
                    name=name,
                    age=age,
                    gender=gender,
                    profile_image=profile_image,
                )
            )
            try:
                await uow.commit()
            except DuplicateAccountError as e:
                raise DuplicateAccountError(email) from e.__cause__

        logger.info("account_registered", account_id=str(account.id))

    async def authenticate(self, email: str, password: str) -> str:
        """Verify credentials and issue a session token bound to the account.

        Unknown email and wrong password raise the same error.
        """
        async with self._uow_factory() as uow:
            account = await uow.accounts.get_by_email(email)

        if not account:
            logger.info("sign_in_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(
            self._hasher.verify, password, account.password_hash
        )
        if not matches:
            logger.info("sign_in_failed", reason="password_mismatch", account_id=str(account.id))
            raise InvalidCredentialsError()

        token = self._tokens.create_token(TokenUser(id=account.id, email=account.email))
        logger.info("sign_in_succeeded", account_id=str(account.id))
        return token

    async def get_profile(self, account_id: UUID) -> AccountProfile:
        """Get the account joined with its profile, without credentials."""
        async with self._uow_factory() as uow:
            view = await uow.accounts.get_with_profile(account_id)
            if not view:
                raise AccountNotFoundError(str(account_id))
            return view  # type: ignore[no-any-return]
