"""Account repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.account import Account, AccountProfile


class IAccountRepository(Protocol):
    """Repository interface for Account entities."""

    async def get(self, id: UUID) -> Account | None:
        """Get an account by ID."""
        ...

    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by its exact email."""
        ...

    async def get_with_profile(self, id: UUID) -> AccountProfile | None:
        """Get an account joined with its profile."""
        ...

    async def create(self, account: Account) -> Account:
        """Create a new account.

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        ...
