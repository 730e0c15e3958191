"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.account import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get_for_account(self, account_id: UUID, for_update: bool = False) -> Profile | None:
        """Get the profile of an account, optionally locking the row."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create the profile of a new account."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Persist the mutable fields of an existing profile."""
        ...
