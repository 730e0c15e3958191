"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileNotFoundError
from domain.entities.account import MUTABLE_PROFILE_FIELDS, Profile
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_account(self, account_id: UUID, for_update: bool = False) -> Profile | None:
        """Get the profile of an account.

        With ``for_update`` the row stays locked until the transaction ends,
        so concurrent mutations of one profile run one after the other.
        """
        stmt = select(ProfileModel).where(ProfileModel.account_id == account_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self.to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Create the profile of a new account."""
        model = ProfileModel(
            account_id=profile.account_id,
            name=profile.name,
            age=profile.age,
            gender=profile.gender,
            profile_image=profile.profile_image,
        )
        self._session.add(model)
        await self._session.flush()
        return self.to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Persist the mutable fields of an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.account_id == profile.account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ProfileNotFoundError(str(profile.account_id))

        for name in MUTABLE_PROFILE_FIELDS:
            setattr(model, name, getattr(profile, name))

        await self._session.flush()
        return self.to_entity(model)

    @staticmethod
    def to_entity(model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            account_id=model.account_id,
            name=model.name,
            age=model.age,
            gender=model.gender,
            profile_image=model.profile_image,
        )
