"""Profile service: audited profile mutation."""

from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError, UnknownProfileFieldError
from domain.entities.account import MUTABLE_PROFILE_FIELDS
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.audit_service import AuditService

logger = structlog.get_logger()


class ProfileService:
    """Service layer for profile updates and their audit trail."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        audit_service: AuditService,
    ) -> None:
        self._uow_factory = uow_factory
        self._audit = audit_service

    async def update_profile(self, account_id: UUID, field_updates: Mapping[str, Any]) -> None:
        """Apply a partial profile update and audit every changed field.

        The snapshot is read inside the transaction with a row lock, so a
        concurrent update of the same profile waits and then diffs against
        the committed result of this one. The profile write and all audit
        records commit together.

        Args:
            account_id: The authenticated account.
            field_updates: Submitted values keyed by profile field name.

        Raises:
            UnknownProfileFieldError: If a key is outside the mutable set
            ProfileNotFoundError: If the account has no profile
            TransactionError: If the transaction fails (fully rolled back)
        """
        unknown = sorted(set(field_updates) - set(MUTABLE_PROFILE_FIELDS))
        if unknown:
            raise UnknownProfileFieldError(unknown, list(MUTABLE_PROFILE_FIELDS))

        updates = dict(field_updates)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_for_account(account_id, for_update=True)
            if not profile:
                raise ProfileNotFoundError(str(account_id))

            if not updates:
                return

            changes = AuditService.compute_changes(account_id, profile.snapshot(), updates)

            await uow.profiles.update(replace(profile, **updates))
            await self._audit.log(uow, changes)
            await uow.commit()

        logger.info(
            "profile_updated",
            account_id=str(account_id),
            changed_fields=[record.changed_field for record in changes],
        )
