"""Audit service for recording and reading profile change history."""

from collections.abc import Callable, Mapping
from typing import Any
from uuid import UUID

from core.exceptions import AccountNotFoundError
from domain.entities.audit import AuditRecord
from domain.repositories.unit_of_work import IUnitOfWork


def stringify(value: Any) -> str:
    """Render a field value for the audit trail.

    ``None`` becomes ``"null"`` and booleans become ``"true"``/``"false"``;
    everything else goes through ``str``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class AuditService:
    """Service layer for the profile audit trail."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    def compute_changes(
        account_id: UUID,
        snapshot: Mapping[str, Any],
        updates: Mapping[str, Any],
    ) -> list[AuditRecord]:
        """Build one audit record per submitted field whose value changed.

        Args:
            account_id: The account whose profile is being mutated.
            snapshot: Field values before the mutation.
            updates: Submitted field values.

        Returns:
            Audit records in submission order; empty if nothing changed.
        """
        return [
            AuditRecord(
                account_id=account_id,
                changed_field=name,
                old_value=stringify(snapshot.get(name)),
                new_value=stringify(new_value),
            )
            for name, new_value in updates.items()
            if snapshot.get(name) != new_value
        ]

    async def log(self, uow: IUnitOfWork, records: list[AuditRecord]) -> list[AuditRecord]:
        """Append records within an existing UoW transaction.

        The caller owns the commit, so the records land together with the
        profile write they describe or not at all.
        """
        return [await uow.audit_records.create(record) for record in records]

    async def get_history(
        self,
        account_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuditRecord]:
        """Get the audit trail of an account, newest first."""
        async with self._uow_factory() as uow:
            account = await uow.accounts.get(account_id)
            if not account:
                raise AccountNotFoundError(str(account_id))

            return await uow.audit_records.get_for_account(  # type: ignore[no-any-return]
                account_id, limit=limit, offset=offset
            )
