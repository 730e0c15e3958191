"""Audit record repository protocol."""

from typing import List, Protocol
from uuid import UUID

from domain.entities.audit import AuditRecord


class IAuditRepository(Protocol):
    """Repository interface for AuditRecord entities (append-only)."""

    async def create(self, record: AuditRecord) -> AuditRecord:
        """Append an audit record."""
        ...

    async def get_for_account(
        self,
        account_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> List[AuditRecord]:
        """Get audit records of an account, newest first."""
        ...
