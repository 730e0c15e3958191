"""SQLAlchemy implementation of the profile audit repository."""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.audit import AuditRecord
from infrastructure.database.models import AuditRecordModel


class SQLAlchemyAuditRepository:
    """SQLAlchemy implementation of IAuditRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, record: AuditRecord) -> AuditRecord:
        """Append an audit record."""
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get_for_account(
        self,
        account_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> List[AuditRecord]:
        """Get audit records of an account, ordered by newest first."""
        stmt = (
            select(AuditRecordModel)
            .where(AuditRecordModel.account_id == account_id)
            .order_by(AuditRecordModel.created_at.desc(), AuditRecordModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: AuditRecordModel) -> AuditRecord:
        """Convert ORM model to domain entity."""
        return AuditRecord(
            id=model.id,
            account_id=model.account_id,
            changed_field=model.changed_field,
            old_value=model.old_value,
            new_value=model.new_value,
            created_at=model.created_at,
        )

    def _to_model(self, entity: AuditRecord) -> AuditRecordModel:
        """Convert domain entity to ORM model."""
        return AuditRecordModel(
            id=entity.id,
            account_id=entity.account_id,
            changed_field=entity.changed_field,
            old_value=entity.old_value,
            new_value=entity.new_value,
            created_at=entity.created_at,
        )
