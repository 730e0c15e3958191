"""Audit record domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class AuditRecord:
    """Immutable entry for one field change of one profile mutation."""

    account_id: UUID
    changed_field: str
    old_value: str
    new_value: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
