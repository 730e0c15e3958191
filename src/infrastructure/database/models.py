"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

UNIQUE_EMAIL_CONSTRAINT = "uq_accounts_email"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class AccountModel(Base):
    """Credential record; email uniqueness is enforced here."""

    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("email", name=UNIQUE_EMAIL_CONSTRAINT),)

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    profile: Mapped["ProfileModel | None"] = relationship(
        "ProfileModel",
        back_populates="account",
        uselist=False,
    )
    audit_records: Mapped[list["AuditRecordModel"]] = relationship(
        "AuditRecordModel",
        back_populates="account",
    )


class ProfileModel(Base):
    """Descriptive profile, one row per account."""

    __tablename__ = "profiles"

    account_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    profile_image: Mapped[str | None] = mapped_column(String(500))

    # Relationships
    account: Mapped["AccountModel"] = relationship(
        "AccountModel",
        back_populates="profile",
    )


class AuditRecordModel(Base):
    """Field-level change history of profiles."""

    __tablename__ = "profile_audit_records"
    __table_args__ = (
        Index("ix_profile_audit_records_account_created", "account_id", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    account_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    changed_field: Mapped[str] = mapped_column(String(50), nullable=False)
    old_value: Mapped[str] = mapped_column(Text, nullable=False)
    new_value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    account: Mapped["AccountModel"] = relationship(
        "AccountModel",
        back_populates="audit_records",
    )
