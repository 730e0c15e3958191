"""Pydantic schemas for profile API."""

from datetime import datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

_REQUIRED_FIELDS = ("name", "age", "gender")


class ProfileUpdate(BaseModel):
    """Schema for a partial profile update.

    Only submitted fields are applied; unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=100)
    age: int | None = Field(None, ge=0, le=150)
    gender: str | None = Field(None, min_length=1, max_length=20)
    profile_image: str | None = Field(None, max_length=500)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> Self:
        for name in _REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProfileResponse(BaseModel):
    """Schema for profile attributes."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    age: int
    gender: str
    profile_image: str | None = None


class AccountProfileResponse(BaseModel):
    """Schema for the signed-in account with its profile."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "a@x.com",
                "created_at": "2026-01-28T10:00:00",
                "updated_at": "2026-01-28T10:00:00",
                "profile": {
                    "name": "Kim",
                    "age": 20,
                    "gender": "M",
                    "profile_image": None,
                },
            }
        },
    )

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime
    profile: ProfileResponse | None = None


class AccountProfileDetailResponse(BaseModel):
    """Schema for single account profile."""

    data: AccountProfileResponse


class AuditRecordResponse(BaseModel):
    """Schema for one profile audit record."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    changed_field: str
    old_value: str
    new_value: str
    created_at: datetime


class AuditHistoryResponse(BaseModel):
    """Schema for list of audit records."""

    data: list[AuditRecordResponse]
