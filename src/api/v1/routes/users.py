"""Current-user profile API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_account_service, get_audit_service, get_profile_service
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    AccountProfileDetailResponse,
    AccountProfileResponse,
    AuditHistoryResponse,
    AuditRecordResponse,
    ProfileUpdate,
)
from core.rate_limit import limiter
from domain.services.account_service import AccountService
from domain.services.audit_service import AuditService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=AccountProfileDetailResponse,
    summary="Get the signed-in account",
    responses={
        200: {"description": "Account and profile"},
        404: {"model": ErrorResponse, "description": "Account not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AccountService = Depends(get_account_service),
) -> AccountProfileDetailResponse:
    """Get the account and its profile. Credentials are never included."""
    view = await service.get_profile(user.id)
    return AccountProfileDetailResponse(data=AccountProfileResponse.model_validate(view))


@router.patch(
    "/me",
    response_model=MessageResponse,
    summary="Update the signed-in account's profile",
    responses={
        200: {"description": "Profile updated"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        422: {"model": ErrorResponse, "description": "Unknown or invalid fields"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_me(
    request: Request,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Apply the submitted fields and record each changed value in the history."""
    await service.update_profile(user.id, body.model_dump(exclude_unset=True))
    return MessageResponse(message="Profile updated")


@router.get(
    "/me/history",
    response_model=AuditHistoryResponse,
    summary="Get profile change history",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_history(
    request: Request,
    user: CurrentUser,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: AuditService = Depends(get_audit_service),
) -> AuditHistoryResponse:
    """Get field-level profile changes, newest first."""
    records = await service.get_history(user.id, limit=limit, offset=offset)
    return AuditHistoryResponse(
        data=[AuditRecordResponse.model_validate(record) for record in records]
    )
