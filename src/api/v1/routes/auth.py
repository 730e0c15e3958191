"""Sign-up and sign-in API routes."""

from fastapi import APIRouter, Depends, Request, Response, status

from api.dependencies.auth import get_auth_provider
from api.v1.dependencies import get_account_service
from api.v1.schemas.account import SignInRequest, SignInResponse, SignUpRequest
from api.v1.schemas.common import ErrorResponse, MessageResponse
from core.config import settings
from core.rate_limit import limiter
from domain.services.account_service import AccountService
from infrastructure.auth.jwt_provider import JWTAuthProvider

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-up",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account",
    responses={
        201: {"description": "Account registered"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_up(
    request: Request,
    body: SignUpRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Create an account with its profile. The new account's ID is not returned."""
    await service.register(
        email=body.email,
        password=body.password,
        name=body.name,
        age=body.age,
        gender=body.gender,
        profile_image=body.profile_image,
    )
    return MessageResponse(message="Account registered")


@router.post(
    "/sign-in",
    response_model=SignInResponse,
    summary="Sign in",
    responses={
        200: {"description": "Signed in; token returned and set as a cookie"},
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def sign_in(
    request: Request,
    response: Response,
    body: SignInRequest,
    service: AccountService = Depends(get_account_service),
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> SignInResponse:
    """Verify credentials and issue a session token."""
    token = await service.authenticate(body.email, body.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=auth_provider.expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return SignInResponse(message="Signed in", access_token=token)
