"""Authentication endpoints."""
from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_service, require_token_claims
from ..schemas import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenClaims,
    UserRead,
)
from ..service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest, service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """Authenticate a user and return a JWT access token."""

    result = await service.login(payload.username, payload.password)
    return AuthResponse(user=UserRead.model_validate(result.user), token=result.token)


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterRequest, service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """Create a user account and sign it in."""

    result = await service.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return AuthResponse(user=UserRead.model_validate(result.user), token=result.token)


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    claims: TokenClaims = Depends(require_token_claims),
    service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """Return the account the bearer token was issued for."""

    user = await service.fetch_profile(claims)
    return ProfileResponse(user=UserRead.model_validate(user))
