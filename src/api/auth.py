"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import PlainTextResponse

from src.api.dependencies import get_credential_service, require_admin, require_signed_in
from src.api.responses import envelope, project_user
from src.schemas.auth import AuthCheck, ForgotPassword, ProfileUpdate, UserLogin, UserRegister
from src.services.auth import TokenClaims
from src.services.credentials import CredentialService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    service: Annotated[CredentialService, Depends(get_credential_service)],
    user_data: Annotated[UserRegister | None, Body()] = None,
):
    """Register a new user."""
    user = await service.register(user_data or UserRegister())
    return envelope(
        "User Register Successfully",
        status_code=status.HTTP_201_CREATED,
        user=project_user(user),
    )


@router.post("/login")
async def login(
    service: Annotated[CredentialService, Depends(get_credential_service)],
    credentials: Annotated[UserLogin | None, Body()] = None,
):
    """Login with email and password."""
    user, token = await service.login(credentials or UserLogin())
    return envelope("login successfully", user=project_user(user), token=token)


@router.post("/forgot-password")
async def forgot_password(
    service: Annotated[CredentialService, Depends(get_credential_service)],
    reset: Annotated[ForgotPassword | None, Body()] = None,
):
    """Reset a password using the security answer."""
    await service.forgot_password(reset or ForgotPassword())
    return envelope("Password Reset Successfully")


@router.put("/profile")
async def update_profile(
    claims: Annotated[TokenClaims, Depends(require_signed_in)],
    service: Annotated[CredentialService, Depends(get_credential_service)],
    profile: Annotated[ProfileUpdate | None, Body()] = None,
):
    """Update the signed-in user's profile."""
    user = await service.update_profile(claims.user_id, profile or ProfileUpdate())
    return envelope("Profile Updated Successfully", user=project_user(user))


@router.get("/user-auth", response_model=AuthCheck)
async def user_auth(
    claims: Annotated[TokenClaims, Depends(require_signed_in)],
):
    """Reachable only when signed in."""
    return AuthCheck(ok=True)


@router.get("/admin-auth", response_model=AuthCheck)
async def admin_auth(
    claims: Annotated[TokenClaims, Depends(require_admin)],
):
    """Reachable only when signed in as an admin."""
    return AuthCheck(ok=True)


@router.get("/test", response_class=PlainTextResponse)
async def protected_test(
    claims: Annotated[TokenClaims, Depends(require_admin)],
):
    """Smoke route for the admin pipeline."""
    return "Protected Routes"
