"""Uniform response envelope: ``{"success": bool, "message": str, ...payload}``."""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from src.models.user import User
from src.schemas.auth import UserResponse


def envelope(
    message: str,
    status_code: int = status.HTTP_200_OK,
    success: bool = True,
    **payload,
) -> JSONResponse:
    """Return the shared response payload. HTTP status is independent of ``success``."""
    content = {"success": success, "message": message}
    content.update(jsonable_encoder(payload))
    return JSONResponse(status_code=status_code, content=content)


def error_envelope(message: str, status_code: int) -> JSONResponse:
    """Envelope for a failed request."""
    return envelope(message, status_code=status_code, success=False)


def project_user(user: User) -> dict:
    """Outward view of a user, without password or answer digests."""
    return UserResponse.model_validate(user).model_dump(mode="json", by_alias=True)
