"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import UnauthenticatedError, UnauthorizedError, UnexpectedError
from src.services.auth import TokenClaims, decode_access_token
from src.services.credentials import CredentialService
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Get the credential store for this request."""
    return UserStore(db)


def get_credential_service(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> CredentialService:
    """Get the account workflow service with dependencies."""
    return CredentialService(store)


def require_signed_in(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """Authenticate the caller from the Authorization header.

    The header value is the raw token, without a ``Bearer`` prefix; existing
    clients send it that way. On success the claims are also placed on
    ``request.state.user``.
    """
    claims = decode_access_token(authorization)
    if claims is None:
        raise UnauthenticatedError()

    request.state.user = claims
    return claims


def require_admin(
    claims: Annotated[TokenClaims, Depends(require_signed_in)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> TokenClaims:
    """Allow only callers whose account holds the admin role.

    Runs after ``require_signed_in``, so an unauthenticated request never
    reaches the role check. A failing store lookup is a server error, not a
    denial.
    """
    try:
        user = store.find_by_id(claims.user_id)
    except Exception as e:
        logger.exception(f"Admin check failed for user {claims.user_id}: {e}")
        raise UnexpectedError("Error in admin middleware") from e

    if user is None or not user.is_admin:
        raise UnauthorizedError()
    return claims
