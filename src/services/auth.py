"""Authentication service for JWT and password handling."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import get_settings
from src.services.validation import canonical_answer

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: int


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def hash_answer(answer: str) -> str:
    """Hash a security answer in its canonical form."""
    return pwd_context.hash(canonical_answer(answer))


def verify_answer(answer: str, hashed_answer: str) -> bool:
    """Verify a security answer against its hash, ignoring case and outer whitespace."""
    return pwd_context.verify(canonical_answer(answer), hashed_answer)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expiration_minutes))
    to_encode = {
        "user_id": user_id,
        "iat": now,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str | None) -> TokenClaims | None:
    """Decode and validate a JWT token.

    Returns None for anything that is not a valid, unexpired token; never raises.
    """
    if not isinstance(token, str) or not token:
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    user_id = payload.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None
    return TokenClaims(user_id=user_id)
