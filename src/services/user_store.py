"""Persistence for user records."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import DuplicateEmailError
from src.models.user import User

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("name", "phone", "address", "password_hash")


class CredentialStore(Protocol):
    """What the account workflows need from user storage."""

    def find_by_canonical_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create(self, **attrs) -> User: ...

    def update_password(self, user_id: int, password_hash: str) -> User: ...

    def update_profile(self, user_id: int, **fields) -> User: ...


class UserStore:
    """SQLAlchemy-backed credential store. Each write commits one row."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_canonical_email(self, email: str) -> User | None:
        """Get a user by canonical email."""
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        return self.db.query(User).filter(User.id == user_id).first()

    def create(self, **attrs) -> User:
        """Insert a new user.

        Raises:
            DuplicateEmailError: Another user already holds the email. This is
                how a lost registration race surfaces.
        """
        user = User(**attrs)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.find_by_canonical_email(attrs.get("email")) is not None:
                raise DuplicateEmailError(attrs.get("email")) from e
            raise
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def update_password(self, user_id: int, password_hash: str) -> User:
        """Replace a user's password hash."""
        return self.update_profile(user_id, password_hash=password_hash)

    def update_profile(self, user_id: int, **fields) -> User:
        """Update a subset of name, phone, address and password hash."""
        unknown = set(fields) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        user = self.find_by_id(user_id)
        if user is None:
            raise LookupError(f"User {user_id} not found")

        for field, value in fields.items():
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        return user
