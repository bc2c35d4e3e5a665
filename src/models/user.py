"""User model."""

from sqlalchemy import Column, Date, Integer, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account holder.

    ``email`` always holds the canonical (trimmed, lower-cased) address and is
    unique at the database level, so concurrent registrations cannot both win.
    ``answer_hash`` is a digest of the canonical security answer.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(254), unique=True, nullable=False, index=True)
    phone = Column(String(15), nullable=False)
    address = Column(String(500), nullable=False)
    dob = Column(Date, nullable=False)
    answer_hash = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Integer, nullable=False, default=int(Role.USER), server_default="0")

    @property
    def is_admin(self) -> bool:
        """Check if the user holds the admin role."""
        return self.role == Role.ADMIN
