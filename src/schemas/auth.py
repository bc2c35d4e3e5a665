"""Authentication schemas.

Request fields are typed ``Any`` on purpose: presence, whitespace and format
checks run in the workflows so that every failure produces the standard
envelope and legacy status code instead of a framework validation error.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    """User registration request."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Any = None
    email: Any = None
    password: Any = None
    phone: Any = None
    address: Any = None
    dob: Any = Field(None, alias="DOB")
    answer: Any = None


class UserLogin(BaseModel):
    """User login request."""

    model_config = ConfigDict(extra="ignore")

    email: Any = None
    password: Any = None


class ForgotPassword(BaseModel):
    """Password reset via security answer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: Any = None
    answer: Any = None
    new_password: Any = Field(None, alias="newPassword")


class ProfileUpdate(BaseModel):
    """Profile update request. Empty or missing fields keep their stored value."""

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    phone: Any = None
    address: Any = None
    password: Any = None


class UserResponse(BaseModel):
    """User information response. Never carries password or answer digests."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    email: str
    phone: str
    address: str
    dob: date = Field(serialization_alias="DOB")
    role: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthCheck(BaseModel):
    """Response of the signed-in / admin check routes."""

    ok: bool = True
