"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthCheck,
    ForgotPassword,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "ForgotPassword",
    "ProfileUpdate",
    "UserResponse",
    "AuthCheck",
]
