"""Enums for model fields."""

from enum import IntEnum


class Role(IntEnum):
    """Account roles. Stored as integers for compatibility with existing clients."""

    USER = 0
    ADMIN = 1
