"""Exception classes for account workflows and the auth pipeline.

Every ``AccountError`` is rendered by the handler in ``src.main`` as the
standard ``{"success": false, "message": ...}`` envelope with the error's
``status_code``. Some status codes are kept for compatibility with existing
clients: missing fields answer 404, a wrong password answers 200 and a
non-admin caller answers 401.
"""

from fastapi import status


class AccountError(Exception):
    """Base exception for all account errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingFieldError(AccountError):
    """A required input is absent or empty."""

    status_code = status.HTTP_404_NOT_FOUND


class WhitespaceOnlyError(AccountError):
    """A required input holds only whitespace."""


class MalformedFieldError(AccountError):
    """An input failed a well-formedness check."""


class InvalidCharactersError(AccountError):
    """An input tripped the XSS or injection hygiene check."""

    def __init__(self):
        super().__init__("Invalid characters detected")


class OutOfBoundsError(AccountError):
    """An input exceeds its length cap."""


class AlreadyRegisteredError(AccountError):
    """Registration for an email that already has an account."""

    status_code = status.HTTP_200_OK

    def __init__(self):
        super().__init__("Already Register please login")


class EmailNotRegisteredError(AccountError):
    """Login for an email with no account."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self):
        super().__init__("Email is not registered")


class InvalidPasswordError(AccountError):
    """Login with the wrong password."""

    status_code = status.HTTP_200_OK

    def __init__(self):
        super().__init__("Invalid Password")


class WrongEmailOrAnswerError(AccountError):
    """Password reset with an unknown email or a wrong answer.

    One message covers both causes so account existence is not disclosed.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self):
        super().__init__("Wrong Email Or Answer")


class UnauthenticatedError(AccountError):
    """Missing, malformed, tampered or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(message)


class UnauthorizedError(AccountError):
    """Signed in, but without the admin role."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__("UnAuthorized Access")


class UnexpectedError(AccountError):
    """Storage, crypto or other unexpected failure. Details are logged, not returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DuplicateEmailError(Exception):
    """Raised by the store when an insert would break email uniqueness."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email '{email}' already exists")
