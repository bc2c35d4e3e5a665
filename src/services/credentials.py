"""Account workflows: register, login, password reset and profile update.

Each workflow validates its input in a fixed order and stops at the first
failure: presence, whitespace, canonicalization, well-formedness, hygiene,
then bounds. Later checks assume the earlier ones passed (for example the
hygiene patterns only ever see strings).
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from starlette.concurrency import run_in_threadpool

from src.errors import (
    AccountError,
    AlreadyRegisteredError,
    DuplicateEmailError,
    EmailNotRegisteredError,
    InvalidCharactersError,
    InvalidPasswordError,
    MalformedFieldError,
    MissingFieldError,
    OutOfBoundsError,
    UnauthenticatedError,
    UnexpectedError,
    WhitespaceOnlyError,
    WrongEmailOrAnswerError,
)
from src.models.enums import Role
from src.models.user import User
from src.schemas.auth import ForgotPassword, ProfileUpdate, UserLogin, UserRegister
from src.services.auth import (
    create_access_token,
    get_password_hash,
    hash_answer,
    pwd_context,
    verify_answer,
    verify_password,
)
from src.services.user_store import CredentialStore
from src.services.validation import (
    MAX_ADDRESS_LENGTH,
    MAX_NAME_LENGTH,
    MIN_PROFILE_PASSWORD_LENGTH,
    ValidationResult,
    canonical_email,
    contains_injection_pattern,
    contains_xss,
    is_not_whitespace_only,
    is_valid_dob,
    is_valid_email,
    is_valid_length,
    is_valid_phone,
    parse_dob,
)

logger = logging.getLogger(__name__)


def is_missing(value) -> bool:
    """Absent, null and empty string all count as missing."""
    return value is None or value == ""


def require_present(checks: Iterable[tuple[object, str]]) -> None:
    """Raise MissingFieldError for the first missing value."""
    for value, message in checks:
        if is_missing(value):
            raise MissingFieldError(message)


def require_not_whitespace(checks: Iterable[tuple[object, str]]) -> None:
    """Raise WhitespaceOnlyError for the first whitespace-only value."""
    for value, message in checks:
        if not is_not_whitespace_only(value):
            raise WhitespaceOnlyError(message)


def require_well_formed(*results: ValidationResult) -> None:
    """Raise MalformedFieldError with the first failing validator's reason."""
    for result in results:
        if not result.ok:
            raise MalformedFieldError(result.reason)


def require_clean(*values: str) -> None:
    """Reject values that trip the XSS or injection checks.

    The message never says which field or pattern matched.
    """
    if any(contains_xss(value) or contains_injection_pattern(value) for value in values):
        raise InvalidCharactersError()


def require_within_bounds(checks: Iterable[tuple[str, int, str]]) -> None:
    """Raise OutOfBoundsError for the first value longer than its cap."""
    for value, max_length, label in checks:
        if not is_valid_length(value, max_length):
            raise OutOfBoundsError(f"{label} is too long (max {max_length} characters)")


@contextmanager
def unexpected_errors(message: str) -> Iterator[None]:
    """Turn anything that is not an AccountError into a generic 500."""
    try:
        yield
    except AccountError:
        raise
    except Exception as e:
        logger.exception(f"{message}: {e}")
        raise UnexpectedError(message) from e


class CredentialService:
    """Runs the account workflows against a credential store."""

    def __init__(self, store: CredentialStore):
        self.store = store

    async def register(self, data: UserRegister) -> User:
        """Create an account.

        Raises:
            AlreadyRegisteredError: The canonical email already has an account,
                either found up front or lost in a concurrent insert.
        """
        with unexpected_errors("Error in Registration"):
            require_present(
                [
                    (data.name, "Name is Required"),
                    (data.email, "Email is Required"),
                    (data.password, "Password is Required"),
                    (data.phone, "Phone no is Required"),
                    (data.address, "Address is Required"),
                    (data.dob, "DOB is Required"),
                    (data.answer, "Answer is Required"),
                ]
            )
            require_not_whitespace(
                [
                    (data.name, "Name cannot be whitespace only"),
                    (data.email, "Email cannot be whitespace only"),
                    (data.password, "Password cannot be whitespace only"),
                    (data.phone, "Phone no cannot be whitespace only"),
                    (data.address, "Address cannot be whitespace only"),
                    (data.dob, "DOB cannot be whitespace only"),
                    (data.answer, "Answer cannot be whitespace only"),
                ]
            )
            email = canonical_email(data.email)
            require_well_formed(
                is_valid_email(email), is_valid_phone(data.phone), is_valid_dob(data.dob)
            )
            require_clean(
                data.name,
                data.email,
                data.password,
                data.phone,
                data.address,
                data.dob,
                data.answer,
            )
            require_within_bounds(
                [
                    (data.name, MAX_NAME_LENGTH, "Name"),
                    (data.address, MAX_ADDRESS_LENGTH, "Address"),
                ]
            )

            if self.store.find_by_canonical_email(email) is not None:
                logger.info("Registration for an existing email rejected")
                raise AlreadyRegisteredError()

            password_hash = await run_in_threadpool(get_password_hash, data.password)
            answer_hash = await run_in_threadpool(hash_answer, data.answer)
            try:
                user = self.store.create(
                    name=data.name.strip(),
                    email=email,
                    phone=data.phone,
                    address=data.address,
                    dob=parse_dob(data.dob),
                    answer_hash=answer_hash,
                    password_hash=password_hash,
                    role=int(Role.USER),
                )
            except DuplicateEmailError:
                logger.info("Registration lost a race on an existing email")
                raise AlreadyRegisteredError() from None

            logger.info(f"Registered user {user.id}")
            return user

    async def login(self, data: UserLogin) -> tuple[User, str]:
        """Check credentials and issue an access token.

        Raises:
            EmailNotRegisteredError: No account for the email.
            InvalidPasswordError: The password does not match.
        """
        with unexpected_errors("Error in login"):
            if is_missing(data.email) or is_missing(data.password):
                raise MissingFieldError("Invalid email or password")
            if not (is_not_whitespace_only(data.email) and is_not_whitespace_only(data.password)):
                raise WhitespaceOnlyError("Email and password cannot be whitespace only")
            email = canonical_email(data.email)
            require_well_formed(is_valid_email(email))
            require_clean(data.email, data.password)

            user = self.store.find_by_canonical_email(email)
            if user is None:
                raise EmailNotRegisteredError()

            matched = await run_in_threadpool(verify_password, data.password, user.password_hash)
            if not matched:
                logger.warning(f"Failed login for user {user.id}")
                raise InvalidPasswordError()

            token = create_access_token(user.id)
            logger.info(f"User {user.id} logged in")
            return user, token

    async def forgot_password(self, data: ForgotPassword) -> User:
        """Reset a password after checking the security answer.

        Raises:
            WrongEmailOrAnswerError: Unknown email or wrong answer; the two are
                indistinguishable to the caller.
        """
        with unexpected_errors("Something went wrong"):
            require_present(
                [
                    (data.email, "Email is required"),
                    (data.answer, "Answer is required"),
                    (data.new_password, "New Password is required"),
                ]
            )
            require_not_whitespace(
                [
                    (data.email, "Email cannot be whitespace only"),
                    (data.answer, "Answer cannot be whitespace only"),
                    (data.new_password, "New Password cannot be whitespace only"),
                ]
            )
            email = canonical_email(data.email)
            require_well_formed(is_valid_email(email))
            require_clean(data.email, data.answer, data.new_password)

            user = self.store.find_by_canonical_email(email)
            if user is None:
                # Spend the same hashing time as a real check.
                await run_in_threadpool(pwd_context.dummy_verify)
                raise WrongEmailOrAnswerError()

            matched = await run_in_threadpool(verify_answer, data.answer, user.answer_hash)
            if not matched:
                logger.warning(f"Wrong security answer for user {user.id}")
                raise WrongEmailOrAnswerError()

            password_hash = await run_in_threadpool(get_password_hash, data.new_password)
            user = self.store.update_password(user.id, password_hash)
            logger.info(f"Password reset for user {user.id}")
            return user

    async def update_profile(self, user_id: int, data: ProfileUpdate) -> User:
        """Update name, phone, address and/or password of the signed-in user.

        Missing or empty fields keep their stored value.
        """
        with unexpected_errors("Error While Updating profile"):
            user = self.store.find_by_id(user_id)
            if user is None:
                raise UnauthenticatedError("User not found")

            supplied = {
                field: value
                for field, value in (
                    ("name", data.name),
                    ("phone", data.phone),
                    ("address", data.address),
                    ("password", data.password),
                )
                if not is_missing(value)
            }
            labels = {"name": "Name", "phone": "Phone no", "address": "Address", "password": "Password"}
            require_not_whitespace(
                (value, f"{labels[field]} cannot be whitespace only")
                for field, value in supplied.items()
            )
            if "phone" in supplied:
                require_well_formed(is_valid_phone(supplied["phone"]))
            if "password" in supplied and len(supplied["password"]) < MIN_PROFILE_PASSWORD_LENGTH:
                raise MalformedFieldError("Password is required and 6 character long")
            require_clean(*supplied.values())
            require_within_bounds(
                (supplied[field], max_length, labels[field])
                for field, max_length in (("name", MAX_NAME_LENGTH), ("address", MAX_ADDRESS_LENGTH))
                if field in supplied
            )

            fields = {}
            if "name" in supplied:
                fields["name"] = supplied["name"].strip()
            if "phone" in supplied:
                fields["phone"] = supplied["phone"]
            if "address" in supplied:
                fields["address"] = supplied["address"]
            if "password" in supplied:
                fields["password_hash"] = await run_in_threadpool(
                    get_password_hash, supplied["password"]
                )

            if not fields:
                return user
            user = self.store.update_profile(user.id, **fields)
            logger.info(f"Updated profile fields {sorted(fields)} for user {user.id}")
            return user
