"""Field validation shared by every account workflow.

All functions here are pure and total: ``None`` or non-string input yields a
failure result instead of an exception. The hygiene checks
(``contains_xss`` / ``contains_injection_pattern``) deliberately over-reject;
they are a layered defense on top of parameterized queries and output
escaping, not a replacement for them.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

# Matching is ASCII-only (case folding, \w, \d, \b) so results agree with the
# browser validators. The browser's \s also covers Unicode spaces, and its
# multi-line $ also stops before \r, U+2028 and U+2029; both are spelled out.
WS = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"
NOT_WS_OR_AT = r"[^\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff@]"
LINE_END = r"(?:$|(?=[\r\u2028\u2029]))"

FLAGS = re.IGNORECASE | re.ASCII


def _compile(pattern: str, flags: int = FLAGS) -> re.Pattern:
    return re.compile(pattern.replace(r"\s", WS), flags)


XSS_PATTERNS = [
    _compile(r"<script\b"),
    _compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>"),
    _compile(r"<[^>]+on\w+\s*="),
    _compile(r"<img[^>]+onerror"),
    _compile(r"<[^>]+src\s*=\s*[\"']?javascript:"),
    _compile(r"javascript:"),
]

INJECTION_PATTERNS = [
    _compile(r"'\s*;?\s*DROP\s+TABLE"),
    _compile(r"'\s*;?\s*DELETE\s+FROM"),
    _compile(r"'\s*;?\s*INSERT\s+INTO"),
    _compile(r"'\s*;?\s*UPDATE\s+\w+\s+SET"),
    _compile(r"'\s*OR\s+'?\d+'?\s*=\s*'?\d+'?"),
    _compile(r"'OR\s*'?\d+'?\s*'?\s*=\s*'?\d+"),
    _compile(r"\bOR\s*\d+\s*=\s*\d+\b"),
    _compile(r"--\s*" + LINE_END, FLAGS | re.MULTILINE),
]

EMAIL_PATTERN = re.compile(rf"{NOT_WS_OR_AT}+@{NOT_WS_OR_AT}+\.{NOT_WS_OR_AT}+")
PHONE_PATTERN = re.compile(r"[0-9]+")
DOB_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MAX_EMAIL_LENGTH = 254
MIN_PHONE_LENGTH = 7
MAX_PHONE_LENGTH = 15
MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 500
MIN_PROFILE_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a structured validator. ``reason`` is user-facing."""

    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


VALID = ValidationResult(ok=True)


def contains_xss(value) -> bool:
    """Return True if the value looks like it carries a script payload."""
    if not isinstance(value, str):
        return False
    return any(pattern.search(value) for pattern in XSS_PATTERNS)


def contains_injection_pattern(value) -> bool:
    """Return True if the value looks like a tampered query fragment."""
    if not isinstance(value, str):
        return False
    return any(pattern.search(value) for pattern in INJECTION_PATTERNS)


def is_valid_email(value) -> ValidationResult:
    """Check ``local@domain.tld`` shape and overall length."""
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value):
        return ValidationResult(ok=False, reason="Please enter a valid email address")
    if len(value) > MAX_EMAIL_LENGTH:
        return ValidationResult(ok=False, reason="Email is too long")
    return VALID


def is_valid_phone(value) -> ValidationResult:
    """Check that the phone number is 7-15 ASCII digits."""
    if not isinstance(value, str) or not PHONE_PATTERN.fullmatch(value):
        return ValidationResult(ok=False, reason="Phone number must contain only digits")
    if not MIN_PHONE_LENGTH <= len(value) <= MAX_PHONE_LENGTH:
        return ValidationResult(ok=False, reason="Phone number must be 7-15 digits")
    return VALID


def parse_dob(value: str) -> date:
    """Parse a date of birth that already passed ``is_valid_dob``."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def is_valid_dob(value, today: date | None = None) -> ValidationResult:
    """Check a ``YYYY-MM-DD`` date of birth that is real and not in the future."""
    if not isinstance(value, str) or not DOB_PATTERN.fullmatch(value.strip()):
        return ValidationResult(
            ok=False, reason="Please enter a valid date of birth (YYYY-MM-DD)"
        )
    try:
        dob = parse_dob(value)
    except ValueError:
        # e.g. 2023-02-30
        return ValidationResult(ok=False, reason="Please enter a valid date of birth")
    if dob > (today or date.today()):
        return ValidationResult(ok=False, reason="Date of birth cannot be in the future")
    return VALID


def is_valid_length(value, max_length: int) -> bool:
    """Check that a string is at most ``max_length`` characters."""
    return isinstance(value, str) and len(value) <= max_length


def is_not_whitespace_only(value) -> bool:
    """Check that a string has at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def canonical_email(value: str) -> str:
    """Uniqueness key for an email address."""
    return value.strip().lower()


def canonical_answer(value: str) -> str:
    """Comparison form of a security answer."""
    return value.strip().lower()
