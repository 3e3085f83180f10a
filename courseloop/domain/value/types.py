"""Domain value objects for CourseLoop.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation and normalization rules, so the same rule
applies everywhere a value is formed.
"""

import re
from enum import Enum

from pydantic import field_validator

from courseloop.domain.value.common import RootValueObject

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_]{3,20}")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


class Table(str, Enum):
    """Backend tables the core reads and writes."""

    PROFILES = "profiles"
    POSTS = "posts"
    COMMENTS = "comments"
    COURSES = "courses"
    USER_COURSES = "user_courses"


class SessionStatus(str, Enum):
    """States of the authentication state machine."""

    SIGNED_OUT = "signed_out"
    OTP_SENT = "otp_sent"
    AUTHENTICATED = "authenticated"


class OTPStatus(str, Enum):
    """Outcome of a code verification at the backend."""

    VERIFIED = "verified"
    INVALID = "invalid"
    EXPIRED = "expired"


class FeedSort(str, Enum):
    """Sort order for post listings."""

    RECENT = "recent"  # created_at DESC
    TRENDING = "trending"  # like_count DESC, then created_at DESC


class Username(RootValueObject[str]):
    """Public, unique display name: 3-20 letters, digits or underscores."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not USERNAME_PATTERN.fullmatch(v):
            raise ValueError(
                "Username must be 3-20 characters: letters, numbers and underscores"
            )
        return v


class EmailAddress(RootValueObject[str]):
    """Email address, trimmed and lowercased."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Email must be a string")
        v = v.strip().lower()
        if not EMAIL_PATTERN.fullmatch(v):
            raise ValueError("Invalid email address")
        return v

    def has_suffix(self, suffixes: list[str]) -> bool:
        """Whether the domain part ends with one of the given suffixes."""
        domain = self.root.rsplit("@", 1)[1]
        return any(domain.endswith(s.lower().lstrip("@")) for s in suffixes)


class CourseCode(RootValueObject[str]):
    """Normalized course code: non-alphanumerics stripped, uppercased.

    "cs 101", "CS-101" and "cs101" all normalize to "CS101".
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Course code must be a string")
        normalized = "".join(ch for ch in v if ch.isalnum()).upper()
        if not normalized:
            raise ValueError("Course code must contain letters or digits")
        if len(normalized) > 20:
            raise ValueError("Course code must be at most 20 characters")
        return normalized


class ProfessorName(RootValueObject[str]):
    """Professor name as entered ("Last, First"), whitespace-collapsed."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Professor name must be a string")
        collapsed = " ".join(v.split())
        if not collapsed:
            raise ValueError("Professor name must not be empty")
        if len(collapsed) > 100:
            raise ValueError("Professor name must be at most 100 characters")
        return collapsed
