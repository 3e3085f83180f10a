"""Domain value objects for CourseLoop."""

from courseloop.domain.value.identifiers import CommentId, CourseId, PostId, UserId
from courseloop.domain.value.types import (
    CourseCode,
    EmailAddress,
    FeedSort,
    OTPStatus,
    ProfessorName,
    SessionStatus,
    Table,
    Username,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "CourseId",
    # Types
    "CourseCode",
    "EmailAddress",
    "FeedSort",
    "OTPStatus",
    "ProfessorName",
    "SessionStatus",
    "Table",
    "Username",
]
