"""Strongly typed identifiers for CourseLoop entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
CourseId = NewType("CourseId", UUID)
