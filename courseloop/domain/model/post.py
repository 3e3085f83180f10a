"""Post aggregate root.

Content and author are immutable once created. Counters change only
through backend-side atomic increments.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseloop.domain.model.common import DomainModel, utcnow
from courseloop.domain.value import CourseCode, PostId, UserId, Username


class Post(DomainModel):
    """Anonymous post attached to a course code."""

    id: PostId
    author_id: UserId
    username: Optional[Username] = None  # Denormalized from the author profile
    content: str = Field(min_length=1, max_length=1000)
    course_code: CourseCode
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
