"""Comment entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from courseloop.domain.model.common import DomainModel, utcnow
from courseloop.domain.value import CommentId, PostId, UserId, Username


class Comment(DomainModel):
    """Comment on a post. Its existence is authoritative for comment_count."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    username: Optional[Username] = None
    content: str = Field(min_length=1, max_length=1000)
    like_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
