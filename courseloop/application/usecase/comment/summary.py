"""Comment representation shared by comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from courseloop.domain.model import Comment


class CommentSummary(BaseModel):
    comment_id: str
    post_id: str
    username: str | None
    content: str
    like_count: int
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentSummary":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            username=str(comment.username) if comment.username else None,
            content=comment.content,
            like_count=comment.like_count,
            created_at=comment.created_at,
        )
