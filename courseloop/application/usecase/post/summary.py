"""Post representation shared by post use cases."""

from datetime import datetime

from pydantic import BaseModel

from courseloop.domain.model import Post


class PostSummary(BaseModel):
    """Post as shown in a feed."""

    post_id: str
    username: str | None
    content: str
    course_code: str
    like_count: int
    comment_count: int
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            post_id=str(post.id),
            username=str(post.username) if post.username else None,
            content=post.content,
            course_code=post.course_code.root,
            like_count=post.like_count,
            comment_count=post.comment_count,
            created_at=post.created_at,
        )
