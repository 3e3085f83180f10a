"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.application.usecase.comment.summary import CommentSummary
from courseloop.domain.service import FeedService
from courseloop.domain.value import PostId


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentSummary]


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading a post's comment thread, newest first."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        comments = await self.feed_service.list_comments(PostId(UUID(request.post_id)))
        return GetCommentsResponse(
            comments=[CommentSummary.from_comment(comment) for comment in comments]
        )
