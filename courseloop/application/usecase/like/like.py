"""Like use cases."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.domain.service import EngagementService
from courseloop.domain.value import CommentId, PostId


class LikeTarget(str, Enum):
    POST = "post"
    COMMENT = "comment"


class LikeRequest(BaseModel):
    """Like request."""

    target: LikeTarget
    item_id: str  # UUID string


class LikeResponse(BaseModel):
    """Like response."""

    target: LikeTarget
    item_id: str


class LikeUseCase(BaseUseCase):
    """Use case for liking a post or a comment.

    Likes are counted, not attributed: each call adds one.
    """

    def __init__(self, engagement_service: EngagementService) -> None:
        self.engagement_service = engagement_service

    async def execute(self, request: LikeRequest) -> LikeResponse:
        """Execute like flow.

        Raises:
            AuthError: No active session
            NotFoundError: If the post or comment does not exist
        """
        item_id = UUID(request.item_id)
        if request.target == LikeTarget.POST:
            await self.engagement_service.like_post(PostId(item_id))
        else:
            await self.engagement_service.like_comment(CommentId(item_id))

        return LikeResponse(target=request.target, item_id=str(item_id))
