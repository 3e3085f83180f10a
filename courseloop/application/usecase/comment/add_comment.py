"""Add comment use case."""

from uuid import UUID

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.application.usecase.comment.summary import CommentSummary
from courseloop.domain.service import EngagementService, ProfileService, SessionManager
from courseloop.domain.value import PostId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: str  # UUID string
    content: str


class AddCommentResponse(BaseModel):
    """Add comment response."""

    comment: CommentSummary


class AddCommentUseCase(BaseUseCase):
    """Use case for commenting on a post as the signed-in user."""

    def __init__(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        engagement_service: EngagementService,
    ) -> None:
        """Initialize add comment use case.

        Args:
            session_manager: Session gate
            profile_service: Profile domain service (author username)
            engagement_service: Engagement domain service
        """
        self.session_manager = session_manager
        self.profile_service = profile_service
        self.engagement_service = engagement_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Steps:
        1. Look up the author's username for display
        2. Create the comment; the post's comment count is bumped best-effort

        Raises:
            AuthError: No active session
            NotFoundError: If the post does not exist
            ValidationError: Empty or oversized content
        """
        user_id = self.session_manager.require_user_id()
        profile = await self.profile_service.get_profile(user_id)

        comment = await self.engagement_service.add_comment(
            PostId(UUID(request.post_id)),
            request.content,
            author_id=user_id,
            username=profile.username if profile else None,
        )
        return AddCommentResponse(comment=CommentSummary.from_comment(comment))
