"""Create post use case."""

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.application.usecase.post.summary import PostSummary
from courseloop.domain.error import NotFoundError
from courseloop.domain.service import FeedService, ProfileService, SessionManager


class CreatePostRequest(BaseModel):
    """Create post request."""

    course_code: str
    content: str


class CreatePostResponse(BaseModel):
    """Create post response."""

    post: PostSummary


class CreatePostUseCase(BaseUseCase):
    """Use case for posting to a course feed as the signed-in user."""

    def __init__(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        feed_service: FeedService,
    ) -> None:
        self.session_manager = session_manager
        self.profile_service = profile_service
        self.feed_service = feed_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Raises:
            AuthError: No active session
            NotFoundError: If the user has no profile or no username yet
            ValidationError: Bad course code or content
        """
        user_id = self.session_manager.require_user_id()
        profile = await self.profile_service.get_profile(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))

        post = await self.feed_service.create_post(
            profile, request.course_code, request.content
        )
        return CreatePostResponse(post=PostSummary.from_post(post))
