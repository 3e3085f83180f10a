"""Get feed use case."""

from enum import Enum

from pydantic import BaseModel, Field

from courseloop.application.usecase.base import BaseUseCase
from courseloop.application.usecase.post.summary import PostSummary
from courseloop.domain.service import CourseCatalogService, FeedService, SessionManager
from courseloop.domain.value import CourseCode, FeedSort


class FeedFilter(str, Enum):
    """Which posts the feed shows."""

    ALL = "all"
    MY_COURSES = "my_courses"
    TRENDING = "trending"


class GetFeedRequest(BaseModel):
    """Get feed request."""

    filter: FeedFilter = FeedFilter.ALL
    course_code: str | None = None  # Narrow to a single course
    limit: int = Field(default=50, ge=1, le=200)


class GetFeedResponse(BaseModel):
    """Get feed response."""

    posts: list[PostSummary]


class GetFeedUseCase(BaseUseCase):
    """Use case for reading the post feed."""

    def __init__(
        self,
        session_manager: SessionManager,
        feed_service: FeedService,
        course_catalog_service: CourseCatalogService,
    ) -> None:
        self.session_manager = session_manager
        self.feed_service = feed_service
        self.course_catalog_service = course_catalog_service

    async def execute(self, request: GetFeedRequest) -> GetFeedResponse:
        """Execute get feed flow.

        ``my_courses`` shows posts for the codes of the user's linked
        courses; ``trending`` orders everything by like count.

        Raises:
            AuthError: No active session
            ValidationError: Bad course code
        """
        user_id = self.session_manager.require_user_id()

        course_codes: list[str] | None = None
        if request.filter == FeedFilter.MY_COURSES:
            courses = await self.course_catalog_service.list_user_courses(user_id)
            course_codes = [course.course_code.root for course in courses]
        if request.course_code is not None:
            if course_codes is None:
                course_codes = [request.course_code]
            else:
                # Narrowing my_courses to a course the user does not take is empty
                wanted = CourseCode.parse(request.course_code, "course_code").root
                course_codes = [code for code in course_codes if code == wanted]

        sort = FeedSort.TRENDING if request.filter == FeedFilter.TRENDING else FeedSort.RECENT
        posts = await self.feed_service.list_posts(
            course_codes=course_codes, sort=sort, limit=request.limit
        )
        return GetFeedResponse(posts=[PostSummary.from_post(post) for post in posts])
