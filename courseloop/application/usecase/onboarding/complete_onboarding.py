"""Complete onboarding use case."""

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.domain.model import CourseEntry
from courseloop.domain.service import CourseCatalogService, ProfileService, SessionManager


class CompleteOnboardingRequest(BaseModel):
    """Complete onboarding request."""

    username: str
    full_name: str | None = None
    university: str | None = None
    current_courses: list[CourseEntry] = []
    previous_courses: list[CourseEntry] = []


class LinkedCourse(BaseModel):
    course_id: str
    course_code: str
    professor_name: str


class FailedCourse(BaseModel):
    course_code: str
    professor_name: str
    error: str


class CompleteOnboardingResponse(BaseModel):
    """Complete onboarding response."""

    user_id: str
    username: str
    university: str | None
    linked_courses: list[LinkedCourse]
    failed_courses: list[FailedCourse]


class CompleteOnboardingUseCase(BaseUseCase):
    """Use case for the first-run profile and course setup."""

    def __init__(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        course_catalog_service: CourseCatalogService,
    ) -> None:
        """Initialize complete onboarding use case.

        Args:
            session_manager: Session gate
            profile_service: Profile domain service
            course_catalog_service: Course catalog domain service
        """
        self.session_manager = session_manager
        self.profile_service = profile_service
        self.course_catalog_service = course_catalog_service

    async def execute(
        self, request: CompleteOnboardingRequest
    ) -> CompleteOnboardingResponse:
        """Execute onboarding flow.

        Steps:
        1. Create or update the signed-in user's profile with the username
        2. Resolve and link every current and previous course

        A course that fails to link is reported, not raised; the profile
        and the other courses stand.

        Raises:
            ValidationError: Bad username or course entry
            AuthError: No active session
            ConflictError: If the username belongs to someone else
        """
        user_id = self.session_manager.require_user_id()

        profile = await self.profile_service.ensure_profile(
            user_id,
            request.username,
            full_name=request.full_name,
            university=request.university,
        )
        enrollment = await self.course_catalog_service.add_courses_for_user(
            user_id, request.current_courses, request.previous_courses
        )

        return CompleteOnboardingResponse(
            user_id=str(profile.user_id),
            username=str(profile.username),
            university=profile.university,
            linked_courses=[
                LinkedCourse(
                    course_id=str(course.id),
                    course_code=course.course_code.root,
                    professor_name=course.professor_name.root,
                )
                for course in enrollment.linked
            ],
            failed_courses=[
                FailedCourse(
                    course_code=failure.entry.course_code,
                    professor_name=failure.entry.professor_name,
                    error=str(failure.error),
                )
                for failure in enrollment.failed
            ],
        )
