"""Application layer DI providers."""

from dishka import Scope, provide

from courseloop.application.usecase.college import SearchCollegesUseCase
from courseloop.application.usecase.comment import AddCommentUseCase, GetCommentsUseCase
from courseloop.application.usecase.like import LikeUseCase
from courseloop.application.usecase.onboarding import CompleteOnboardingUseCase
from courseloop.application.usecase.post import CreatePostUseCase, GetFeedUseCase
from courseloop.domain.gateway import CollegeLookup
from courseloop.domain.service import (
    CourseCatalogService,
    EngagementService,
    FeedService,
    ProfileService,
    SessionManager,
)
from courseloop.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Onboarding use cases
    @provide(scope=Scope.REQUEST)
    def get_complete_onboarding_use_case(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        course_catalog_service: CourseCatalogService,
    ) -> CompleteOnboardingUseCase:
        """Provide complete onboarding use case."""
        return CompleteOnboardingUseCase(
            session_manager=session_manager,
            profile_service=profile_service,
            course_catalog_service=course_catalog_service,
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        feed_service: FeedService,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            session_manager=session_manager,
            profile_service=profile_service,
            feed_service=feed_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_feed_use_case(
        self,
        session_manager: SessionManager,
        feed_service: FeedService,
        course_catalog_service: CourseCatalogService,
    ) -> GetFeedUseCase:
        """Provide get feed use case."""
        return GetFeedUseCase(
            session_manager=session_manager,
            feed_service=feed_service,
            course_catalog_service=course_catalog_service,
        )

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self,
        session_manager: SessionManager,
        profile_service: ProfileService,
        engagement_service: EngagementService,
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            session_manager=session_manager,
            profile_service=profile_service,
            engagement_service=engagement_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(self, feed_service: FeedService) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(feed_service=feed_service)

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_like_use_case(self, engagement_service: EngagementService) -> LikeUseCase:
        """Provide like use case."""
        return LikeUseCase(engagement_service=engagement_service)

    # College use cases
    @provide(scope=Scope.REQUEST)
    def get_search_colleges_use_case(
        self, college_lookup: CollegeLookup
    ) -> SearchCollegesUseCase:
        """Provide search colleges use case."""
        return SearchCollegesUseCase(college_lookup=college_lookup)
