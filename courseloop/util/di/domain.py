"""Domain layer DI providers."""

from dishka import Scope, provide

from courseloop.config import AuthSettings, BackendSettings
from courseloop.domain.gateway import AuthGateway, BackendGateway, TableGateway
from courseloop.domain.service import (
    CounterReconciliationService,
    CourseCatalogService,
    EngagementService,
    FeedService,
    ProfileService,
    SessionManager,
)
from courseloop.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are APP-scoped: the process has exactly one session,
    owned by the SessionManager every other service consults.
    """

    scope = Scope.APP

    @provide
    def get_backend_gateway(
        self,
        auth: AuthGateway,
        tables: TableGateway,
        backend_settings: BackendSettings,
    ) -> BackendGateway:
        """Provide the timeout-bounded backend gateway."""
        return BackendGateway(
            auth=auth,
            tables=tables,
            request_timeout=backend_settings.request_timeout,
        )

    @provide
    def get_session_manager(
        self, backend: BackendGateway, auth_settings: AuthSettings
    ) -> SessionManager:
        """Provide the session state machine."""
        return SessionManager(backend=backend, auth_settings=auth_settings)

    @provide
    def get_profile_service(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(backend=backend, session_manager=session_manager)

    @provide
    def get_course_catalog_service(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> CourseCatalogService:
        """Provide course catalog domain service."""
        return CourseCatalogService(backend=backend, session_manager=session_manager)

    @provide
    def get_engagement_service(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> EngagementService:
        """Provide engagement domain service."""
        return EngagementService(backend=backend, session_manager=session_manager)

    @provide
    def get_feed_service(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> FeedService:
        """Provide feed domain service."""
        return FeedService(backend=backend, session_manager=session_manager)

    @provide
    def get_reconciliation_service(
        self, backend: BackendGateway
    ) -> CounterReconciliationService:
        """Provide counter reconciliation service."""
        return CounterReconciliationService(backend=backend)
