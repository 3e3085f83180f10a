"""Domain services."""

from .base import Service
from .course_catalog_service import CourseCatalogService, CourseEnrollment, CourseFailure
from .engagement_service import EngagementService
from .feed_service import FeedService
from .profile_service import ProfileService
from .reconciliation_service import CounterReconciliationService, ReconciliationReport
from .session_manager import SessionManager

__all__ = [
    "CounterReconciliationService",
    "CourseCatalogService",
    "CourseEnrollment",
    "CourseFailure",
    "EngagementService",
    "FeedService",
    "ProfileService",
    "ReconciliationReport",
    "Service",
    "SessionManager",
]
