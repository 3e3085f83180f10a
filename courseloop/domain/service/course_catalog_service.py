"""Course catalog domain service.

Find-or-create under concurrency. Many students reference the same course
for the first time at the start of a semester, so two callers can both
miss the lookup and both try to create. The backend's unique key on
(course_code, professor_name) lets exactly one insert win; the loser
re-queries once and returns the winner's row. No client-side lock is
taken.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

import logfire

from courseloop.domain.error import (
    AuthError,
    AuthFailure,
    ConflictError,
    DomainError,
    DuplicateRowError,
)
from courseloop.domain.gateway import BackendGateway, Order
from courseloop.domain.gateway.mappers import (
    course_to_dict,
    row_to_course,
    user_course_to_dict,
)
from courseloop.domain.model import Course, CourseEntry, UserCourse
from courseloop.domain.value import CourseCode, CourseId, ProfessorName, Table, UserId

from .base import Service
from .session_manager import SessionManager


@dataclass
class CourseFailure:
    """A course that could not be resolved or linked."""

    entry: CourseEntry
    error: DomainError


@dataclass
class CourseEnrollment:
    """Outcome of linking a batch of courses to a user.

    Linked courses stay linked even when others fail; retry only
    ``failed`` entries.
    """

    linked: list[Course] = field(default_factory=list)
    failed: list[CourseFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed


class CourseCatalogService(Service):
    """Domain service resolving (code, professor) pairs to canonical courses."""

    def __init__(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> None:
        """Initialize course catalog service.

        Args:
            backend: Backend gateway
            session_manager: Session gate
        """
        self.backend = backend
        self.session_manager = session_manager

    async def resolve_course(self, code: str, professor: str) -> Course:
        """Find or create the course and link it to the signed-in user.

        Args:
            code: Course code as typed; normalized before any lookup
            professor: Professor name

        Returns:
            The canonical course; every concurrent caller gets the same id

        Raises:
            ValidationError: Empty code or professor (no network call)
            AuthError: No active session
            ConflictError: course_dedup_exhausted if the backend reported a
                duplicate but the re-query still finds nothing
        """
        course_code = CourseCode.parse(code, "course_code")
        professor_name = ProfessorName.parse(professor, "professor_name")
        user_id = self.session_manager.require_user_id()
        return await self._resolve_and_link(user_id, course_code, professor_name)

    async def add_courses_for_user(
        self,
        user_id: UserId,
        current_courses: list[CourseEntry],
        previous_courses: list[CourseEntry],
    ) -> CourseEnrollment:
        """Resolve and link every current and previous course.

        Entries are processed concurrently. A failed entry does not roll
        back the others.

        Raises:
            ValidationError: If any entry is malformed (nothing is sent)
            AuthError: No active session, or ``user_id`` is not the signed-in user
        """
        keys: dict[tuple[str, str], CourseEntry] = {}
        for entry in [*current_courses, *previous_courses]:
            code = CourseCode.parse(entry.course_code, "course_code")
            professor = ProfessorName.parse(entry.professor_name, "professor_name")
            keys.setdefault((code.root, professor.root), entry)
        if self.session_manager.require_user_id() != user_id:
            logfire.warn("Course link for another user refused", user_id=str(user_id))
            raise AuthError(AuthFailure.NOT_AUTHENTICATED, "session belongs to another user")

        with logfire.span(
            "course_catalog_service.add_courses_for_user",
            user_id=str(user_id),
            course_count=len(keys),
        ):
            results = await asyncio.gather(
                *(
                    self._resolve_and_link(user_id, CourseCode(code), ProfessorName(prof))
                    for code, prof in keys
                ),
                return_exceptions=True,
            )

            enrollment = CourseEnrollment()
            for entry, result in zip(keys.values(), results):
                if isinstance(result, DomainError):
                    enrollment.failed.append(CourseFailure(entry=entry, error=result))
                elif isinstance(result, BaseException):
                    raise result
                else:
                    enrollment.linked.append(result)

            if enrollment.failed:
                logfire.warn(
                    "Some courses could not be added",
                    user_id=str(user_id),
                    linked=len(enrollment.linked),
                    failed=[f.entry.course_code for f in enrollment.failed],
                )
            else:
                logfire.info(
                    "Courses added", user_id=str(user_id), linked=len(enrollment.linked)
                )
            return enrollment

    async def list_user_courses(self, user_id: UserId) -> list[Course]:
        """Courses linked to a user, ordered by code."""
        with logfire.span(
            "course_catalog_service.list_user_courses", user_id=str(user_id)
        ):
            links = await self.backend.select(Table.USER_COURSES, {"user_id": user_id})
            if not links:
                return []
            course_ids = [link["course_id"] for link in links]
            rows = await self.backend.select(Table.COURSES, {"id": course_ids})
            courses = [row_to_course(row) for row in rows]
            return sorted(courses, key=lambda c: c.identity_key)

    async def _resolve_and_link(
        self, user_id: UserId, code: CourseCode, professor: ProfessorName
    ) -> Course:
        with logfire.span(
            "course_catalog_service.resolve_course",
            course_code=code.root,
            professor_name=professor.root,
        ):
            course = await self._find_or_create(code, professor)
            await self._link(user_id, course.id)
            return course

    async def _find(self, code: CourseCode, professor: ProfessorName) -> Optional[Course]:
        rows = await self.backend.select(
            Table.COURSES,
            {"course_code": code.root, "professor_name": professor.root},
            order=[Order(column="id", descending=False)],
            limit=1,
        )
        return row_to_course(rows[0]) if rows else None

    async def _find_or_create(self, code: CourseCode, professor: ProfessorName) -> Course:
        existing = await self._find(code, professor)
        if existing is not None:
            return existing

        candidate = Course(
            id=CourseId(uuid4()), course_code=code, professor_name=professor
        )
        try:
            row = await self.backend.insert(Table.COURSES, course_to_dict(candidate))
        except DuplicateRowError:
            logfire.info(
                "Course created concurrently, re-querying",
                course_code=code.root,
                professor_name=professor.root,
            )
        else:
            logfire.info("Course created", course_id=str(row["id"]), course_code=code.root)
            return row_to_course(row)

        # Single bounded retry
        existing = await self._find(code, professor)
        if existing is None:
            logfire.error(
                "Course missing after duplicate-key conflict",
                course_code=code.root,
                professor_name=professor.root,
            )
            raise ConflictError(ConflictError.COURSE_DEDUP_EXHAUSTED)
        return existing

    async def _link(self, user_id: UserId, course_id: CourseId) -> None:
        link = UserCourse(user_id=user_id, course_id=course_id)
        existing = await self.backend.select(
            Table.USER_COURSES, user_course_to_dict(link), limit=1
        )
        if existing:
            return
        try:
            await self.backend.insert(Table.USER_COURSES, user_course_to_dict(link))
        except DuplicateRowError:
            logfire.info(
                "Course already linked", user_id=str(user_id), course_id=str(course_id)
            )
