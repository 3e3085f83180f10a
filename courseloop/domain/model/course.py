"""Course catalog entities.

A course is identified by the pair (course_code, professor_name), never by
its id. The code is stored normalized.
"""

from pydantic import Field

from courseloop.domain.model.common import DomainModel
from courseloop.domain.value import CourseCode, CourseId, ProfessorName, UserId


class Course(DomainModel):
    """Canonical course record."""

    id: CourseId
    course_code: CourseCode
    professor_name: ProfessorName

    @property
    def identity_key(self) -> tuple[str, str]:
        return (self.course_code.root, self.professor_name.root)


class UserCourse(DomainModel):
    """Link between a user and a course they take or took."""

    user_id: UserId
    course_id: CourseId


class CourseEntry(DomainModel):
    """A course as typed by a user, before resolution."""

    course_code: str = Field(min_length=1)
    professor_name: str = Field(min_length=1)
