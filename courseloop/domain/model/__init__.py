"""Domain model entities for CourseLoop."""

from courseloop.domain.model.college import College
from courseloop.domain.model.comment import Comment
from courseloop.domain.model.course import Course, CourseEntry, UserCourse
from courseloop.domain.model.post import Post
from courseloop.domain.model.profile import Profile, ProfilePatch
from courseloop.domain.model.session import AuthState, Session

__all__ = [
    "AuthState",
    "College",
    "Comment",
    "Course",
    "CourseEntry",
    "Post",
    "Profile",
    "ProfilePatch",
    "Session",
    "UserCourse",
]
