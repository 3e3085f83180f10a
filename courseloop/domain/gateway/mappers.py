"""Mappers between backend rows and domain models.

Rows use the backend's snake_case column names. Values arrive either as
Python objects (SQL, in-memory) or JSON strings (HTTP); pydantic
validation accepts both.
"""

from typing import Any, Dict

from courseloop.domain.model import Comment, Course, Post, Profile, UserCourse

PROFILE_COLUMNS = ("username", "full_name", "avatar_url", "university")


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert a ``profiles`` row to a Profile.

    The row's ``id`` is the owning user's id.
    """
    return Profile.model_validate(
        {
            "user_id": row["id"],
            "username": row.get("username"),
            "email": row.get("email"),
            "full_name": row.get("full_name"),
            "avatar_url": row.get("avatar_url"),
            "university": row.get("university"),
            "created_at": row["created_at"],
        }
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    return {
        "id": profile.user_id,
        "username": profile.username.root if profile.username else None,
        "email": profile.email,
        "full_name": profile.full_name,
        "avatar_url": profile.avatar_url,
        "university": profile.university,
        "created_at": profile.created_at,
    }


def row_to_course(row: Dict[str, Any]) -> Course:
    return Course.model_validate(
        {
            "id": row["id"],
            "course_code": row["course_code"],
            "professor_name": row["professor_name"],
        }
    )


def course_to_dict(course: Course) -> Dict[str, Any]:
    return {
        "id": course.id,
        "course_code": course.course_code.root,
        "professor_name": course.professor_name.root,
    }


def user_course_to_dict(link: UserCourse) -> Dict[str, Any]:
    return {"user_id": link.user_id, "course_id": link.course_id}


def row_to_post(row: Dict[str, Any]) -> Post:
    return Post.model_validate(
        {
            "id": row["id"],
            "author_id": row["user_id"],
            "username": row.get("username"),
            "content": row["content"],
            "course_code": row["course_code"],
            "like_count": row.get("like_count", 0),
            "comment_count": row.get("comment_count", 0),
            "created_at": row["created_at"],
        }
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    return {
        "id": post.id,
        "user_id": post.author_id,
        "username": post.username.root if post.username else None,
        "content": post.content,
        "course_code": post.course_code.root,
        "like_count": post.like_count,
        "comment_count": post.comment_count,
        "created_at": post.created_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    return Comment.model_validate(
        {
            "id": row["id"],
            "post_id": row["post_id"],
            "author_id": row["user_id"],
            "username": row.get("username"),
            "content": row["content"],
            "like_count": row.get("like_count", 0),
            "created_at": row["created_at"],
        }
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": comment.author_id,
        "username": comment.username.root if comment.username else None,
        "content": comment.content,
        "like_count": comment.like_count,
        "created_at": comment.created_at,
    }
