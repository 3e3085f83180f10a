"""Feed domain service: posts and comment threads."""

from typing import Optional
from uuid import uuid4

import logfire

from courseloop.domain.error import NotFoundError
from courseloop.domain.gateway import BackendGateway, Order
from courseloop.domain.gateway.mappers import post_to_dict, row_to_comment, row_to_post
from courseloop.domain.model import Comment, Post, Profile
from courseloop.domain.value import CourseCode, FeedSort, PostId, Table

from .base import Service
from .engagement_service import clean_content
from .session_manager import SessionManager

SORT_ORDERS = {
    FeedSort.RECENT: [Order(column="created_at")],
    FeedSort.TRENDING: [Order(column="like_count"), Order(column="created_at")],
}


class FeedService(Service):
    """Domain service for creating and listing posts."""

    def __init__(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> None:
        """Initialize feed service.

        Args:
            backend: Backend gateway
            session_manager: Session gate
        """
        self.backend = backend
        self.session_manager = session_manager

    async def create_post(self, author: Profile, course_code: str, content: str) -> Post:
        """Publish a post under the author's username.

        Args:
            author: Author profile; must have a username
            course_code: Course the post belongs to (normalized)
            content: Post text (trimmed, 1-1000 characters)

        Returns:
            Created post with zeroed counters

        Raises:
            ValidationError: Bad course code or content (no network call)
            AuthError: No active session
            NotFoundError: If the author has not chosen a username yet
        """
        code = CourseCode.parse(course_code, "course_code")
        text = clean_content(content)
        self.session_manager.require_session()
        if author.username is None:
            raise NotFoundError("Username", str(author.user_id))

        with logfire.span(
            "feed_service.create_post",
            author_id=str(author.user_id),
            course_code=code.root,
        ):
            post = Post(
                id=PostId(uuid4()),
                author_id=author.user_id,
                username=author.username,
                content=text,
                course_code=code,
            )
            row = await self.backend.insert(Table.POSTS, post_to_dict(post))
            saved = row_to_post(row)
            logfire.info("Post created", post_id=str(saved.id), course_code=code.root)
            return saved

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span("feed_service.get_post", post_id=str(post_id)):
            rows = await self.backend.select(Table.POSTS, {"id": post_id}, limit=1)
            if not rows:
                raise NotFoundError("Post", str(post_id))
            return row_to_post(rows[0])

    async def list_posts(
        self,
        course_codes: Optional[list[str]] = None,
        sort: FeedSort = FeedSort.RECENT,
        limit: int = 50,
    ) -> list[Post]:
        """List posts, optionally restricted to some course codes.

        An empty ``course_codes`` list means "no courses" and returns nothing.
        """
        self.session_manager.require_session()
        with logfire.span(
            "feed_service.list_posts", sort=sort.value, limit=limit
        ):
            filters = None
            if course_codes is not None:
                codes = sorted({CourseCode.parse(c, "course_code").root for c in course_codes})
                if not codes:
                    return []
                filters = {"course_code": codes}

            rows = await self.backend.select(
                Table.POSTS, filters, order=SORT_ORDERS[sort], limit=limit
            )
            posts = [row_to_post(row) for row in rows]
            logfire.info("Posts listed", count=len(posts), sort=sort.value)
            return posts

    async def list_comments(self, post_id: PostId) -> list[Comment]:
        """Comments on a post, newest first."""
        self.session_manager.require_session()
        with logfire.span("feed_service.list_comments", post_id=str(post_id)):
            rows = await self.backend.select(
                Table.COMMENTS,
                {"post_id": post_id},
                order=[Order(column="created_at")],
            )
            return [row_to_comment(row) for row in rows]
