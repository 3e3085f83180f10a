"""Engagement domain service: likes and comments.

Counters are never computed client-side. A like is a backend-atomic
``like_count = like_count + 1``; reading the count, adding one and writing
it back would lose updates under concurrent likes.

Creating a comment and bumping the post's ``comment_count`` are two
writes the backend does not join in a transaction. The comment row is
authoritative: if the increment fails the comment still stands and the
counter is repaired later by ``CounterReconciliationService``.
"""

from uuid import uuid4

import logfire

from courseloop.domain.error import DomainError, NotFoundError, ValidationError
from courseloop.domain.gateway import BackendGateway
from courseloop.domain.gateway.mappers import comment_to_dict, row_to_comment
from courseloop.domain.model import Comment
from courseloop.domain.value import CommentId, PostId, Table, UserId, Username

from .base import Service
from .session_manager import SessionManager

MAX_CONTENT_LENGTH = 1000


def clean_content(content: str) -> str:
    """Trim user text and enforce the 1-1000 character limit."""
    text = content.strip()
    if not text:
        raise ValidationError("content", "Content must not be empty")
    if len(text) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            "content", f"Content must be at most {MAX_CONTENT_LENGTH} characters"
        )
    return text


class EngagementService(Service):
    """Domain service maintaining like and comment counters."""

    def __init__(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> None:
        """Initialize engagement service.

        Args:
            backend: Backend gateway
            session_manager: Session gate
        """
        self.backend = backend
        self.session_manager = session_manager

    async def like_post(self, post_id: PostId) -> None:
        """Atomically increment a post's like count.

        Raises:
            AuthError: No active session
            NotFoundError: If the post does not exist
        """
        self.session_manager.require_session()
        with logfire.span("engagement_service.like_post", post_id=str(post_id)):
            matched = await self.backend.increment(
                Table.POSTS, "like_count", {"id": post_id}, 1
            )
            if not matched:
                logfire.warn("Like on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post liked", post_id=str(post_id))

    async def like_comment(self, comment_id: CommentId) -> None:
        """Atomically increment a comment's like count.

        Raises:
            AuthError: No active session
            NotFoundError: If the comment does not exist
        """
        self.session_manager.require_session()
        with logfire.span(
            "engagement_service.like_comment", comment_id=str(comment_id)
        ):
            matched = await self.backend.increment(
                Table.COMMENTS, "like_count", {"id": comment_id}, 1
            )
            if not matched:
                logfire.warn("Like on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment liked", comment_id=str(comment_id))

    async def add_comment(
        self,
        post_id: PostId,
        content: str,
        author_id: UserId,
        username: Username | None = None,
    ) -> Comment:
        """Create a comment and bump the parent post's comment count.

        Args:
            post_id: Parent post
            content: Comment text (trimmed, 1-1000 characters)
            author_id: Commenting user
            username: Author's username, denormalized for display

        Returns:
            The created comment. Returned even if the counter increment failed.

        Raises:
            ValidationError: Empty or oversized content (no network call)
            AuthError: No active session
            NotFoundError: If the post does not exist
        """
        text = clean_content(content)
        self.session_manager.require_session()

        with logfire.span(
            "engagement_service.add_comment",
            post_id=str(post_id),
            author_id=str(author_id),
        ):
            posts = await self.backend.select(Table.POSTS, {"id": post_id}, limit=1)
            if not posts:
                logfire.warn("Comment on non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                username=username,
                content=text,
            )
            row = await self.backend.insert(Table.COMMENTS, comment_to_dict(comment))
            saved = row_to_comment(row)
            logfire.info("Comment created", comment_id=str(saved.id), post_id=str(post_id))

            try:
                await self.backend.increment(
                    Table.POSTS, "comment_count", {"id": post_id}, 1
                )
            except DomainError as e:
                logfire.warn(
                    "Comment count increment failed, left for reconciliation",
                    post_id=str(post_id),
                    comment_id=str(saved.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )

            return saved
