"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .get_feed import FeedFilter, GetFeedRequest, GetFeedResponse, GetFeedUseCase
from .summary import PostSummary

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "FeedFilter",
    "GetFeedRequest",
    "GetFeedResponse",
    "GetFeedUseCase",
    "PostSummary",
]
