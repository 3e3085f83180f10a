"""Comment use cases."""

from .add_comment import AddCommentRequest, AddCommentResponse, AddCommentUseCase
from .get_comments import GetCommentsRequest, GetCommentsResponse, GetCommentsUseCase
from .summary import CommentSummary

__all__ = [
    "AddCommentRequest",
    "AddCommentResponse",
    "AddCommentUseCase",
    "CommentSummary",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
]
