"""Like use cases."""

from .like import LikeRequest, LikeResponse, LikeTarget, LikeUseCase

__all__ = [
    "LikeRequest",
    "LikeResponse",
    "LikeTarget",
    "LikeUseCase",
]
