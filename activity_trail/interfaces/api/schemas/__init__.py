from .activity import (
    ActivityFeedRead,
    ActivityMutationResponse,
    ActivityRead,
    CommentCreate,
    CommentUpdate,
)

__all__ = [
    "ActivityFeedRead",
    "ActivityMutationResponse",
    "ActivityRead",
    "CommentCreate",
    "CommentUpdate",
]
