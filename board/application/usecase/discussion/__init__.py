"""Discussion use cases."""

from .common import DiscussionResponse
from .create_discussion import CreateDiscussionRequest, CreateDiscussionUseCase
from .delete_discussion import DeleteDiscussionRequest, DeleteDiscussionUseCase
from .get_discussion import (
    GetDiscussionRequest,
    GetDiscussionResponse,
    GetDiscussionUseCase,
)
from .list_discussions import (
    ListDiscussionsRequest,
    ListDiscussionsResponse,
    ListDiscussionsUseCase,
)
from .record_view import RecordViewRequest, RecordViewUseCase
from .update_discussion import UpdateDiscussionRequest, UpdateDiscussionUseCase

__all__ = [
    "CreateDiscussionRequest",
    "CreateDiscussionUseCase",
    "DeleteDiscussionRequest",
    "DeleteDiscussionUseCase",
    "DiscussionResponse",
    "GetDiscussionRequest",
    "GetDiscussionResponse",
    "GetDiscussionUseCase",
    "ListDiscussionsRequest",
    "ListDiscussionsResponse",
    "ListDiscussionsUseCase",
    "RecordViewRequest",
    "RecordViewUseCase",
    "UpdateDiscussionRequest",
    "UpdateDiscussionUseCase",
]
