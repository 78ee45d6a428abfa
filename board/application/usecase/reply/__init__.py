"""Reply use cases."""

from .common import ReplyResponse
from .create_reply import CreateReplyRequest, CreateReplyUseCase
from .delete_reply import DeleteReplyRequest, DeleteReplyResponse, DeleteReplyUseCase
from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ThreadReplyItem,
)
from .update_reply import UpdateReplyRequest, UpdateReplyUseCase

__all__ = [
    "CreateReplyRequest",
    "CreateReplyUseCase",
    "DeleteReplyRequest",
    "DeleteReplyResponse",
    "DeleteReplyUseCase",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "ReplyResponse",
    "ThreadReplyItem",
    "UpdateReplyRequest",
    "UpdateReplyUseCase",
]
