"""Read-side domain service."""

from typing import List, Optional

import logfire

from board.domain.error import NotFoundError, ValidationError
from board.domain.model import Discussion, Reply
from board.domain.repository import UnitOfWork
from board.domain.value import (
    ActorId,
    ContentStatus,
    DiscussionId,
    DiscussionSortOrder,
    LikeTargetType,
    ReplyPath,
)
from board.domain.value.common import ValueObject

from .base import Service
from .transaction import TransactionRunner

VISIBLE_STATUSES = (ContentStatus.ACTIVE, ContentStatus.FLAGGED)


def _visible_subtrees(replies: List[Reply]) -> List[Reply]:
    """Drop non-visible replies and everything below them.

    ``replies`` must be in path order, where a subtree directly follows its
    root.
    """
    kept = []
    pruned: Optional[ReplyPath] = None
    for reply in replies:
        if pruned is not None and pruned.is_ancestor_of(reply.reply_path):
            continue
        if not reply.status.is_visible:
            pruned = reply.reply_path
            continue
        kept.append(reply)
    return kept


class DiscussionView(ValueObject):
    """A discussion as seen by a particular viewer."""

    discussion: Discussion
    viewer_has_liked: bool = False


class ThreadEntry(ValueObject):
    """One reply of a thread as seen by a particular viewer."""

    reply: Reply
    viewer_has_liked: bool = False


class DiscussionPage(ValueObject):
    """One page of a discussion listing."""

    items: List[Discussion]
    total: int
    limit: int
    offset: int


class QueryService(Service):
    """Domain service for discussion and thread reads.

    Only active and flagged content is visible. Hidden or deleted
    discussions read as not found.
    """

    def __init__(
        self,
        runner: TransactionRunner,
        default_page_size: int = 20,
        max_page_size: int = 100,
        popular_likes_weight: int = 1,
        popular_replies_weight: int = 2,
    ) -> None:
        """Initialize query service.

        Args:
            runner: Transaction runner for read transactions
            default_page_size: Page size when the caller gives none
            max_page_size: Upper bound on requested page sizes
            popular_likes_weight: Weight of likes in the popular score
            popular_replies_weight: Weight of replies in the popular score
        """
        self.runner = runner
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.popular_likes_weight = popular_likes_weight
        self.popular_replies_weight = popular_replies_weight

    async def get_discussion(
        self, discussion_id: DiscussionId, actor_id: Optional[ActorId] = None
    ) -> DiscussionView:
        """Get a visible discussion with the viewer's like state.

        Args:
            discussion_id: Discussion ID
            actor_id: Viewer (None for anonymous)

        Returns:
            Discussion view

        Raises:
            NotFoundError: If the discussion is missing, hidden or deleted
        """
        with logfire.span(
            "query_service.get_discussion", discussion_id=str(discussion_id)
        ):

            async def operation(uow: UnitOfWork) -> DiscussionView:
                discussion = await self._load_visible(uow, discussion_id)
                liked = False
                if actor_id is not None:
                    liked_ids = await uow.likes.find_liked_target_ids(
                        actor_id, LikeTargetType.DISCUSSION, [discussion.id]
                    )
                    liked = discussion.id in liked_ids
                return DiscussionView(discussion=discussion, viewer_has_liked=liked)

            return await self.runner.run("get_discussion", operation)

    async def get_thread(
        self, discussion_id: DiscussionId, actor_id: Optional[ActorId] = None
    ) -> List[ThreadEntry]:
        """Get every visible reply of a discussion in thread order.

        Entries are sorted by reply_path: each reply is followed by its
        subtree, siblings oldest first. A hidden reply takes its whole
        subtree with it, so every entry's parent precedes it. Like state for the viewer is
        fetched with a single batch query.

        Raises:
            NotFoundError: If the discussion is missing, hidden or deleted
        """
        with logfire.span("query_service.get_thread", discussion_id=str(discussion_id)):

            async def operation(uow: UnitOfWork) -> List[ThreadEntry]:
                await self._load_visible(uow, discussion_id)
                replies = _visible_subtrees(
                    await uow.replies.find_by_discussion(discussion_id)
                )

                liked_ids = set()
                if actor_id is not None and replies:
                    liked_ids = await uow.likes.find_liked_target_ids(
                        actor_id, LikeTargetType.REPLY, [r.id for r in replies]
                    )

                return [
                    ThreadEntry(reply=r, viewer_has_liked=r.id in liked_ids)
                    for r in replies
                ]

            entries = await self.runner.run("get_thread", operation)
            logfire.info(
                "Thread retrieved",
                discussion_id=str(discussion_id),
                count=len(entries),
            )
            return entries

    async def list_discussions(
        self,
        sort: DiscussionSortOrder = DiscussionSortOrder.RECENT,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> DiscussionPage:
        """List visible discussions, pinned first.

        Args:
            sort: recent (last activity), popular (weighted likes and
                replies) or views
            limit: Page size (defaults to default_page_size, capped at
                max_page_size)
            offset: Number of discussions to skip

        Returns:
            Page of discussions with the total count

        Raises:
            ValidationError: If limit or offset is out of range
        """
        page_size = self.default_page_size if limit is None else limit
        if page_size < 1:
            raise ValidationError("limit must be at least 1")
        if offset < 0:
            raise ValidationError("offset must not be negative")
        page_size = min(page_size, self.max_page_size)

        with logfire.span(
            "query_service.list_discussions",
            sort=sort.value,
            limit=page_size,
            offset=offset,
        ):

            async def operation(uow: UnitOfWork) -> DiscussionPage:
                items = await uow.discussions.find_all(
                    statuses=VISIBLE_STATUSES,
                    sort=sort,
                    limit=page_size,
                    offset=offset,
                    likes_weight=self.popular_likes_weight,
                    replies_weight=self.popular_replies_weight,
                )
                total = await uow.discussions.count(VISIBLE_STATUSES)
                return DiscussionPage(
                    items=items, total=total, limit=page_size, offset=offset
                )

            return await self.runner.run("list_discussions", operation)

    async def _load_visible(
        self, uow: UnitOfWork, discussion_id: DiscussionId
    ) -> Discussion:
        discussion = await uow.discussions.find_by_id(discussion_id)
        if discussion is None or not discussion.is_visible:
            logfire.warn("Discussion not found", discussion_id=str(discussion_id))
            raise NotFoundError("Discussion", str(discussion_id))
        return discussion
