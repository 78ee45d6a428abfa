"""Engagement store domain service.

All writes to discussions, replies and likes go through here. Each public
operation is one transaction: the fact row change plus its counter and
hierarchy side effects commit together or not at all. Change events are
published only after the commit.
"""

from typing import List, Optional, Tuple
from uuid import UUID, uuid4

import logfire

from board.domain.error import (
    AlreadyExistsError,
    ContentDeletedError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from board.domain.model import Discussion, Like, Reply
from board.domain.model import discussion as discussion_model
from board.domain.model import reply as reply_model
from board.domain.model.common import utcnow
from board.domain.repository import UnitOfWork, UnitOfWorkFactory
from board.domain.value import (
    Actor,
    ActorId,
    ContentStatus,
    DiscussionId,
    LikeId,
    LikeState,
    LikeTargetType,
    ReactionType,
    ReplyId,
)

from .base import Service
from .counter_service import CounterService
from .hierarchy_service import HierarchyService
from .notifier import (
    DISCUSSION_LIKES,
    DISCUSSION_REPLIES,
    DISCUSSIONS,
    REPLY_LIKES,
    ChangeEvent,
    ChangeNotifier,
    ChangeOperation,
)
from .transaction import TransactionRunner

Events = List[ChangeEvent]


def validate_text(field: str, value: str, min_length: int, max_length: int) -> str:
    """Check a user-supplied string against its length bounds.

    Whitespace-only strings count as empty.

    Raises:
        ValidationError: If the string is blank or out of bounds
    """
    if not value.strip():
        raise ValidationError(f"{field} must not be empty")
    if len(value) < min_length or len(value) > max_length:
        raise ValidationError(
            f"{field} must be {min_length}-{max_length} characters, got {len(value)}"
        )
    return value


def _event(
    table: str, operation: ChangeOperation, row_id: UUID, discussion_id: UUID
) -> ChangeEvent:
    return ChangeEvent(
        table=table,
        operation=operation,
        row_id=str(row_id),
        discussion_id=str(discussion_id),
    )


def _like_table(target_type: LikeTargetType) -> str:
    if target_type == LikeTargetType.DISCUSSION:
        return DISCUSSION_LIKES
    return REPLY_LIKES


class EngagementStore(Service):
    """Domain service for every engagement write.

    Authorization is explicit: edits and deletes compare the acting
    actor_id against the row's author_id.
    """

    def __init__(
        self,
        runner: TransactionRunner,
        counter_service: CounterService,
        hierarchy_service: HierarchyService,
        notifier: ChangeNotifier,
        uow_factory: UnitOfWorkFactory,
    ) -> None:
        """Initialize engagement store.

        Args:
            runner: Transaction runner (one unit of work per attempt)
            counter_service: Counter maintenance service
            hierarchy_service: Reply hierarchy service
            notifier: Sink for committed change events
            uow_factory: Unit of work factory for best-effort writes
        """
        self.runner = runner
        self.counter_service = counter_service
        self.hierarchy_service = hierarchy_service
        self.notifier = notifier
        self.uow_factory = uow_factory

    async def _publish(self, events: Events) -> None:
        if not events:
            return
        try:
            await self.notifier.publish(events)
        except Exception as e:
            # The transaction is already committed; failing the caller would
            # invite a duplicate write.
            logfire.error(
                "Change notification failed", error=str(e), events=len(events)
            )

    # ------------------------------------------------------------------
    # Discussions
    # ------------------------------------------------------------------

    async def create_discussion(
        self, actor: Actor, title: str, content: str
    ) -> Discussion:
        """Create a discussion.

        Args:
            actor: Authenticated author
            title: Discussion title (3-200 chars)
            content: Discussion body (10-10000 chars)

        Returns:
            Created discussion

        Raises:
            ValidationError: If title or content violate length constraints
        """
        with logfire.span(
            "engagement_store.create_discussion", author_id=str(actor.actor_id)
        ):
            validate_text(
                "title",
                title,
                discussion_model.TITLE_MIN_LENGTH,
                discussion_model.TITLE_MAX_LENGTH,
            )
            validate_text(
                "content",
                content,
                discussion_model.CONTENT_MIN_LENGTH,
                discussion_model.CONTENT_MAX_LENGTH,
            )

            async def operation(uow: UnitOfWork) -> Tuple[Discussion, Events]:
                now = utcnow()
                discussion = Discussion(
                    id=DiscussionId(uuid4()),
                    title=title,
                    content=content,
                    author_id=actor.actor_id,
                    author_name=actor.display_name,
                    created_at=now,
                    updated_at=now,
                    last_activity_at=now,
                )
                saved = await uow.discussions.save(discussion)
                return saved, [
                    _event(DISCUSSIONS, ChangeOperation.INSERT, saved.id, saved.id)
                ]

            discussion, events = await self.runner.run("create_discussion", operation)
            await self._publish(events)
            logfire.info(
                "Discussion created",
                discussion_id=str(discussion.id),
                author_id=str(actor.actor_id),
            )
            return discussion

    async def update_discussion(
        self,
        actor: Actor,
        discussion_id: DiscussionId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Discussion:
        """Edit the title and/or content of a discussion.

        Raises:
            ValidationError: If nothing to update or a field is out of bounds
            NotFoundError: If the discussion doesn't exist
            ForbiddenError: If the actor is not the author
            ContentDeletedError: If the discussion was deleted
        """
        with logfire.span(
            "engagement_store.update_discussion",
            discussion_id=str(discussion_id),
            actor_id=str(actor.actor_id),
        ):
            if title is None and content is None:
                raise ValidationError("Nothing to update")
            if title is not None:
                validate_text(
                    "title",
                    title,
                    discussion_model.TITLE_MIN_LENGTH,
                    discussion_model.TITLE_MAX_LENGTH,
                )
            if content is not None:
                validate_text(
                    "content",
                    content,
                    discussion_model.CONTENT_MIN_LENGTH,
                    discussion_model.CONTENT_MAX_LENGTH,
                )

            async def operation(uow: UnitOfWork) -> Tuple[Discussion, Events]:
                discussion = await self._load_own_discussion(
                    uow, actor.actor_id, discussion_id
                )
                if discussion.status == ContentStatus.DELETED:
                    raise ContentDeletedError("Discussion", str(discussion_id))

                updated = await uow.discussions.update_content(
                    discussion_id,
                    title=title if title is not None else discussion.title,
                    content=content if content is not None else discussion.content,
                    updated_at=utcnow(),
                )
                if updated is None:
                    raise NotFoundError("Discussion", str(discussion_id))
                return updated, [
                    _event(DISCUSSIONS, ChangeOperation.UPDATE, updated.id, updated.id)
                ]

            discussion, events = await self.runner.run("update_discussion", operation)
            await self._publish(events)
            logfire.info("Discussion updated", discussion_id=str(discussion_id))
            return discussion

    async def delete_discussion(
        self, actor: Actor, discussion_id: DiscussionId
    ) -> Discussion:
        """Soft delete a discussion by setting its status to deleted.

        Replies and likes are kept. Deleting an already deleted discussion
        is a no-op.

        Raises:
            NotFoundError: If the discussion doesn't exist
            ForbiddenError: If the actor is not the author
        """
        with logfire.span(
            "engagement_store.delete_discussion",
            discussion_id=str(discussion_id),
            actor_id=str(actor.actor_id),
        ):

            async def operation(uow: UnitOfWork) -> Tuple[Discussion, Events]:
                discussion = await self._load_own_discussion(
                    uow, actor.actor_id, discussion_id
                )
                if discussion.status == ContentStatus.DELETED:
                    return discussion, []

                updated = await uow.discussions.update_status(
                    discussion_id, ContentStatus.DELETED, utcnow()
                )
                if updated is None:
                    raise NotFoundError("Discussion", str(discussion_id))
                return updated, [
                    _event(DISCUSSIONS, ChangeOperation.UPDATE, updated.id, updated.id)
                ]

            discussion, events = await self.runner.run("delete_discussion", operation)
            await self._publish(events)
            logfire.info("Discussion deleted", discussion_id=str(discussion_id))
            return discussion

    async def record_view(self, discussion_id: DiscussionId) -> None:
        """Increment the view counter of a discussion.

        Best-effort: a single atomic update without retry. Failures are
        logged and dropped because views are an approximate metric.

        Args:
            discussion_id: Discussion ID
        """
        with logfire.span(
            "engagement_store.record_view", discussion_id=str(discussion_id)
        ):
            try:
                async with self.uow_factory() as uow:
                    updated = await uow.discussions.increment_views_count(
                        discussion_id
                    )
            except DomainError as e:
                logfire.warn(
                    "View not recorded",
                    discussion_id=str(discussion_id),
                    error=str(e),
                )
                return

            if not updated:
                logfire.warn(
                    "View on non-existent discussion", discussion_id=str(discussion_id)
                )

    async def _load_own_discussion(
        self, uow: UnitOfWork, actor_id: ActorId, discussion_id: DiscussionId
    ) -> Discussion:
        discussion = await uow.discussions.find_by_id(discussion_id)
        if discussion is None:
            raise NotFoundError("Discussion", str(discussion_id))
        if discussion.author_id != actor_id:
            logfire.warn(
                "Unauthorized discussion modification attempt",
                discussion_id=str(discussion_id),
                actor_id=str(actor_id),
                author_id=str(discussion.author_id),
            )
            raise ForbiddenError("Discussion", str(discussion_id), str(actor_id))
        return discussion

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    async def create_reply(
        self,
        actor: Actor,
        discussion_id: DiscussionId,
        content: str,
        parent_reply_id: Optional[ReplyId] = None,
    ) -> Reply:
        """Create a reply on a discussion or nested under another reply.

        Args:
            actor: Authenticated author
            discussion_id: Discussion to reply to (active or flagged)
            content: Reply body (1-5000 chars)
            parent_reply_id: Parent reply for nested replies

        Returns:
            Created reply with reply_level and reply_path assigned

        Raises:
            ValidationError: If content violates length constraints
            NotFoundError: If the discussion or parent is missing, or the
                parent belongs to another discussion
            DepthExceededError: If the reply would nest too deep
        """
        with logfire.span(
            "engagement_store.create_reply",
            discussion_id=str(discussion_id),
            author_id=str(actor.actor_id),
            parent_reply_id=str(parent_reply_id) if parent_reply_id else None,
        ):
            validate_text(
                "content",
                content,
                reply_model.CONTENT_MIN_LENGTH,
                reply_model.CONTENT_MAX_LENGTH,
            )

            async def operation(uow: UnitOfWork) -> Tuple[Reply, Events]:
                discussion = await uow.discussions.find_by_id(discussion_id)
                if discussion is None or not discussion.is_visible:
                    logfire.warn(
                        "Reply on unavailable discussion",
                        discussion_id=str(discussion_id),
                    )
                    raise NotFoundError("Discussion", str(discussion_id))

                parent = await self.hierarchy_service.resolve_parent(
                    uow, discussion_id, parent_reply_id
                )
                level, path = await self.hierarchy_service.place(
                    uow, discussion_id, parent
                )

                now = utcnow()
                reply = Reply(
                    id=ReplyId(uuid4()),
                    discussion_id=discussion_id,
                    parent_reply_id=parent.id if parent else None,
                    content=content,
                    author_id=actor.actor_id,
                    author_name=actor.display_name,
                    reply_level=level,
                    reply_path=path,
                    created_at=now,
                    updated_at=now,
                )
                saved = await uow.replies.save(reply)
                await self.counter_service.reply_inserted(uow, saved, now)

                events = [
                    _event(
                        DISCUSSION_REPLIES,
                        ChangeOperation.INSERT,
                        saved.id,
                        discussion_id,
                    ),
                    _event(
                        DISCUSSIONS, ChangeOperation.UPDATE, discussion_id, discussion_id
                    ),
                ]
                return saved, events

            reply, events = await self.runner.run("create_reply", operation)
            await self._publish(events)
            logfire.info(
                "Reply created",
                reply_id=str(reply.id),
                discussion_id=str(discussion_id),
                reply_level=reply.reply_level,
            )
            return reply

    async def update_reply(
        self, actor: Actor, reply_id: ReplyId, content: str
    ) -> Reply:
        """Edit the content of a reply and mark it as edited.

        Raises:
            ValidationError: If content violates length constraints
            NotFoundError: If the reply doesn't exist
            ForbiddenError: If the actor is not the author
            ContentDeletedError: If the reply was deleted by moderation
        """
        with logfire.span(
            "engagement_store.update_reply",
            reply_id=str(reply_id),
            actor_id=str(actor.actor_id),
        ):
            validate_text(
                "content",
                content,
                reply_model.CONTENT_MIN_LENGTH,
                reply_model.CONTENT_MAX_LENGTH,
            )

            async def operation(uow: UnitOfWork) -> Tuple[Reply, Events]:
                reply = await self._load_own_reply(uow, actor.actor_id, reply_id)
                if reply.status == ContentStatus.DELETED:
                    raise ContentDeletedError("Reply", str(reply_id))

                updated = await uow.replies.update_content(reply_id, content, utcnow())
                if updated is None:
                    raise NotFoundError("Reply", str(reply_id))
                return updated, [
                    _event(
                        DISCUSSION_REPLIES,
                        ChangeOperation.UPDATE,
                        updated.id,
                        updated.discussion_id,
                    )
                ]

            reply, events = await self.runner.run("update_reply", operation)
            await self._publish(events)
            logfire.info("Reply updated", reply_id=str(reply_id))
            return reply

    async def delete_reply(self, actor: Actor, reply_id: ReplyId) -> int:
        """Hard delete a reply together with its descendants and their likes.

        Counters are decremented once per removed reply.

        Returns:
            Number of replies removed

        Raises:
            NotFoundError: If the reply doesn't exist
            ForbiddenError: If the actor is not the author
        """
        with logfire.span(
            "engagement_store.delete_reply",
            reply_id=str(reply_id),
            actor_id=str(actor.actor_id),
        ):

            async def operation(uow: UnitOfWork) -> Tuple[int, Events]:
                reply = await self._load_own_reply(uow, actor.actor_id, reply_id)
                subtree = await uow.replies.find_subtree(
                    reply.discussion_id, reply.reply_path
                )
                reply_ids = [r.id for r in subtree]

                removed_likes = await uow.likes.delete_by_targets(
                    LikeTargetType.REPLY, reply_ids
                )
                for removed in subtree:
                    await self.counter_service.reply_deleted(uow, removed)
                deleted = await uow.replies.delete_many(reply_ids)

                logfire.info(
                    "Reply subtree removed",
                    reply_id=str(reply_id),
                    replies=deleted,
                    likes=removed_likes,
                )
                events = [
                    _event(
                        DISCUSSION_REPLIES,
                        ChangeOperation.DELETE,
                        r.id,
                        r.discussion_id,
                    )
                    for r in subtree
                ]
                events.append(
                    _event(
                        DISCUSSIONS,
                        ChangeOperation.UPDATE,
                        reply.discussion_id,
                        reply.discussion_id,
                    )
                )
                return deleted, events

            deleted, events = await self.runner.run("delete_reply", operation)
            await self._publish(events)
            return deleted

    async def _load_own_reply(
        self, uow: UnitOfWork, actor_id: ActorId, reply_id: ReplyId
    ) -> Reply:
        reply = await uow.replies.find_by_id(reply_id)
        if reply is None:
            raise NotFoundError("Reply", str(reply_id))
        if reply.author_id != actor_id:
            logfire.warn(
                "Unauthorized reply modification attempt",
                reply_id=str(reply_id),
                actor_id=str(actor_id),
                author_id=str(reply.author_id),
            )
            raise ForbiddenError("Reply", str(reply_id), str(actor_id))
        return reply

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def set_like(
        self,
        actor: Actor,
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType = ReactionType.LIKE,
    ) -> LikeState:
        """Leave a reaction on a discussion or reply.

        Idempotent: repeating it leaves state and counters unchanged.

        Raises:
            NotFoundError: If the target doesn't exist or is not visible
        """
        with logfire.span(
            "engagement_store.set_like",
            target_type=target_type.value,
            target_id=str(target_id),
            actor_id=str(actor.actor_id),
            reaction=reaction.value,
        ):

            async def operation(uow: UnitOfWork) -> Tuple[LikeState, Events]:
                current, discussion_id = await self._load_like_target(
                    uow, target_type, target_id
                )
                return await self._insert_like(
                    uow, actor, target_type, target_id, reaction, current, discussion_id
                )

            state, events = await self.runner.run("set_like", operation)
            await self._publish(events)
            return state

    async def clear_like(
        self,
        actor: Actor,
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType = ReactionType.LIKE,
    ) -> LikeState:
        """Retract a reaction from a discussion or reply.

        Idempotent: retracting a reaction that isn't there is a no-op.

        Raises:
            NotFoundError: If the target doesn't exist or is not visible
        """
        with logfire.span(
            "engagement_store.clear_like",
            target_type=target_type.value,
            target_id=str(target_id),
            actor_id=str(actor.actor_id),
            reaction=reaction.value,
        ):

            async def operation(uow: UnitOfWork) -> Tuple[LikeState, Events]:
                current, discussion_id = await self._load_like_target(
                    uow, target_type, target_id
                )
                return await self._delete_like(
                    uow, actor, target_type, target_id, reaction, current, discussion_id
                )

            state, events = await self.runner.run("clear_like", operation)
            await self._publish(events)
            return state

    async def toggle_like(
        self,
        actor: Actor,
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType = ReactionType.LIKE,
    ) -> LikeState:
        """Leave the reaction if absent, retract it if present.

        Raises:
            NotFoundError: If the target doesn't exist or is not visible
        """
        with logfire.span(
            "engagement_store.toggle_like",
            target_type=target_type.value,
            target_id=str(target_id),
            actor_id=str(actor.actor_id),
            reaction=reaction.value,
        ):

            async def operation(uow: UnitOfWork) -> Tuple[LikeState, Events]:
                current, discussion_id = await self._load_like_target(
                    uow, target_type, target_id
                )
                existing = await uow.likes.find(
                    target_type, target_id, actor.actor_id, reaction
                )
                if existing is None:
                    return await self._insert_like(
                        uow,
                        actor,
                        target_type,
                        target_id,
                        reaction,
                        current,
                        discussion_id,
                    )
                return await self._delete_like(
                    uow, actor, target_type, target_id, reaction, current, discussion_id
                )

            state, events = await self.runner.run("toggle_like", operation)
            await self._publish(events)
            return state

    async def _load_like_target(
        self, uow: UnitOfWork, target_type: LikeTargetType, target_id: UUID
    ) -> Tuple[int, DiscussionId]:
        """Check a like target is visible.

        Returns:
            Tuple of (current likes_count, owning discussion ID)
        """
        if target_type == LikeTargetType.DISCUSSION:
            discussion = await uow.discussions.find_by_id(DiscussionId(target_id))
            if discussion is None or not discussion.is_visible:
                raise NotFoundError("Discussion", str(target_id))
            return discussion.likes_count, discussion.id

        reply = await uow.replies.find_by_id(ReplyId(target_id))
        if reply is None or not reply.status.is_visible:
            raise NotFoundError("Reply", str(target_id))
        return reply.likes_count, reply.discussion_id

    async def _insert_like(
        self,
        uow: UnitOfWork,
        actor: Actor,
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType,
        current_count: int,
        discussion_id: DiscussionId,
    ) -> Tuple[LikeState, Events]:
        like = Like(
            id=LikeId(uuid4()),
            target_type=target_type,
            target_id=target_id,
            actor_id=actor.actor_id,
            reaction=reaction,
            created_at=utcnow(),
        )
        try:
            saved = await uow.likes.save(like)
        except AlreadyExistsError:
            logfire.info(
                "Like already present",
                target_type=target_type.value,
                target_id=str(target_id),
                actor_id=str(actor.actor_id),
            )
            return self._state(target_type, target_id, reaction, True, current_count), []

        count = await self.counter_service.like_inserted(uow, saved)
        logfire.info(
            "Like added",
            target_type=target_type.value,
            target_id=str(target_id),
            actor_id=str(actor.actor_id),
            likes_count=count,
        )
        events = [
            _event(
                _like_table(target_type), ChangeOperation.INSERT, saved.id, discussion_id
            )
        ]
        return self._state(target_type, target_id, reaction, True, count), events

    async def _delete_like(
        self,
        uow: UnitOfWork,
        actor: Actor,
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType,
        current_count: int,
        discussion_id: DiscussionId,
    ) -> Tuple[LikeState, Events]:
        deleted = await uow.likes.delete(target_type, target_id, actor.actor_id, reaction)
        if not deleted:
            return (
                self._state(target_type, target_id, reaction, False, current_count),
                [],
            )

        count = await self.counter_service.like_deleted(uow, target_type, target_id)
        logfire.info(
            "Like removed",
            target_type=target_type.value,
            target_id=str(target_id),
            actor_id=str(actor.actor_id),
            likes_count=count,
        )
        events = [
            _event(
                _like_table(target_type), ChangeOperation.DELETE, target_id, discussion_id
            )
        ]
        return self._state(target_type, target_id, reaction, False, count), events

    @staticmethod
    def _state(
        target_type: LikeTargetType,
        target_id: UUID,
        reaction: ReactionType,
        liked: bool,
        likes_count: int,
    ) -> LikeState:
        return LikeState(
            target_type=target_type,
            target_id=target_id,
            reaction=reaction,
            liked=liked,
            likes_count=likes_count,
        )
