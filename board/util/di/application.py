"""Application layer DI providers."""

from dishka import Scope, provide

from board.application.usecase.discussion import (
    CreateDiscussionUseCase,
    DeleteDiscussionUseCase,
    GetDiscussionUseCase,
    ListDiscussionsUseCase,
    RecordViewUseCase,
    UpdateDiscussionUseCase,
)
from board.application.usecase.like import ReactUseCase
from board.application.usecase.reply import (
    CreateReplyUseCase,
    DeleteReplyUseCase,
    GetThreadUseCase,
    UpdateReplyUseCase,
)
from board.domain.service import EngagementStore, QueryService
from board.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Discussion use cases
    @provide(scope=Scope.REQUEST)
    def get_create_discussion_use_case(
        self, engagement_store: EngagementStore
    ) -> CreateDiscussionUseCase:
        """Provide create discussion use case."""
        return CreateDiscussionUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_update_discussion_use_case(
        self, engagement_store: EngagementStore
    ) -> UpdateDiscussionUseCase:
        """Provide update discussion use case."""
        return UpdateDiscussionUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_delete_discussion_use_case(
        self, engagement_store: EngagementStore
    ) -> DeleteDiscussionUseCase:
        """Provide delete discussion use case."""
        return DeleteDiscussionUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_record_view_use_case(
        self, engagement_store: EngagementStore
    ) -> RecordViewUseCase:
        """Provide record view use case."""
        return RecordViewUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_get_discussion_use_case(
        self, query_service: QueryService
    ) -> GetDiscussionUseCase:
        """Provide get discussion use case."""
        return GetDiscussionUseCase(query_service=query_service)

    @provide(scope=Scope.REQUEST)
    def get_list_discussions_use_case(
        self, query_service: QueryService
    ) -> ListDiscussionsUseCase:
        """Provide list discussions use case."""
        return ListDiscussionsUseCase(query_service=query_service)

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_create_reply_use_case(
        self, engagement_store: EngagementStore
    ) -> CreateReplyUseCase:
        """Provide create reply use case."""
        return CreateReplyUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_update_reply_use_case(
        self, engagement_store: EngagementStore
    ) -> UpdateReplyUseCase:
        """Provide update reply use case."""
        return UpdateReplyUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_delete_reply_use_case(
        self, engagement_store: EngagementStore
    ) -> DeleteReplyUseCase:
        """Provide delete reply use case."""
        return DeleteReplyUseCase(engagement_store=engagement_store)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(self, query_service: QueryService) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(query_service=query_service)

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_react_use_case(self, engagement_store: EngagementStore) -> ReactUseCase:
        """Provide react use case."""
        return ReactUseCase(engagement_store=engagement_store)
