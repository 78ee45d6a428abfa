"""Domain layer DI providers."""

from dishka import Scope, provide

from board.config import EngagementSettings
from board.domain.repository import UnitOfWorkFactory
from board.domain.service import (
    ChangeNotifier,
    CounterService,
    EngagementStore,
    HierarchyService,
    QueryService,
    RetryPolicy,
    TransactionRunner,
)
from board.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped. Each service call opens its own unit
    of work, so nothing transactional is shared between requests.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_retry_policy(self, engagement: EngagementSettings) -> RetryPolicy:
        """Provide retry policy for transient store failures."""
        return RetryPolicy(
            attempts=engagement.retry_attempts,
            backoff_base=engagement.retry_backoff_base,
            backoff_max=engagement.retry_backoff_max,
        )

    @provide
    def get_transaction_runner(
        self, uow_factory: UnitOfWorkFactory, policy: RetryPolicy
    ) -> TransactionRunner:
        """Provide transaction runner."""
        return TransactionRunner(uow_factory=uow_factory, policy=policy)

    @provide
    def get_counter_service(self) -> CounterService:
        """Provide counter maintenance service."""
        return CounterService()

    @provide
    def get_hierarchy_service(self, engagement: EngagementSettings) -> HierarchyService:
        """Provide reply hierarchy service."""
        return HierarchyService(max_depth=engagement.max_reply_depth)

    @provide
    def get_engagement_store(
        self,
        runner: TransactionRunner,
        counter_service: CounterService,
        hierarchy_service: HierarchyService,
        notifier: ChangeNotifier,
        uow_factory: UnitOfWorkFactory,
    ) -> EngagementStore:
        """Provide engagement store."""
        return EngagementStore(
            runner=runner,
            counter_service=counter_service,
            hierarchy_service=hierarchy_service,
            notifier=notifier,
            uow_factory=uow_factory,
        )

    @provide
    def get_query_service(
        self, runner: TransactionRunner, engagement: EngagementSettings
    ) -> QueryService:
        """Provide query service."""
        return QueryService(
            runner=runner,
            default_page_size=engagement.default_page_size,
            max_page_size=engagement.max_page_size,
            popular_likes_weight=engagement.popular_likes_weight,
            popular_replies_weight=engagement.popular_replies_weight,
        )
