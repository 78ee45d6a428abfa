"""Domain services."""

from .base import Service
from .counter_service import CounterService
from .engagement_service import EngagementStore
from .hierarchy_service import HierarchyService
from .notifier import ChangeEvent, ChangeNotifier, ChangeOperation
from .query_service import DiscussionPage, DiscussionView, QueryService, ThreadEntry
from .transaction import RetryPolicy, TransactionRunner

__all__ = [
    "ChangeEvent",
    "ChangeNotifier",
    "ChangeOperation",
    "CounterService",
    "DiscussionPage",
    "DiscussionView",
    "EngagementStore",
    "HierarchyService",
    "QueryService",
    "RetryPolicy",
    "Service",
    "ThreadEntry",
    "TransactionRunner",
]
