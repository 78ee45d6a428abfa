"""Mock change notifier providers for testing."""

from typing import List, Sequence

from dishka import Scope, provide

from board.domain.service import ChangeEvent, ChangeNotifier
from board.util.di.infrastructure.notifier import NotifierProvider


class RecordingChangeNotifier(ChangeNotifier):
    """Keeps published events in memory for assertions."""

    def __init__(self) -> None:
        self.events: List[ChangeEvent] = []

    async def publish(self, events: Sequence[ChangeEvent]) -> None:
        self.events.extend(events)

    def tables(self) -> List[str]:
        """Table names of every recorded event, in publish order."""
        return [event.table for event in self.events]


class MockNotifierProvider(NotifierProvider):
    """Mock notifier provider recording events instead of emitting them."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_notifier(self) -> ChangeNotifier:
        """Provide recording change notifier."""
        return RecordingChangeNotifier()
