"""Change notifier infrastructure providers."""

from dishka import Scope, provide

from board.adapter.notifier import LogfireChangeNotifier
from board.domain.service import ChangeNotifier
from board.util.di.base import ProviderBase


class NotifierProvider(ProviderBase):
    """Change notifier component base."""

    __mock_component__ = "notifier"


class ProdNotifierProvider(NotifierProvider):
    """Production notifier emitting change events to logfire."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notifier(self) -> ChangeNotifier:
        """Provide change notifier."""
        return LogfireChangeNotifier()
