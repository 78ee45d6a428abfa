"""Mock providers for testing."""

from .notifier import MockNotifierProvider, RecordingChangeNotifier
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockNotifierProvider",
    "MockPersistenceProvider",
    "RecordingChangeNotifier",
    "build_test_container",
]
