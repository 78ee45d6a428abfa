"""Change notification interface.

Front ends observe committed row changes to refresh their views. The core
only hands events over; the transport belongs to the implementation.
"""

from enum import Enum
from typing import Sequence

from board.domain.value.common import ValueObject


class ChangeOperation(str, Enum):
    """Kind of row change."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class ChangeEvent(ValueObject):
    """A committed change to a single row."""

    table: str
    operation: ChangeOperation
    row_id: str
    discussion_id: str


class ChangeNotifier:
    """Sink for committed change events."""

    async def publish(self, events: Sequence[ChangeEvent]) -> None:
        """Publish events of one committed transaction, in order.

        Args:
            events: Row changes made by the transaction
        """
        raise NotImplementedError


# Relation names carried in ChangeEvent.table
DISCUSSIONS = "discussions"
DISCUSSION_REPLIES = "discussion_replies"
DISCUSSION_LIKES = "discussion_likes"
REPLY_LIKES = "reply_likes"
