"""Logfire-backed change notifier."""

from typing import Sequence

import logfire

from board.domain.service.notifier import ChangeEvent, ChangeNotifier


class LogfireChangeNotifier(ChangeNotifier):
    """Emits each committed row change as a structured logfire event.

    Downstream consumers (realtime fan-out, cache invalidation) subscribe to
    the telemetry stream; the service itself keeps no subscriber state.
    """

    async def publish(self, events: Sequence[ChangeEvent]) -> None:
        for event in events:
            logfire.info(
                "Row changed: {table} {operation}",
                table=event.table,
                operation=event.operation.value,
                row_id=event.row_id,
                discussion_id=event.discussion_id,
            )
