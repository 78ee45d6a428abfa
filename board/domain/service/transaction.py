"""Transaction runner with bounded retry."""

from typing import Awaitable, Callable, TypeVar

import logfire
from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from board.domain.error import RetryableError
from board.domain.repository import UnitOfWork, UnitOfWorkFactory

T = TypeVar("T")


class RetryPolicy(BaseModel):
    """How often and how patiently a failed transaction is retried."""

    attempts: int = Field(default=3, ge=1)
    backoff_base: float = Field(default=0.05, ge=0)
    backoff_max: float = Field(default=1.0, ge=0)


class TransactionRunner:
    """Runs an operation inside a unit of work, retrying transient failures.

    Each attempt gets a fresh unit of work, so nothing from a failed attempt
    leaks into the next. Only RetryableError subclasses (serialization
    conflicts, store outages) are retried; every other error is raised on
    the first occurrence.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, policy: RetryPolicy) -> None:
        """Initialize transaction runner.

        Args:
            uow_factory: Creates one unit of work per attempt
            policy: Retry policy
        """
        self.uow_factory = uow_factory
        self.policy = policy

    async def run(
        self, name: str, operation: Callable[[UnitOfWork], Awaitable[T]]
    ) -> T:
        """Run ``operation`` in a transaction and return its result.

        Args:
            name: Operation name used in logs
            operation: Coroutine function receiving the open unit of work

        Returns:
            Whatever ``operation`` returned in the attempt that committed

        Raises:
            RetryableError: If every attempt failed transiently
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.policy.attempts),
            wait=wait_exponential(
                multiplier=self.policy.backoff_base, max=self.policy.backoff_max
            ),
            retry=retry_if_exception_type(RetryableError),
            before_sleep=self._log_retry(name),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                async with self.uow_factory() as uow:
                    result = await operation(uow)
        return result

    @staticmethod
    def _log_retry(name: str) -> Callable[[RetryCallState], None]:
        def log(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            logfire.warn(
                "Retrying transaction",
                operation=name,
                attempt=retry_state.attempt_number,
                error=repr(outcome.exception()) if outcome else None,
            )

        return log
