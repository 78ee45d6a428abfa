"""Unit tests for backend error translation."""

import asyncio
from contextlib import asynccontextmanager
from uuid import uuid4

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from board.domain.error import (
    AlreadyExistsError,
    ConcurrencyConflictError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from board.domain.model import Like
from board.domain.value import ActorId, LikeId, LikeTargetType
from board.persistence.repository import PostgresLikeRepository, PostgresUnitOfWork
from board.persistence.repository.unit_of_work import translate_error


class FakeDriverError(Exception):
    """Driver exception carrying a SQLSTATE like asyncpg's."""

    def __init__(self, sqlstate: str | None = None) -> None:
        super().__init__(f"driver error {sqlstate}")
        self.sqlstate = sqlstate


class TestTranslateError:
    """Tests for translate_error."""

    @pytest.mark.parametrize("sqlstate", ["40001", "40P01"])
    def test_serialization_failures_become_conflicts(self, sqlstate):
        error = DBAPIError("UPDATE", {}, FakeDriverError(sqlstate))

        assert isinstance(translate_error(error), ConcurrencyConflictError)

    def test_unique_violation_becomes_already_exists(self):
        error = IntegrityError("INSERT", {}, FakeDriverError("23505"))

        assert isinstance(translate_error(error), AlreadyExistsError)

    def test_foreign_key_violation_becomes_not_found(self):
        error = IntegrityError("INSERT", {}, FakeDriverError("23503"))

        assert isinstance(translate_error(error), NotFoundError)

    def test_check_violation_becomes_validation_error(self):
        error = IntegrityError("INSERT", {}, FakeDriverError("23514"))

        translated = translate_error(error)

        assert isinstance(translated, ValidationError)
        assert not isinstance(translated, AlreadyExistsError)

    def test_operational_error_becomes_unavailable(self):
        error = OperationalError("SELECT 1", {}, FakeDriverError())

        assert isinstance(translate_error(error), StoreUnavailableError)

    def test_invalidated_connection_becomes_unavailable(self):
        error = DBAPIError(
            "SELECT 1", {}, FakeDriverError(), connection_invalidated=True
        )

        assert isinstance(translate_error(error), StoreUnavailableError)

    def test_pool_timeout_becomes_unavailable(self):
        error = PoolTimeoutError("QueuePool limit of size 5 overflow 10 reached")

        assert isinstance(translate_error(error), StoreUnavailableError)

    def test_os_error_becomes_unavailable(self):
        assert isinstance(
            translate_error(ConnectionRefusedError()), StoreUnavailableError
        )

    def test_unrelated_errors_are_not_translated(self):
        assert translate_error(ValueError("bad input")) is None
        assert translate_error(DBAPIError("SELECT", {}, FakeDriverError())) is None


class FakeSession:
    """Stands in for AsyncSession at the transaction boundary."""

    def __init__(self, commit_error: Exception | None = None) -> None:
        self.commit_error = commit_error
        self.began = False
        self.committed = False
        self.rolled_back = False
        self.closed = False

    async def begin(self):
        self.began = True

    async def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.committed = True

    async def rollback(self):
        self.rolled_back = True

    async def close(self):
        self.closed = True


class TestPostgresUnitOfWork:
    """Tests for the transaction boundary of PostgresUnitOfWork."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self):
        session = FakeSession()
        uow = PostgresUnitOfWork(lambda: session)

        async with uow:
            pass

        assert session.began and session.committed
        assert not session.rolled_back
        assert session.closed

    @pytest.mark.asyncio
    async def test_rolls_back_and_translates_error_in_body(self):
        session = FakeSession()
        uow = PostgresUnitOfWork(lambda: session)

        with pytest.raises(ConcurrencyConflictError):
            async with uow:
                raise DBAPIError("UPDATE", {}, FakeDriverError("40001"))

        assert session.rolled_back
        assert not session.committed
        assert session.closed

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(self):
        session = FakeSession()
        uow = PostgresUnitOfWork(lambda: session)

        with pytest.raises(asyncio.CancelledError):
            async with uow:
                raise asyncio.CancelledError()

        assert session.rolled_back
        assert not session.committed
        assert session.closed

    @pytest.mark.asyncio
    async def test_commit_failure_is_translated(self):
        session = FakeSession(
            commit_error=OperationalError("COMMIT", {}, FakeDriverError())
        )
        uow = PostgresUnitOfWork(lambda: session)

        with pytest.raises(StoreUnavailableError):
            async with uow:
                pass

        assert session.closed

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self):
        session = FakeSession()
        uow = PostgresUnitOfWork(lambda: session)

        with pytest.raises(AlreadyExistsError):
            async with uow:
                raise AlreadyExistsError("Like", "duplicate")

        assert session.rolled_back


class FailingInsertSession:
    """Session whose statements fail with the given driver error."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.savepoints = 0

    @asynccontextmanager
    async def begin_nested(self):
        self.savepoints += 1
        yield

    async def execute(self, stmt):
        raise self.error


def _reply_like() -> Like:
    return Like(
        id=LikeId(uuid4()),
        target_type=LikeTargetType.REPLY,
        target_id=uuid4(),
        actor_id=ActorId("bob"),
    )


class TestPostgresLikeRepositorySave:
    """Constraint violations raised by the like insert."""

    @pytest.mark.asyncio
    async def test_duplicate_like_raises_already_exists(self):
        session = FailingInsertSession(
            IntegrityError("INSERT", {}, FakeDriverError("23505"))
        )
        repo = PostgresLikeRepository(session)

        with pytest.raises(AlreadyExistsError):
            await repo.save(_reply_like())

        assert session.savepoints == 1

    @pytest.mark.asyncio
    async def test_deleted_target_raises_not_found(self):
        session = FailingInsertSession(
            IntegrityError("INSERT", {}, FakeDriverError("23503"))
        )
        repo = PostgresLikeRepository(session)

        with pytest.raises(NotFoundError):
            await repo.save(_reply_like())

    @pytest.mark.asyncio
    async def test_check_violation_is_not_reported_as_duplicate(self):
        session = FailingInsertSession(
            IntegrityError("INSERT", {}, FakeDriverError("23514"))
        )
        repo = PostgresLikeRepository(session)

        with pytest.raises(ValidationError):
            await repo.save(_reply_like())
