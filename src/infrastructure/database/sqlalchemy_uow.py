"""SQLAlchemy Unit of Work implementation."""

from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_group_repo import SQLAlchemyGroupRepository
from infrastructure.database.repositories.sqlalchemy_session_repo import SQLAlchemySessionRepository
from infrastructure.database.repositories.sqlalchemy_vote_repo import SQLAlchemyVoteRepository


class SQLAlchemyUnitOfWork:
    """One database transaction shared by the group, session and vote repositories.

    Repositories are bound when the context is entered and become unusable
    once it exits. Leaving the context with an exception rolls back; leaving
    it without calling ``commit`` discards the work as well.
    """

    groups: SQLAlchemyGroupRepository
    sessions: SQLAlchemySessionRepository
    votes: SQLAlchemyVoteRepository

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already in use")
        self._session = self._session_factory()
        self.groups = SQLAlchemyGroupRepository(self._session)
        self.sessions = SQLAlchemySessionRepository(self._session)
        self.votes = SQLAlchemyVoteRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        session, self._session = self._session, None
        if session is None:
            return
        try:
            if exc_type is not None:
                await session.rollback()
        finally:
            await session.close()

    async def commit(self) -> None:
        await self._require_session().commit()

    async def rollback(self) -> None:
        await self._require_session().rollback()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session
