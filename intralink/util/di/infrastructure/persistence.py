"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from intralink.config import Settings
from intralink.domain.repository import (
    CollaborationRequestRepository,
    MentorRepository,
    ProjectRepository,
    UserRepository,
)
from intralink.persistence.database import create_engine, create_session_factory
from intralink.persistence.repository import (
    PostgresCollaborationRequestRepository,
    PostgresMentorRepository,
    PostgresProjectRepository,
    PostgresUserRepository,
)
from intralink.util.di.base import ProviderBase
from intralink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        One HTTP request is one unit of work: the session is committed if
        the request completed, or rolled back if an exception was raised
        (domain errors included, so a failed operation leaves no trace).
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_project_repository(self, session: AsyncSession) -> ProjectRepository:
        """Provide Project repository."""
        return PostgresProjectRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_mentor_repository(self, session: AsyncSession) -> MentorRepository:
        """Provide Mentor repository."""
        return PostgresMentorRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_request_repository(
        self, session: AsyncSession
    ) -> CollaborationRequestRepository:
        """Provide CollaborationRequest repository."""
        return PostgresCollaborationRequestRepository(session)
