from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork
from src.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
from src.infrastructure.repos.farms_sqlalchemy import FarmsSQLAlchemyRepository
from src.infrastructure.repos.genealogy_sqlalchemy import GenealogySQLAlchemyRepository
from src.infrastructure.repos.health_records_sqlalchemy import HealthRecordsSQLAlchemyRepository
from src.infrastructure.repos.production_records_sqlalchemy import (
    ProductionRecordsSQLAlchemyRepository,
)
from src.infrastructure.repos.users_sqlalchemy import UsersSQLAlchemyRepository


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._reset_repositories()

    def _reset_repositories(self) -> None:
        self.animals = None
        self.health_records = None
        self.production_records = None
        self.genealogy = None
        self.farms = None
        self.users = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.health_records = HealthRecordsSQLAlchemyRepository(self.session)
        self.production_records = ProductionRecordsSQLAlchemyRepository(self.session)
        self.genealogy = GenealogySQLAlchemyRepository(self.session)
        self.farms = FarmsSQLAlchemyRepository(self.session)
        self.users = UsersSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._reset_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
