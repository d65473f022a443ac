"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.infrastructure.config import Settings
from commerce.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
)
from commerce.infrastructure.persistence.sqlalchemy_repositories import (
    SqlAlchemyUserRepository,
)
from commerce.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    url = settings().database_url
    if url.startswith("sqlite:///") and not url.endswith(":memory:"):
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
    return build_engine(url)


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    return build_session_factory(engine())


def unit_of_work_factory(
    factory: sessionmaker[Session] | None = None,
    timeout_seconds: float | None = None,
) -> UnitOfWorkFactory:
    factory = factory or session_factory()
    timeout = timeout_seconds if timeout_seconds is not None else settings().tx_timeout_seconds
    return lambda: SqlAlchemyUnitOfWork(factory, timeout_seconds=timeout)


def user_existence_check(factory: sessionmaker[Session] | None = None):
    """Single-id user lookup with its own short-lived session.

    Safe to call from worker threads: nothing is shared but the pool.
    """
    factory = factory or session_factory()

    def user_exists(user_id: int) -> bool:
        with factory() as session:
            return SqlAlchemyUserRepository(session).exists(user_id)

    return user_exists
