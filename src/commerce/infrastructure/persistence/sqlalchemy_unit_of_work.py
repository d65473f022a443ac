"""SQLAlchemy unit of work: one session, one database transaction.

Every database error raised inside the ``with`` block, at flush or at
commit, is rolled back and re-raised as ``TransactionError`` so callers
never see driver exceptions. A transaction that outlives its time budget
is rolled back and reported as ``TransactionTimeoutError``.
"""

from __future__ import annotations

import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from commerce.domain.exceptions import TransactionError, TransactionTimeoutError
from commerce.domain.repository.unit_of_work import UnitOfWork
from commerce.infrastructure.persistence.sqlalchemy_repositories import (
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyUserRepository,
)

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        timeout_seconds: float | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._timeout = timeout_seconds
        self._deadline: float | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        if self._timeout is not None:
            self._deadline = time.monotonic() + self._timeout
            self._apply_statement_timeout()

        self.orders = SqlAlchemyOrderRepository(self._session)
        self.products = SqlAlchemyProductRepository(self._session)
        self.users = SqlAlchemyUserRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
        if isinstance(exc, SQLAlchemyError):
            raise self._translate(exc) from exc

    def commit(self) -> None:
        if self._expired():
            self.rollback()
            raise TransactionTimeoutError(
                f"Transaction exceeded {self._timeout}s and was rolled back"
            )
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise self._translate(exc) from exc

    def rollback(self) -> None:
        self._session.rollback()

    # --- Internal helpers -----------------------------------------------------

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() > self._deadline

    def _translate(self, exc: SQLAlchemyError) -> TransactionError:
        if isinstance(exc, OperationalError) and self._expired():
            logger.error("Transaction timed out after %ss: %s", self._timeout, exc)
            return TransactionTimeoutError(
                f"Transaction exceeded {self._timeout}s and was rolled back"
            )
        logger.error("Transaction rolled back after database error: %s", exc, exc_info=exc)
        return TransactionError("Could not complete the database transaction")

    def _apply_statement_timeout(self) -> None:
        # Only PostgreSQL can enforce the budget server-side; elsewhere the
        # deadline is checked at commit.
        if self._session.get_bind().dialect.name == "postgresql":
            millis = int(self._timeout * 1000)  # type: ignore[operator]
            self._session.execute(text(f"SET LOCAL statement_timeout = {millis}"))
