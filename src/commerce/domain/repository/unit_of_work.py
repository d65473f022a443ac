"""Abstract unit of work.

A unit of work is the transaction boundary: everything staged through its
repositories becomes visible together on ``commit()``, or not at all.
Leaving the ``with`` block without committing rolls back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from commerce.domain.repository.order_repository import OrderRepository
from commerce.domain.repository.product_repository import ProductRepository
from commerce.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):
    orders: OrderRepository
    products: ProductRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, *exc_info) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every staged write durable. Raises TransactionError."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every staged write. Safe to call after commit."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
