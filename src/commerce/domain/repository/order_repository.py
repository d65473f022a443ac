"""Abstract repository for the Order aggregate (orders plus their items)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from commerce.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def get_by_item_id(self, item_id: int) -> Order | None:
        """Return the order owning the given item, or None."""

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Order]:
        """Return every order placed by a user, oldest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Stage a new order and its items; assigns ids to both."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Stage changes to an existing order (status, items)."""

    @abstractmethod
    def delete(self, order: Order) -> None:
        """Stage removal of an order together with all of its items."""
