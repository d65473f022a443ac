"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its items. It is created together
with at least one item and its status only ever moves forward out of
``pending``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from commerce.domain.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from commerce.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING

    @staticmethod
    def parse(raw: object) -> OrderStatus:
        """Strictly map a request token to a status.

        Only the canonical lowercase tokens are accepted; the US spelling
        ``canceled`` is rejected rather than silently aliased.
        """
        for status in OrderStatus:
            if raw == status.value:
                return status
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status {raw!r}; expected one of: {allowed}")


@dataclass
class OrderItem:
    id: int | None
    product_id: int
    quantity: Quantity
    order_id: int | None = None

    def change_quantity(self, quantity: Quantity) -> None:
        self.quantity = quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    New orders go through ``Order.create()``, which enforces the creation
    rules. Repositories call ``__init__`` directly to reconstitute persisted
    orders without re-validating them.
    """

    id: int | None
    user_id: int
    total_amount: Money
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: int, total_amount: Money, items: list[OrderItem]) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")
        return Order(id=None, user_id=user_id, total_amount=total_amount, items=list(items))

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus) -> None:
        """Move the order to *target*.

        Terminal states accept no further changes, whoever is asking.
        Who may ask for which target is decided by the status transition
        service before this is called.
        """
        if self.status.is_terminal:
            raise InvalidTransitionError(
                f"Order #{self.id} is already {self.status.value}"
            )
        self.status = target
        self.updated_at = _utcnow()

    # --- Item management ------------------------------------------------------

    def add_item(self, item: OrderItem) -> None:
        self._ensure_items_mutable()
        item.order_id = self.id
        self.items.append(item)
        self.updated_at = _utcnow()

    def change_item_quantity(self, item_id: int, quantity: Quantity) -> OrderItem:
        self._ensure_items_mutable()
        item = self.find_item(item_id)
        item.change_quantity(quantity)
        self.updated_at = _utcnow()
        return item

    def remove_item(self, item_id: int) -> OrderItem:
        self._ensure_items_mutable()
        item = self.find_item(item_id)
        if len(self.items) == 1:
            raise ValidationError(
                f"Cannot remove the last item of order #{self.id}; delete the order instead"
            )
        self.items.remove(item)
        self.updated_at = _utcnow()
        return item

    def find_item(self, item_id: int) -> OrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Order item #{item_id} not found in order #{self.id}")

    # --- Internal helpers -----------------------------------------------------

    def _ensure_items_mutable(self) -> None:
        if self.status.is_terminal:
            raise InvalidTransitionError(
                f"Cannot modify items of order #{self.id} in {self.status.value} status"
            )
