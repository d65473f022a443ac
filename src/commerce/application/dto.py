"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from commerce.domain.model.order import Order, OrderItem


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (product id + quantity)."""

    product_id: int
    quantity: int | str


@dataclass(frozen=True)
class OrderGroup:
    """Input: one candidate order assembled by bulk ingestion."""

    user_id: int
    total_amount: str | Decimal | None
    items: tuple[OrderItemSpec, ...]


@dataclass(frozen=True)
class OrderItemDTO:
    id: int
    order_id: int
    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: int
    total_amount: str  # fixed two decimals, e.g. "40.00"
    status: str
    items: list[OrderItemDTO]
    created_at: str  # ISO-8601
    updated_at: str


@dataclass(frozen=True)
class SkipRecord:
    """A row or group that ingestion left out, and why."""

    source: str  # e.g. "userId=7" or "line 12"
    reason: str
    invalid_ids: tuple[int, ...] = ()


@dataclass
class IngestionReport:
    migrated: int = 0
    created_ids: list[int] = field(default_factory=list)
    skipped: list[SkipRecord] = field(default_factory=list)


# --- Mapping ------------------------------------------------------------------


def to_item_dto(item: OrderItem) -> OrderItemDTO:
    return OrderItemDTO(
        id=item.id,  # type: ignore[arg-type]
        order_id=item.order_id,  # type: ignore[arg-type]
        product_id=item.product_id,
        quantity=item.quantity.value,
    )


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        total_amount=str(order.total_amount),
        status=order.status.value,
        items=[to_item_dto(item) for item in order.items],
        created_at=order.created_at.isoformat(),
        updated_at=order.updated_at.isoformat(),
    )
