"""SQLAlchemy-backed repository implementations.

Repositories never commit; they stage and flush through the session owned
by the unit of work. Flushing on ``add``/``save`` is what hands database
ids back to the domain objects.
"""

from __future__ import annotations

from collections.abc import Set
from datetime import timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from commerce.domain.model.order import Order, OrderItem, OrderStatus
from commerce.domain.model.product import Product
from commerce.domain.model.value_objects import Money, Quantity
from commerce.domain.repository.order_repository import OrderRepository
from commerce.domain.repository.product_repository import ProductRepository
from commerce.domain.repository.user_repository import UserRepository
from commerce.infrastructure.persistence.sqlalchemy_models import (
    OrderItemRow,
    OrderRow,
    ProductRow,
    UserRow,
)


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return None if row is None else self._to_domain(row)

    def get_by_item_id(self, item_id: int) -> Order | None:
        item_row = self._session.get(OrderItemRow, item_id)
        return None if item_row is None else self._to_domain(item_row.order)

    def list_by_user(self, user_id: int) -> list[Order]:
        rows = self._session.scalars(
            select(OrderRow).where(OrderRow.user_id == user_id).order_by(OrderRow.id)
        )
        return [self._to_domain(row) for row in rows]

    def add(self, order: Order) -> None:
        row = OrderRow(
            user_id=order.user_id,
            total_amount=order.total_amount.amount,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[self._item_row(item) for item in order.items],
        )
        self._session.add(row)
        self._session.flush()

        order.id = row.id
        for item, item_row in zip(order.items, row.items):
            item.id = item_row.id
            item.order_id = row.id

    def save(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise LookupError(f"Order #{order.id} is not persisted")

        row.status = order.status.value
        row.total_amount = order.total_amount.amount
        row.updated_at = order.updated_at

        # Sync items: drop removed rows (delete-orphan), update the rest,
        # append new ones.
        by_id = {r.id: r for r in row.items}
        kept = {item.id for item in order.items if item.id is not None}
        for item_row in list(row.items):
            if item_row.id not in kept:
                row.items.remove(item_row)

        added: list[tuple[OrderItem, OrderItemRow]] = []
        for item in order.items:
            if item.id is None:
                item_row = self._item_row(item)
                row.items.append(item_row)
                added.append((item, item_row))
            else:
                by_id[item.id].quantity = item.quantity.value

        self._session.flush()
        for item, item_row in added:
            item.id = item_row.id
            item.order_id = row.id

    def delete(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _item_row(item: OrderItem) -> OrderItemRow:
        return OrderItemRow(product_id=item.product_id, quantity=item.quantity.value)

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            total_amount=Money(row.total_amount),
            status=OrderStatus(row.status),
            items=[
                OrderItem(
                    id=item_row.id,
                    order_id=row.id,
                    product_id=item_row.product_id,
                    quantity=Quantity(item_row.quantity),
                )
                for item_row in row.items
            ],
            created_at=_aware(row.created_at),
            updated_at=_aware(row.updated_at),
        )


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def existing_ids(self, ids: Set[int]) -> set[int]:
        if not ids:
            return set()
        return set(
            self._session.scalars(
                select(ProductRow.id).where(
                    ProductRow.id.in_(list(ids)), ProductRow.is_deleted.is_(False)
                )
            )
        )

    def add_all(self, products: list[Product]) -> None:
        rows = [
            ProductRow(
                name=p.name,
                description=p.description,
                price=p.price.amount,
                stock=p.stock,
                seller_id=p.seller_id,
            )
            for p in products
        ]
        self._session.add_all(rows)
        self._session.flush()
        for product, row in zip(products, rows):
            product.id = row.id


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def existing_ids(self, ids: Set[int]) -> set[int]:
        if not ids:
            return set()
        return set(
            self._session.scalars(
                select(UserRow.id).where(UserRow.id.in_(list(ids)), UserRow.is_deleted.is_(False))
            )
        )


def _aware(value):
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
