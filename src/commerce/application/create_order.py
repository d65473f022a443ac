"""Application service: Create Order use case.

An order and all of its items are written in one unit of work. Product
references are checked inside that same unit of work, before anything is
staged, so a bad reference leaves no trace.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from commerce.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from commerce.domain.exceptions import InvalidReferenceError, ValidationError
from commerce.domain.model.order import Order, OrderItem
from commerce.domain.model.value_objects import Money, Quantity
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.referential_validator import validate_references

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        user_id: int,
        total_amount: str | float | int | Decimal | None,
        item_specs: Sequence[OrderItemSpec] | None,
    ) -> OrderDTO:
        """Create a pending order for *user_id*.

        Steps:
        1. Reject missing items / totalAmount before touching the store.
        2. Check every product id with one batch lookup.
        3. Stage the order plus its items and commit them together.
        """
        if not item_specs or total_amount is None:
            raise ValidationError("Items and totalAmount are required")
        for position, spec in enumerate(item_specs):
            if spec.product_id is None or spec.quantity is None:
                raise ValidationError(f"items[{position}]: productId and quantity are required")

        total = Money.of(total_amount)
        items = [
            OrderItem(id=None, product_id=spec.product_id, quantity=Quantity.of(spec.quantity))
            for spec in item_specs
        ]

        with self._uow_factory() as uow:
            check = validate_references(
                (item.product_id for item in items), uow.products.existing_ids
            )
            if not check.ok:
                raise InvalidReferenceError("product", check.invalid)

            order = Order.create(user_id=user_id, total_amount=total, items=items)
            uow.orders.add(order)
            uow.commit()

        logger.info(
            "Order #%s created for user %s with %d item(s)", order.id, user_id, len(items)
        )
        return to_order_dto(order)
