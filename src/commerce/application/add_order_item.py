"""Application service: Add Order Item use case.

Appends a line to an existing pending order. The product reference is
checked exactly as it is when the order is first created.
"""

from __future__ import annotations

import logging

from commerce.application.dto import OrderItemDTO, OrderItemSpec, to_item_dto
from commerce.domain.exceptions import InvalidReferenceError, NotFoundError, ValidationError
from commerce.domain.model.order import OrderItem
from commerce.domain.model.value_objects import Principal, Quantity
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin
from commerce.domain.service.referential_validator import validate_references

logger = logging.getLogger(__name__)


class AddOrderItemHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        order_id: int | None,
        spec: OrderItemSpec,
        principal: Principal,
    ) -> OrderItemDTO:
        if order_id is None or spec.product_id is None or spec.quantity is None:
            raise ValidationError("All fields are required")
        item = OrderItem(id=None, product_id=spec.product_id, quantity=Quantity.of(spec.quantity))

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            ensure_owner_or_admin(order, principal)

            check = validate_references([item.product_id], uow.products.existing_ids)
            if not check.ok:
                raise InvalidReferenceError("product", check.invalid)

            order.add_item(item)
            uow.orders.save(order)
            uow.commit()

        logger.info("Item #%s added to order #%s", item.id, order_id)
        return to_item_dto(item)
