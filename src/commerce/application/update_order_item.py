"""Application service: Update Order Item use case (quantity only)."""

from __future__ import annotations

from commerce.application.dto import OrderItemDTO, to_item_dto
from commerce.domain.exceptions import NotFoundError, ValidationError
from commerce.domain.model.value_objects import Principal, Quantity
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin


class UpdateOrderItemHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, item_id: int, quantity: int | None, principal: Principal) -> OrderItemDTO:
        if quantity is None:
            raise ValidationError("quantity is required")
        new_quantity = Quantity.of(quantity)

        with self._uow_factory() as uow:
            order = uow.orders.get_by_item_id(item_id)
            if order is None:
                raise NotFoundError("Order item not found")
            ensure_owner_or_admin(order, principal)

            item = order.change_item_quantity(item_id, new_quantity)
            uow.orders.save(order)
            uow.commit()
            return to_item_dto(item)
