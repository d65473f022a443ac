"""Application service: Show Order Item use case (query)."""

from __future__ import annotations

from commerce.application.dto import OrderItemDTO, to_item_dto
from commerce.domain.exceptions import NotFoundError
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin


class ShowOrderItemHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, item_id: int, principal: Principal) -> OrderItemDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_item_id(item_id)
            if order is None:
                raise NotFoundError("Order item not found")
            ensure_owner_or_admin(order, principal)
            return to_item_dto(order.find_item(item_id))
