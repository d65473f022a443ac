"""Application service: Show Order use case (query)."""

from __future__ import annotations

from commerce.application.dto import OrderDTO, to_order_dto
from commerce.domain.exceptions import NotFoundError
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin


class ShowOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int, principal: Principal) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            ensure_owner_or_admin(order, principal)
            return to_order_dto(order)
