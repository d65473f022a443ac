"""Application service: Update Order Status use case."""

from __future__ import annotations

import logging

from commerce.application.dto import OrderDTO, to_order_dto
from commerce.domain.exceptions import NotFoundError
from commerce.domain.model.order import OrderStatus
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.status_transition_service import change_status

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int, raw_status: object, principal: Principal) -> OrderDTO:
        # The token is validated before the lookup so a malformed request
        # never reaches the store.
        target = OrderStatus.parse(raw_status)

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")

            previous = order.status
            change_status(order, principal, target)
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order #%s moved %s -> %s by user %s",
            order_id,
            previous.value,
            target.value,
            principal.id,
        )
        return to_order_dto(order)
