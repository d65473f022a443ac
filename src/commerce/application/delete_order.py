"""Application service: Delete Order use case.

Hard delete; the order's items go with it.
"""

from __future__ import annotations

import logging

from commerce.domain.exceptions import NotFoundError
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int, principal: Principal) -> None:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError("Order not found")
            ensure_owner_or_admin(order, principal)

            uow.orders.delete(order)
            uow.commit()

        logger.info("Order #%s deleted by user %s", order_id, principal.id)
