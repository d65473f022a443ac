"""Application service: Remove Order Item use case."""

from __future__ import annotations

import logging

from commerce.domain.exceptions import NotFoundError
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.domain.service.order_access import ensure_owner_or_admin

logger = logging.getLogger(__name__)


class RemoveOrderItemHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, item_id: int, principal: Principal) -> None:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_item_id(item_id)
            if order is None:
                raise NotFoundError("Order item not found")
            ensure_owner_or_admin(order, principal)

            order.remove_item(item_id)
            uow.orders.save(order)
            uow.commit()

        logger.info("Item #%s removed from order #%s", item_id, order.id)
