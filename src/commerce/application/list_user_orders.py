"""Application service: List User Orders use case (query).

Users may only list their own orders; there is no admin override here.
"""

from __future__ import annotations

from commerce.application.dto import OrderDTO, to_order_dto
from commerce.domain.exceptions import ForbiddenError
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory


class ListUserOrdersHandler:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: int, principal: Principal) -> list[OrderDTO]:
        if not principal.owns(user_id):
            raise ForbiddenError("Unauthorized")
        with self._uow_factory() as uow:
            return [to_order_dto(order) for order in uow.orders.list_by_user(user_id)]
