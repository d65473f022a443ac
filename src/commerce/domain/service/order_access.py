"""Domain service: who may see or touch an order."""

from __future__ import annotations

from commerce.domain.exceptions import ForbiddenError
from commerce.domain.model.order import Order
from commerce.domain.model.value_objects import Principal


def ensure_owner_or_admin(order: Order, principal: Principal) -> None:
    if principal.is_admin or principal.owns(order.user_id):
        return
    raise ForbiddenError("Unauthorized")
