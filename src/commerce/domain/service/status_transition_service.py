"""Domain service: order status transitions.

Decides *who* may move an order to *which* status; the Order aggregate
itself decides whether its current status allows moving at all.

    admin           -> any target, including pending
    owner           -> completed | cancelled
    anyone else     -> forbidden

Authorization is checked before the state guard so that a stranger gets
the same answer whatever state the order is in.
"""

from __future__ import annotations

from commerce.domain.exceptions import ForbiddenError
from commerce.domain.model.order import Order, OrderStatus
from commerce.domain.model.value_objects import Principal

OWNER_TARGETS = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def authorize_transition(order: Order, principal: Principal, target: OrderStatus) -> None:
    if principal.is_admin:
        return
    if not principal.owns(order.user_id):
        raise ForbiddenError("Forbidden: You are not authorized to update this order")
    if target not in OWNER_TARGETS:
        raise ForbiddenError(
            "You are only allowed to cancel or mark your order as completed"
        )


def change_status(order: Order, principal: Principal, target: OrderStatus) -> None:
    """Authorize and apply a status change in place."""
    authorize_transition(order, principal, target)
    order.transition_to(target)
