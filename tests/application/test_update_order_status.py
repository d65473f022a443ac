"""Tests for the Update Order Status use case."""

import pytest

from commerce.application.update_order_status import UpdateOrderStatusHandler
from commerce.domain.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from commerce.domain.model.order import OrderStatus
from commerce.domain.model.value_objects import Principal, Role

OWNER = Principal(1)
STRANGER = Principal(2)
ADMIN = Principal(3, Role.ADMIN)


class TestUpdateOrderStatus:

    def test_owner_can_cancel(self, uow, place_order):
        order = place_order()
        dto = UpdateOrderStatusHandler(uow).handle(order.id, "cancelled", OWNER)
        assert dto.status == "cancelled"
        assert uow.store.orders[order.id].status is OrderStatus.CANCELLED

    def test_owner_can_complete(self, uow, place_order):
        order = place_order()
        dto = UpdateOrderStatusHandler(uow).handle(order.id, "completed", OWNER)
        assert dto.status == "completed"

    def test_stranger_is_forbidden_and_nothing_changes(self, uow, place_order):
        order = place_order()
        with pytest.raises(ForbiddenError, match="not authorized"):
            UpdateOrderStatusHandler(uow).handle(order.id, "cancelled", STRANGER)
        assert uow.store.orders[order.id].status is OrderStatus.PENDING

    def test_owner_cannot_move_back_to_pending(self, uow, place_order):
        order = place_order()
        with pytest.raises(ForbiddenError, match="only allowed"):
            UpdateOrderStatusHandler(uow).handle(order.id, "pending", OWNER)

    def test_admin_may_set_any_status_on_pending_order(self, uow, place_order):
        order = place_order(user_id=2)
        dto = UpdateOrderStatusHandler(uow).handle(order.id, "completed", ADMIN)
        assert dto.status == "completed"

    def test_terminal_order_is_frozen_even_for_admin(self, uow, place_order):
        order = place_order()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order.id, "completed", OWNER)

        with pytest.raises(InvalidTransitionError, match="already completed"):
            handler.handle(order.id, "cancelled", OWNER)
        with pytest.raises(InvalidTransitionError):
            handler.handle(order.id, "pending", ADMIN)
        assert uow.store.orders[order.id].status is OrderStatus.COMPLETED

    def test_stranger_on_terminal_order_still_gets_forbidden(self, uow, place_order):
        order = place_order()
        UpdateOrderStatusHandler(uow).handle(order.id, "cancelled", OWNER)
        with pytest.raises(ForbiddenError):
            UpdateOrderStatusHandler(uow).handle(order.id, "completed", STRANGER)

    @pytest.mark.parametrize("raw", ["canceled", "CANCELLED", "shipped", None, 3])
    def test_unknown_token_rejected_before_lookup(self, uow, raw):
        with pytest.raises(ValidationError, match="Invalid status"):
            UpdateOrderStatusHandler(uow).handle(999, raw, ADMIN)

    def test_missing_order(self, uow):
        with pytest.raises(NotFoundError):
            UpdateOrderStatusHandler(uow).handle(999, "cancelled", ADMIN)
