"""HTTP routes for orders (mounted under /v1/order)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from commerce.application.create_order import CreateOrderHandler
from commerce.application.delete_order import DeleteOrderHandler
from commerce.application.dto import OrderItemSpec
from commerce.application.list_user_orders import ListUserOrdersHandler
from commerce.application.show_order import ShowOrderHandler
from commerce.application.update_order_status import UpdateOrderStatusHandler
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.infrastructure.api.auth import current_principal
from commerce.infrastructure.api.dependencies import uow_factory
from commerce.infrastructure.api.schemas import CreateOrderRequest, UpdateOrderStatusRequest
from commerce.infrastructure.api.serializers import envelope, order_json

router = APIRouter(prefix="/order", tags=["orders"])


@router.post("", status_code=201)
def create_order(
    body: CreateOrderRequest,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    specs = [OrderItemSpec(i.product_id, i.quantity) for i in body.items or []]
    dto = CreateOrderHandler(uow).handle(principal.id, body.total_amount, specs)
    order = order_json(dto)
    data = {"order": order_json(dto, with_items=False), "orderItems": order["items"]}
    return envelope(201, data, "Order created")


@router.get("/user/{user_id}")
def list_user_orders(
    user_id: int,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    orders = ListUserOrdersHandler(uow).handle(user_id, principal)
    return envelope(200, [order_json(o) for o in orders])


@router.get("/{order_id}")
def show_order(
    order_id: int,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    return envelope(200, order_json(ShowOrderHandler(uow).handle(order_id, principal)))


@router.put("/{order_id}")
def update_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    dto = UpdateOrderStatusHandler(uow).handle(order_id, body.status, principal)
    return envelope(200, order_json(dto), "Order status updated successfully")


@router.delete("/{order_id}")
def delete_order(
    order_id: int,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    DeleteOrderHandler(uow).handle(order_id, principal)
    return envelope(200, message="Order deleted")
