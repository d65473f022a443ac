"""HTTP routes for individual order items (mounted under /v1/order-item)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from commerce.application.add_order_item import AddOrderItemHandler
from commerce.application.dto import OrderItemSpec
from commerce.application.remove_order_item import RemoveOrderItemHandler
from commerce.application.show_order_item import ShowOrderItemHandler
from commerce.application.update_order_item import UpdateOrderItemHandler
from commerce.domain.model.value_objects import Principal
from commerce.domain.repository.unit_of_work import UnitOfWorkFactory
from commerce.infrastructure.api.auth import current_principal
from commerce.infrastructure.api.dependencies import uow_factory
from commerce.infrastructure.api.schemas import AddOrderItemRequest, UpdateOrderItemRequest
from commerce.infrastructure.api.serializers import envelope, item_json

router = APIRouter(prefix="/order-item", tags=["order items"])


@router.get("/{item_id}")
def show_order_item(
    item_id: int,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    return envelope(200, item_json(ShowOrderItemHandler(uow).handle(item_id, principal)))


@router.post("", status_code=201)
def add_order_item(
    body: AddOrderItemRequest,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    spec = OrderItemSpec(body.product_id, body.quantity)  # type: ignore[arg-type]
    item = AddOrderItemHandler(uow).handle(body.order_id, spec, principal)
    return envelope(201, item_json(item), "Order item added")


@router.put("/{item_id}")
def update_order_item(
    item_id: int,
    body: UpdateOrderItemRequest,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    item = UpdateOrderItemHandler(uow).handle(item_id, body.quantity, principal)
    return envelope(200, item_json(item), "Order item updated")


@router.delete("/{item_id}")
def remove_order_item(
    item_id: int,
    principal: Principal = Depends(current_principal),
    uow: UnitOfWorkFactory = Depends(uow_factory),
):
    RemoveOrderItemHandler(uow).handle(item_id, principal)
    return envelope(200, message="Order item removed")
