"""DTO -> JSON (camelCase) conversion for API responses."""

from __future__ import annotations

from commerce.application.dto import OrderDTO, OrderItemDTO


def item_json(item: OrderItemDTO) -> dict:
    return {
        "id": item.id,
        "orderId": item.order_id,
        "productId": item.product_id,
        "quantity": item.quantity,
    }


def order_json(order: OrderDTO, with_items: bool = True) -> dict:
    body = {
        "id": order.id,
        "userId": order.user_id,
        "totalAmount": order.total_amount,
        "status": order.status,
        "createdAt": order.created_at,
        "updatedAt": order.updated_at,
    }
    if with_items:
        body["items"] = [item_json(item) for item in order.items]
    return body


def envelope(code: int, data=None, message: str | None = None) -> dict:
    body: dict = {"code": code}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
