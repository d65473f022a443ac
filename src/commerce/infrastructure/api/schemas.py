"""Request bodies for the HTTP API.

Every field is optional: a missing field is a domain
``ValidationError`` raised by the handler, so every 400 carries the same
message shape. Only wrong JSON types are rejected here.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemIn(_Body):
    product_id: int | None = Field(None, alias="productId")
    quantity: int | None = Field(None, description="Units ordered, at least 1")


class CreateOrderRequest(_Body):
    items: list[OrderItemIn] | None = None
    total_amount: Decimal | None = Field(None, alias="totalAmount")


class UpdateOrderStatusRequest(_Body):
    status: str | None = Field(None, description="pending|completed|cancelled")


class AddOrderItemRequest(_Body):
    order_id: int | None = Field(None, alias="orderId")
    product_id: int | None = Field(None, alias="productId")
    quantity: int | None = None


class UpdateOrderItemRequest(_Body):
    quantity: int | None = None
