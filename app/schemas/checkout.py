# app/schemas/checkout.py
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for checkout payloads.

    Python attributes are snake_case, the wire format is camelCase
    (productCode, imageUrl, orderDate, ...). Both spellings are accepted
    on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartLine(CamelModel):
    """
    A cart line enriched from the catalog.

    Every field except `size` comes from the product record, never from
    the client's submission.
    """

    id: str | None = None
    product_code: str
    product_name: str | None = None
    price: float = Field(ge=0)
    image_url: str | None = None
    size: str


class Pricing(CamelModel):
    subtotal: float = Field(ge=0)
    discount: float = Field(ge=0)
    delivery: float = Field(ge=0)
    total: float = Field(ge=0)


class OrderSummary(CamelModel):
    """
    Priced order as returned by checkout and echoed back on save.

    Only cart, address and pricing are covered by the order digest;
    order_date and status are carried along as low-stakes metadata.
    """

    cart: list[CartLine]
    address: dict[str, Any]
    pricing: Pricing
    order_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: str = Field(default="pending", max_length=32)


class CheckoutResponse(CamelModel):
    success: bool = True
    order: OrderSummary
    order_hash: str


class SaveOrderResponse(CamelModel):
    success: bool = True
    message: str = "Order saved successfully"
    order_id: uuid.UUID
