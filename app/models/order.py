# app/models/order.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column, Index
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Confirmed customer order.

    Stores the checkout summary exactly as it was verified:
      - cart: priced lines (camelCase keys, as sent to the client)
      - address: free-form delivery details
      - pricing: subtotal / discount / delivery / total
      - order_date, status: echoed by the client, not covered by the digest
    """

    __tablename__ = "orders"
    __table_args__ = (Index("ix_orders_order_date_status", "order_date", "status"),)

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    cart: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    address: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )

    pricing: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
    )

    order_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Checkout timestamp as echoed by the client",
    )

    # pending | confirmed | shipped | canceled
    status: str = Field(
        default="pending",
        max_length=32,
        description="Order status lifecycle",
    )
