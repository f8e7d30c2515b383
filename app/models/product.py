# app/models/product.py
import uuid

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Catalog entry: the authoritative source of prices at checkout.

    Column names follow the storefront's product feed
    (product_code, product_name, product_price, product_imageurl).
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    product_code: str = Field(
        max_length=64,
        unique=True,
        index=True,
        description="Public product code used by carts",
    )

    product_name: str | None = Field(
        default=None,
        max_length=255,
        description="Display name",
    )

    # Nullable: pricing treats a missing/non-finite price as 0
    product_price: float | None = Field(
        default=None,
        description="Unit price",
    )

    product_imageurl: str | None = Field(
        default=None,
        description="Public image URL",
    )
