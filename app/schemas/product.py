# app/schemas/product.py
import uuid

from sqlmodel import SQLModel


class ProductRead(SQLModel):
    """
    Product representation for clients (same keys as the catalog feed).
    """

    id: uuid.UUID
    product_code: str
    product_name: str | None = None
    product_price: float | None = None
    product_imageurl: str | None = None


class CollectionItemRead(SQLModel):
    """
    Response for add-to-collection: the resolved product plus chosen size.
    """

    success: bool = True
    product: ProductRead
    size: str
