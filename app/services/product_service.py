# app/services/product_service.py
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import Internal, InvalidInput, NotFound
from app.repositories.product_repo import ProductRepository
from app.schemas.product import CollectionItemRead, ProductRead

logger = logging.getLogger(__name__)


class ProductService:
    """
    Single-product lookups for the storefront.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    @staticmethod
    def _clean(value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    def add_to_collection(self, session: Session, body: dict[str, Any]) -> CollectionItemRead:
        """
        Resolve a product code (sent as `productName`) plus a size.

        Raises:
            InvalidInput(400): code or size missing/blank.
            NotFound(404): unknown product code.
        """
        code = self._clean(body.get("productName"))
        size = self._clean(body.get("size"))
        if not code or not size:
            raise InvalidInput("Product name and size are required")

        try:
            product = self.repo.get_by_code(session, code)
        except SQLAlchemyError:
            logger.exception("Product lookup failed")
            raise Internal("Server error") from None

        if product is None:
            raise NotFound("Product not found")

        return CollectionItemRead(
            product=ProductRead.model_validate(product, from_attributes=True),
            size=size,
        )
