# app/repositories/product_repo.py
from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for the product catalog.

    - Pure DB operations (queries only; the catalog is read-only here).
    - No FastAPI, no business logic.
    - Codes are always bound parameters, never query fragments.
    """

    def get_by_code(self, session: Session, code: str) -> Product | None:
        stmt = select(Product).where(Product.product_code == code)
        return session.exec(stmt).first()

    def list_by_codes(self, session: Session, codes: list[str]) -> list[Product]:
        """
        Batched lookup: one IN query for the whole cart.
        """
        if not codes:
            return []
        stmt = select(Product).where(Product.product_code.in_(codes))
        return list(session.exec(stmt).all())
