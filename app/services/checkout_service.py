# app/services/checkout_service.py
import logging
import math
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import Internal, InvalidInput, NotFound
from app.core.integrity import CanonicalError, order_digest
from app.core.sanitize import sanitize
from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.checkout import CartLine, CheckoutResponse, OrderSummary, Pricing

logger = logging.getLogger(__name__)

# 10% off every order
DISCOUNT_RATE = Decimal("0.10")

# Delivery is free strictly above this subtotal
FREE_DELIVERY_THRESHOLD = Decimal("700")
DELIVERY_FEE = Decimal("150")

CENT = Decimal("0.01")


def _to_money(value: float | Decimal) -> Decimal:
    """Round half away from zero to 2 decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(repr(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_money(value: float) -> float:
    return float(_to_money(value))


def coerce_price(raw: Any) -> float:
    """
    Catalog price as a usable number.

    Missing, non-numeric, NaN/infinite or negative stored prices count as 0
    so a bad record can never turn the subtotal into NaN.
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0.0
    if not math.isfinite(raw) or raw < 0:
        return 0.0
    return float(raw)


def compute_pricing(subtotal: float) -> Pricing:
    """
    Derive the pricing block from a subtotal.

      discount = round(subtotal * 0.10, 2)
      delivery = 0 if subtotal > 700 else 150
      total    = round(subtotal + delivery - discount, 2)
    """
    sub = _to_money(subtotal)
    discount = _to_money(sub * DISCOUNT_RATE)
    delivery = Decimal(0) if sub > FREE_DELIVERY_THRESHOLD else DELIVERY_FEE
    total = _to_money(sub + delivery - discount)
    return Pricing(
        subtotal=float(sub),
        discount=float(discount),
        delivery=float(delivery),
        total=float(total),
    )


class CheckoutService:
    """
    Prices a client cart against the catalog.

    Responsibilities:
      - Validate the raw cart / address shapes
      - Resolve all product codes in one batched catalog query
      - Drop lines with an unknown code or a missing size (best-effort)
      - Compute pricing from catalog prices only
      - Attach the order digest the client must echo on save
    """

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    def price_cart(self, session: Session, cart: Any, address: Any) -> OrderSummary:
        """
        Build a priced OrderSummary from an untrusted cart.

        Steps:
          1. cart must be a non-empty list, address an object.
          2. Every line needs a non-empty string productCode.
          3. Look up all codes at once; 404 if none match.
          4. Enrich lines from the catalog, dropping unknown codes and
             lines without a size.
          5. 400 if nothing is left.
          6. Sum catalog prices, derive discount/delivery/total.
          7. Stamp orderDate = now, status = "pending".

        Client-sent prices, names or images are ignored entirely.
        """
        # 1) Shape checks
        if not isinstance(cart, list) or not cart:
            raise InvalidInput("Invalid request. Cart items are required.")
        if not isinstance(address, dict):
            raise InvalidInput("Invalid request. Address details are required.")

        # 2) Product codes
        codes: list[str] = []
        for item in cart:
            code = item.get("productCode") if isinstance(item, dict) else None
            if not isinstance(code, str) or not code.strip():
                raise InvalidInput("Invalid product code in cart")
            codes.append(code.strip())

        # 3) Batched catalog lookup
        products = self._lookup(session, sorted(set(codes)))
        if not products:
            raise NotFound("No products found in database")
        by_code: dict[str, Product] = {p.product_code: p for p in products}

        # 4) Enrich, dropping what cannot be priced
        # Catalog strings are sanitized like the echoed body will be on save
        lines: list[CartLine] = []
        for item, code in zip(cart, codes):
            product = by_code.get(code)
            if product is None:
                continue

            size = item.get("size")
            size = size.strip() if isinstance(size, str) else ""
            if not size:
                continue

            lines.append(
                CartLine(
                    id=str(product.id),
                    product_code=sanitize(product.product_code),
                    product_name=sanitize(product.product_name),
                    price=coerce_price(product.product_price),
                    image_url=sanitize(product.product_imageurl),
                    size=size,
                )
            )

        dropped = len(cart) - len(lines)
        if dropped:
            logger.info("Dropped %d of %d cart lines during pricing", dropped, len(cart))

        # 5) Nothing priceable
        if not lines:
            raise InvalidInput("No valid items in cart")

        # 6) Pricing
        pricing = compute_pricing(sum(line.price for line in lines))

        # 7) Stamp
        return OrderSummary(
            cart=lines,
            address=address,
            pricing=pricing,
            order_date=datetime.now(timezone.utc),
            status="pending",
        )

    def checkout(
        self,
        session: Session,
        body: dict[str, Any],
        client_id: str,
    ) -> CheckoutResponse:
        """
        Price the cart and sign the resulting summary.
        """
        summary = self.price_cart(session, body.get("cart"), body.get("address"))

        try:
            order_hash = order_digest(summary)
        except CanonicalError:
            raise InvalidInput("Address contains unsupported values") from None

        logger.info(
            "Priced checkout for client %s: %d lines, total %.2f",
            client_id,
            len(summary.cart),
            summary.pricing.total,
        )
        return CheckoutResponse(order=summary, order_hash=order_hash)

    def _lookup(self, session: Session, codes: list[str]) -> list[Product]:
        try:
            return self.product_repo.list_by_codes(session, codes)
        except SQLAlchemyError:
            logger.exception("Catalog lookup failed")
            raise Internal("Server error processing order") from None
