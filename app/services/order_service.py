# app/services/order_service.py
import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import Internal, IntegrityViolation, InvalidInput
from app.core.integrity import verify_order_digest
from app.models.order import Order
from app.repositories.order_repo import OrderRepository
from app.schemas.checkout import OrderSummary, SaveOrderResponse

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for confirming orders.

    Responsibilities:
      - Validate the echoed order envelope
      - Re-verify the order digest issued at checkout
      - Persist the verified summary with a single insert

    orderDate and status are not covered by the digest; they are stored
    as the client sent them and must not be used for anything that needs
    integrity (pricing, fulfilment decisions).
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    def parse_envelope(self, body: dict[str, Any]) -> tuple[OrderSummary, str]:
        """
        Extract (summary, digest) from a save-order body.

        Raises:
            InvalidInput(400): missing order/hash, missing cart/address/
            pricing, or fields of the wrong type.
        """
        order = body.get("order")
        order_hash = body.get("orderHash")

        if not order or not isinstance(order_hash, str) or not order_hash.strip():
            raise InvalidInput("Invalid order data or missing hash")

        if (
            not isinstance(order, dict)
            or not isinstance(order.get("cart"), list)
            or not isinstance(order.get("address"), dict)
            or not isinstance(order.get("pricing"), dict)
        ):
            raise InvalidInput("Order is missing required fields")

        try:
            summary = OrderSummary.model_validate(order)
        except ValidationError:
            raise InvalidInput("Order is malformed") from None

        return summary, order_hash

    def save_order(
        self,
        session: Session,
        body: dict[str, Any],
        client_id: str,
    ) -> SaveOrderResponse:
        """
        Verify and persist an order echoed back from checkout.

        Steps:
          1. Validate envelope shape.
          2. Recompute the digest; mismatch => IntegrityViolation, nothing stored.
          3. Insert the summary as-is and return its new id.
        """
        summary, order_hash = self.parse_envelope(body)

        if not verify_order_digest(summary, order_hash):
            logger.warning("Order hash verification failed for client %s", client_id)
            raise IntegrityViolation()

        order = Order(
            cart=[line.model_dump(mode="json", by_alias=True) for line in summary.cart],
            address=summary.address,
            pricing=summary.pricing.model_dump(mode="json", by_alias=True),
            order_date=summary.order_date,
            status=summary.status,
        )

        try:
            order = self.order_repo.insert(session, order)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Saving order failed for client %s", client_id)
            raise Internal("Server error saving order") from None

        logger.info("Saved order %s for client %s", order.id, client_id)
        return SaveOrderResponse(order_id=order.id)
