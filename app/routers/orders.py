# app/routers/orders.py
from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_client
from app.core.sanitize import sanitized_body
from app.database import get_session
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.checkout import CheckoutResponse, SaveOrderResponse
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

router = APIRouter(tags=["Orders"])

order_repo = OrderRepository()
product_repo = ProductRepository()
checkout_service = CheckoutService(product_repo)
order_service = OrderService(order_repo)


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
)
def checkout(
    body: dict[str, Any] = Depends(sanitized_body),
    client_id: str = Depends(require_client),
    session: Session = Depends(get_session),
):
    """
    Price a cart against the catalog.

    Body: {"cart": [{"productCode", "size"}, ...], "address": {...}}

    Returns the priced order and `orderHash`, which must be sent back
    unchanged to /save-order together with the order.
    """
    return checkout_service.checkout(session, body, client_id)


@router.post(
    "/save-order",
    response_model=SaveOrderResponse,
)
def save_order(
    body: dict[str, Any] = Depends(sanitized_body),
    client_id: str = Depends(require_client),
    session: Session = Depends(get_session),
):
    """
    Persist an order previously priced by /checkout.

    Body: {"order": <order from checkout>, "orderHash": "<hex>"}

    Any change to the cart, address or pricing since checkout is
    rejected and nothing is stored.
    """
    return order_service.save_order(session, body, client_id)
