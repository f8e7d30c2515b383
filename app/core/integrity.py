# app/core/integrity.py
"""
Order integrity digests.

Checkout is stateless: instead of storing a pending order, the server hands
the client a priced summary plus an HMAC over it. On save, the digest is
recomputed from the echoed summary; any change to a covered field (a price,
the address, a pricing figure) makes verification fail.

Covered projection:
    {
      "cart": [{"productCode", "productName", "price", "size"}, ...],
      "address": {...},
      "pricing": {"subtotal", "discount", "delivery", "total"},
    }

orderDate and status are deliberately outside the projection.
"""
import hashlib
import hmac
import json
import math
from typing import Any

from app.core.config import get_settings
from app.schemas.checkout import OrderSummary


class CanonicalError(ValueError):
    pass


def _canonical_number(value: int | float) -> int | float:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalError("non-finite numbers are not allowed in canonical JSON")
        # 800.0 and 800 must hash the same: clients may re-serialize either way
        if value.is_integer():
            return int(value)
    return value


def to_canonical_obj(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): to_canonical_obj(v) for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))}
    if isinstance(value, (list, tuple)):
        return [to_canonical_obj(v) for v in value]
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, (int, float)):
        return _canonical_number(value)
    raise CanonicalError(f"unsupported canonical type: {type(value)!r}")


def canonical_json(value: Any) -> bytes:
    canonical = to_canonical_obj(value)
    return json.dumps(
        canonical,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        allow_nan=False,
    ).encode("utf-8")


def order_projection(summary: OrderSummary) -> dict[str, Any]:
    """Subset of the summary covered by the digest."""
    return {
        "cart": [
            {
                "productCode": line.product_code,
                "productName": line.product_name,
                "price": line.price,
                "size": line.size,
            }
            for line in summary.cart
        ],
        "address": summary.address,
        "pricing": {
            "subtotal": summary.pricing.subtotal,
            "discount": summary.pricing.discount,
            "delivery": summary.pricing.delivery,
            "total": summary.pricing.total,
        },
    }


def _hash_key(secret: str | None) -> bytes:
    if secret is None:
        secret = get_settings().ORDER_HASH_SECRET.get_secret_value()
    return secret.encode("utf-8")


def order_digest(summary: OrderSummary, secret: str | None = None) -> str:
    """
    HMAC-SHA256 of the canonical projection, as 64 lower-case hex chars.

    Raises:
        CanonicalError: the address holds a value JSON cannot represent.
    """
    message = canonical_json(order_projection(summary))
    return hmac.new(_hash_key(secret), message, hashlib.sha256).hexdigest()


def verify_order_digest(summary: OrderSummary, digest: str, secret: str | None = None) -> bool:
    if not isinstance(digest, str) or not digest:
        return False
    try:
        expected = order_digest(summary, secret)
    except CanonicalError:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), digest.strip().lower().encode("utf-8"))
