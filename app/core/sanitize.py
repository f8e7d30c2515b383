# app/core/sanitize.py
import json
import re
from typing import Any

from fastapi import Request

from app.core.config import get_settings
from app.core.errors import InvalidInput, PayloadTooLarge

# Elements whose content is executable or renders active content; the whole
# element including its body is removed.
_ACTIVE_ELEMENT_RE = re.compile(
    r"<(script|style|iframe|object|embed|frame|frameset|applet)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)

# Any remaining tag, comment or doctype (attributes such as onerror= go with it).
_TAG_RE = re.compile(r"<[a-zA-Z!/?][^>]*>", re.DOTALL)


def sanitize_text(value: str) -> str:
    """
    Neutralize HTML/script content in a single string.

      1. Drop active elements together with their body.
      2. Drop every other tag.
      3. Encode any stray angle brackets.

    The output never contains '<' or '>', so running it again is a no-op.
    """
    value = _ACTIVE_ELEMENT_RE.sub("", value)
    value = _TAG_RE.sub("", value)
    return value.replace("<", "&lt;").replace(">", "&gt;")


def sanitize(value: Any) -> Any:
    """
    Recursively sanitize a JSON-compatible value.

    Objects and arrays keep their shape, string leaves go through
    sanitize_text(), everything else (numbers, booleans, None) is returned
    unchanged. Object keys are left as-is.
    """
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, dict):
        return {key: sanitize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize(item) for item in value]
    return value


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN and Infinity by default; strict JSON does not
    raise ValueError(f"invalid JSON constant: {name}")


async def sanitized_body(request: Request) -> dict[str, Any]:
    """
    FastAPI dependency returning the sanitized JSON object body.

    Declare it before the auth dependency so sanitization happens first.
    An empty body yields {}.

    Raises:
        PayloadTooLarge(413): body larger than MAX_BODY_BYTES.
        InvalidInput(400): body is not valid JSON or not a JSON object.
    """
    raw = await request.body()
    if len(raw) > get_settings().MAX_BODY_BYTES:
        raise PayloadTooLarge()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidInput("Request body must be valid JSON") from None

    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")

    return sanitize(payload)
