# app/core/security_headers.py
from fastapi import Request, status
from fastapi.responses import RedirectResponse

from app.core.config import get_settings

# Added to every response
SECURITY_HEADERS: dict[str, str] = {
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self'; img-src 'self' data:; "
        "style-src 'self' 'unsafe-inline'; font-src 'self'; connect-src 'self'"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "same-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


def _is_https(request: Request) -> bool:
    # Behind a TLS-terminating proxy the scheme arrives in X-Forwarded-Proto
    return (
        request.url.scheme == "https"
        or request.headers.get("x-forwarded-proto", "").lower() == "https"
    )


async def add_security_headers(request: Request, call_next):
    """
    HTTP middleware.

      - production: redirect plain HTTP to HTTPS (307 keeps method and body)
      - always: attach SECURITY_HEADERS without overriding route-set values
    """
    if get_settings().is_production and not _is_https(request):
        response = RedirectResponse(
            str(request.url.replace(scheme="https")),
            status_code=status.HTTP_307_TEMPORARY_REDIRECT,
        )
    else:
        response = await call_next(request)

    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
