# app/core/errors.py
"""
Error taxonomy for the storefront API.

Every error is an HTTPException subclass, so services raise them exactly
like a plain HTTPException and FastAPI renders the usual {"detail": ...}
body. Messages are fixed, client-safe strings: no secrets, stack traces or
raw storage errors.
"""
from fastapi import HTTPException, status


class InvalidInput(HTTPException):
    """Malformed or missing fields (client error, no retry implied)."""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthenticated(HTTPException):
    """Bearer credential absent, malformed or unparseable."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    """Bearer credential with a bad signature or past its expiry."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class PayloadTooLarge(HTTPException):
    def __init__(self, detail: str = "Request body too large"):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=detail,
        )


class IntegrityViolation(HTTPException):
    """
    Order digest did not match the echoed summary.

    Never downgrade this to a warning: the order must not be persisted.
    """

    def __init__(
        self,
        detail: str = (
            "Order verification failed. "
            "The order data may have been tampered with."
        ),
    ):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Internal(HTTPException):
    """Storage or lookup failure, surfaced without the underlying error."""

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
