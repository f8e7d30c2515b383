# app/routers/tokens.py
from fastapi import APIRouter

from app.core.auth import issue_access_token
from app.schemas.auth import TokenResponse

router = APIRouter(tags=["Auth"])


@router.post("/get-token", response_model=TokenResponse)
def get_token():
    """
    Issue a short-lived anonymous session token (public endpoint).

    Send it as `Authorization: Bearer <token>` on protected routes.
    """
    return TokenResponse(token=issue_access_token())
