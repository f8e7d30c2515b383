# app/routers/subscriptions.py
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from app.core.auth import require_client
from app.core.config import get_settings
from app.core.rate_limit import limiter
from app.core.sanitize import sanitized_body
from app.database import get_session
from app.repositories.subscriber_repo import SubscriberRepository
from app.schemas.subscriber import SubscribeResponse
from app.services.subscription_service import SubscriptionService

router = APIRouter(tags=["Newsletter"])
settings = get_settings()

repo = SubscriberRepository()
service = SubscriptionService(repo)


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.RATE_LIMIT_SUBSCRIBE)
def subscribe(
    request: Request,
    body: dict[str, Any] = Depends(sanitized_body),
    _client_id: str = Depends(require_client),
    session: Session = Depends(get_session),
):
    """
    Subscribe an email address to the newsletter.

    - 400 if the email is missing or invalid
    - 409 if it is already subscribed
    - 429 after RATE_LIMIT_SUBSCRIBE attempts from one IP
    """
    return service.subscribe(session, body)
