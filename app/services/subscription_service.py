# app/services/subscription_service.py
import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.errors import Conflict, Internal, InvalidInput
from app.models.subscriber import Subscriber
from app.repositories.subscriber_repo import SubscriberRepository
from app.schemas.subscriber import SubscribeRequest, SubscribeResponse

logger = logging.getLogger(__name__)


class SubscriptionService:
    """
    Newsletter sign-ups.

    Responsibilities:
      - normalize (trim + lower-case) and validate the email
      - reject duplicates with 409
    """

    def __init__(self, repo: SubscriberRepository):
        self.repo = repo

    def subscribe(self, session: Session, body: dict[str, Any]) -> SubscribeResponse:
        raw = body.get("email")
        email = raw.strip().lower() if isinstance(raw, str) else ""
        if not email:
            raise InvalidInput("Email is required")

        try:
            payload = SubscribeRequest(email=email)
        except ValidationError:
            raise InvalidInput("Please enter a valid email address") from None

        try:
            if self.repo.get_by_email(session, payload.email) is not None:
                raise Conflict("This email is already subscribed")
            self.repo.create(session, Subscriber(email=payload.email))
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same address
            session.rollback()
            raise Conflict("This email is already subscribed") from None
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Saving subscriber failed")
            raise Internal("Server error, please try again later") from None

        return SubscribeResponse()
