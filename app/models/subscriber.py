# app/models/subscriber.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Subscriber(SQLModel, table=True):
    """
    Newsletter subscription.
    Email is stored trimmed and lower-cased; one row per address.
    """

    __tablename__ = "subscribers"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        max_length=320,
        unique=True,
        index=True,
    )

    subscription_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
