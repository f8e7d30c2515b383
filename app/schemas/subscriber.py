# app/schemas/subscriber.py
from pydantic import EmailStr, ConfigDict
from sqlmodel import SQLModel


class SubscribeRequest(SQLModel):
    """
    Newsletter sign-up payload.

    The service trims and lower-cases the address before validation.
    """

    model_config = ConfigDict(extra="ignore")

    email: EmailStr


class SubscribeResponse(SQLModel):
    message: str = "Successfully subscribed to newsletter!"
