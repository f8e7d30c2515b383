# app/schemas/auth.py
from sqlmodel import SQLModel


class TokenResponse(SQLModel):
    success: bool = True
    token: str
