# app/schemas/health.py
from typing import Literal

from sqlmodel import SQLModel


class HealthRead(SQLModel):
    status: Literal["ok"] = "ok"
    database: Literal["connected", "disconnected"]
