# app/database.py
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()


def _database_url(url: str) -> str:
    """Postgres connections must use TLS unless the URL says otherwise."""
    if url.startswith("postgres") and "sslmode=" not in url:
        return url + ("&" if "?" in url else "?") + "sslmode=require"
    return url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # sync routes run in FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


db_url = _database_url(settings.DATABASE_URL)

engine = create_engine(db_url, echo=False, **_engine_kwargs(db_url))


def create_db_and_tables() -> None:
    """
    Create the catalog, order and subscriber tables if they do not exist.

    Called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """FastAPI dependency yielding one SQLModel Session per request."""
    with Session(engine) as session:
        yield session
