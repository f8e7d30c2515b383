# app/routers/products.py
from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_client
from app.core.sanitize import sanitized_body
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.product import CollectionItemRead
from app.services.product_service import ProductService

router = APIRouter(tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.post("/add-to-collection", response_model=CollectionItemRead)
def add_to_collection(
    body: dict[str, Any] = Depends(sanitized_body),
    _client_id: str = Depends(require_client),
    session: Session = Depends(get_session),
):
    """
    Look up a product by code for the client-side collection.

    Body: {"productName": "<product code>", "size": "M"}
    """
    return service.add_to_collection(session, body)
