# app/repositories/order_repo.py
from sqlmodel import Session

from app.models.order import Order


class OrderRepository:
    """
    Data access layer for confirmed orders.

    An order is written with a single insert + commit, so a failure
    leaves nothing behind.
    """

    def insert(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order
