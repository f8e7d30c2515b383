# app/repositories/subscriber_repo.py
from sqlmodel import Session, select

from app.models.subscriber import Subscriber


class SubscriberRepository:
    def get_by_email(self, session: Session, email: str) -> Subscriber | None:
        stmt = select(Subscriber).where(Subscriber.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, subscriber: Subscriber) -> Subscriber:
        session.add(subscriber)
        session.commit()
        session.refresh(subscriber)
        return subscriber
