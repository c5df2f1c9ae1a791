# app/repositories/purchase_repo.py
import uuid
from datetime import datetime, timezone

from sqlmodel import Session, select

from app.models.purchase import Purchase


class PurchaseRepository:
    """
    Data access layer for purchases.

    Every mutation is a single-row statement committed immediately;
    the webhook handles one event per request.
    """

    def get_by_id(self, session: Session, purchase_id: uuid.UUID) -> Purchase | None:
        return session.get(Purchase, purchase_id)

    def list_for_user(self, session: Session, user_id: uuid.UUID) -> list[Purchase]:
        stmt = (
            select(Purchase)
            .where(Purchase.user_id == user_id)
            .order_by(Purchase.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_by_subscription_id(
        self, session: Session, subscription_id: str
    ) -> Purchase | None:
        stmt = select(Purchase).where(Purchase.subscription_id == subscription_id)
        return session.exec(stmt).first()

    def get_by_checkout_session_id(
        self, session: Session, checkout_session_id: str
    ) -> Purchase | None:
        stmt = select(Purchase).where(
            Purchase.checkout_session_id == checkout_session_id
        )
        return session.exec(stmt).first()

    def create(self, session: Session, purchase: Purchase) -> Purchase:
        session.add(purchase)
        session.commit()
        session.refresh(purchase)
        return purchase

    def update(self, session: Session, purchase: Purchase) -> Purchase:
        purchase.updated_at = datetime.now(timezone.utc)
        session.add(purchase)
        session.commit()
        session.refresh(purchase)
        return purchase

    def delete_by_subscription_id(self, session: Session, subscription_id: str) -> bool:
        """
        Delete the purchase for a subscription.

        Returns:
            True if a row was removed, False if none matched.
        """
        purchase = self.get_by_subscription_id(session, subscription_id)
        if purchase is None:
            return False
        session.delete(purchase)
        session.commit()
        return True
