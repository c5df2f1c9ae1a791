# app/repositories/user_repo.py
import uuid

from sqlalchemy import delete, func, or_, update
from sqlmodel import Session, select

from app.models.ai_chat import AiChat
from app.models.purchase import Purchase
from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def get_by_payments_customer_id(
        self, session: Session, customer_id: str
    ) -> User | None:
        stmt = select(User).where(User.payments_customer_id == customer_id)
        return session.exec(stmt).first()

    def search(
        self,
        session: Session,
        query: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        """
        Paginated user listing, newest first.

        Args:
            query: optional case-insensitive substring matched against
                   name or email
            skip: offset rows (for paging)
            limit: max number of rows returned

        Returns:
            (page of users, total number of matching users)
        """
        conditions = []
        if query:
            needle = query.strip().lower()
            conditions.append(
                or_(
                    func.lower(User.name).contains(needle, autoescape=True),
                    func.lower(User.email).contains(needle, autoescape=True),
                )
            )

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        count_stmt = select(func.count()).select_from(User).where(*conditions)

        users = list(session.exec(stmt).all())
        total = session.exec(count_stmt).one()
        return users, int(total or 0)

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """
        Delete a User together with their chats.

        Purchases are kept for bookkeeping and detached (user_id = NULL).
        Everything happens in one transaction.
        """
        session.execute(delete(AiChat).where(AiChat.user_id == user.id))
        session.execute(
            update(Purchase)
            .where(Purchase.user_id == user.id)
            .values(user_id=None)
        )
        session.delete(user)
        session.commit()
