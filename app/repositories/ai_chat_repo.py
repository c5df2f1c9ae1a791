# app/repositories/ai_chat_repo.py
import uuid
from datetime import datetime, timezone

from sqlmodel import Session, select

from app.models.ai_chat import AiChat


class AiChatRepository:
    """Data access layer for AI chats."""

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 20,
    ) -> list[AiChat]:
        stmt = (
            select(AiChat)
            .where(AiChat.user_id == user_id)
            .order_by(AiChat.updated_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, chat_id: uuid.UUID) -> AiChat | None:
        return session.get(AiChat, chat_id)

    def create(self, session: Session, chat: AiChat) -> AiChat:
        session.add(chat)
        session.commit()
        session.refresh(chat)
        return chat

    def update(self, session: Session, chat: AiChat) -> AiChat:
        """Persist title/messages changes in a single commit."""
        chat.updated_at = datetime.now(timezone.utc)
        session.add(chat)
        session.commit()
        session.refresh(chat)
        return chat

    def delete(self, session: Session, chat: AiChat) -> None:
        session.delete(chat)
        session.commit()
