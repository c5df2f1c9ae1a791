# app/services/ai_chat_service.py
import logging
import uuid
from datetime import datetime, timezone

import openai
from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.ai_client import ChatCompletionClient
from app.models.ai_chat import AiChat
from app.models.user import User
from app.repositories.ai_chat_repo import AiChatRepository
from app.schemas.ai_chat import ChatCreate, ChatMessage, ChatUpdate, MessageCreate

logger = logging.getLogger(__name__)

# Titles derived from the first message keep this many characters
TITLE_MAX_LENGTH = 50


def generate_chat_title(message: str) -> str:
    """First TITLE_MAX_LENGTH characters of the message, '...' if cut."""
    title = message[:TITLE_MAX_LENGTH]
    return f"{title}..." if len(message) > TITLE_MAX_LENGTH else title


def _entry(role: str, content: str) -> dict:
    return ChatMessage(
        role=role,
        content=content,
        created_at=datetime.now(timezone.utc),
    ).model_dump(mode="json")


class AiChatService:
    """
    Business logic for AI chats.

    Responsibilities:
      - owner-scoped CRUD on chats (404 missing, 403 foreign)
      - append a user message, fetch the model reply, persist both at once
    """

    def __init__(self, repo: AiChatRepository):
        self.repo = repo

    def create_chat(self, session: Session, current_user: User, payload: ChatCreate) -> AiChat:
        chat = AiChat(user_id=current_user.id, title=payload.title, messages=[])
        return self.repo.create(session, chat)

    def list_chats(
        self,
        session: Session,
        current_user: User,
        skip: int = 0,
        limit: int = 20,
    ) -> list[AiChat]:
        return self.repo.list_for_user(session, current_user.id, skip=skip, limit=limit)

    def get_chat(self, session: Session, current_user: User, chat_id: uuid.UUID) -> AiChat:
        """
        Load a chat owned by the caller.

        Raises:
            HTTPException(404): if not found.
            HTTPException(403): if owned by another user.
        """
        chat = self.repo.get_by_id(session, chat_id)
        if not chat:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Chat not found",
            )
        if chat.user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not allowed to access this chat",
            )
        return chat

    def add_message(
        self,
        session: Session,
        client: ChatCompletionClient,
        current_user: User,
        chat_id: uuid.UUID,
        payload: MessageCreate,
    ) -> AiChat:
        """
        Append a user message and the assistant's reply.

        Steps:
          1. Load the chat (ownership-checked).
          2. Copy the transcript and append the user message.
          3. Ask the model for a reply with the full transcript.
          4. Append the reply; derive a title on the first exchange.
          5. Persist messages + title in one update.

        Nothing is written if the model call fails.
        """
        chat = self.get_chat(session, current_user, chat_id)

        messages = [*(chat.messages or []), _entry("user", payload.message)]

        try:
            reply = client.generate_chat_response(messages)
        except openai.OpenAIError:
            logger.exception("AI completion failed for chat %s", chat.id)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="AI completion failed",
            )

        messages = [*messages, _entry("assistant", reply)]

        if not chat.title and len(messages) == 2:
            chat.title = generate_chat_title(payload.message)

        chat.messages = messages
        return self.repo.update(session, chat)

    def update_chat(
        self,
        session: Session,
        current_user: User,
        chat_id: uuid.UUID,
        payload: ChatUpdate,
    ) -> AiChat:
        chat = self.get_chat(session, current_user, chat_id)
        chat.title = payload.title
        return self.repo.update(session, chat)

    def delete_chat(self, session: Session, current_user: User, chat_id: uuid.UUID) -> None:
        chat = self.get_chat(session, current_user, chat_id)
        self.repo.delete(session, chat)
