# app/schemas/ai_chat.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

ChatRole = Literal["user", "assistant", "system"]


class ChatMessage(SQLModel):
    """One transcript entry as stored in AiChat.messages."""

    role: ChatRole
    content: str
    created_at: datetime | None = None


class ChatCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)


class ChatUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)


class MessageCreate(SQLModel):
    """Payload for appending a user message to a chat."""

    model_config = ConfigDict(extra="forbid")

    message: str = Field(min_length=1, max_length=4000)


class ChatRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str | None = None
    messages: list[ChatMessage]
    created_at: datetime
    updated_at: datetime
