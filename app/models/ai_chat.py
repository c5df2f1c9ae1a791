# app/models/ai_chat.py
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class AiChat(SQLModel, table=True):
    """
    AI chat transcript owned by a user.

    messages is an ordered JSON list of
    {"role": "user" | "assistant" | "system", "content": str, "created_at": iso8601}.
    Always replace the list on update; in-place mutation is not tracked.
    """

    __tablename__ = "ai_chats"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    title: str | None = Field(default=None, max_length=200)

    messages: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )
