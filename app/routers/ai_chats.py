# app/routers/ai_chats.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.ai_client import ChatCompletionClient
from app.core.auth import require_auth
from app.core.providers import get_chat_client
from app.database import get_session
from app.models.user import User
from app.repositories.ai_chat_repo import AiChatRepository
from app.schemas.ai_chat import ChatCreate, ChatRead, ChatUpdate, MessageCreate
from app.schemas.user import SuccessResponse
from app.services.ai_chat_service import AiChatService

router = APIRouter(prefix="/ai/chats", tags=["AI"])

repo = AiChatRepository()
service = AiChatService(repo)


@router.post("", response_model=ChatRead, status_code=status.HTTP_201_CREATED)
def create_chat(
    payload: ChatCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.create_chat(session, current_user, payload)


@router.get("", response_model=list[ChatRead])
def list_chats(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    """List the caller's chats, most recently updated first."""
    return service.list_chats(session, current_user, skip=offset, limit=limit)


@router.get("/{chat_id}", response_model=ChatRead)
def get_chat(
    chat_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.get_chat(session, current_user, chat_id)


@router.post("/{chat_id}/messages", response_model=ChatRead)
def add_message(
    chat_id: uuid.UUID,
    payload: MessageCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    client: ChatCompletionClient = Depends(get_chat_client),
):
    """
    Add a message to a chat and get the AI response.

    The first exchange also titles an untitled chat.
    """
    return service.add_message(session, client, current_user, chat_id, payload)


@router.put("/{chat_id}", response_model=ChatRead)
def update_chat(
    chat_id: uuid.UUID,
    payload: ChatUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    return service.update_chat(session, current_user, chat_id, payload)


@router.delete("/{chat_id}", response_model=SuccessResponse)
def delete_chat(
    chat_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    service.delete_chat(session, current_user, chat_id)
    return {"success": True}
