# app/routers/ai.py
from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.ai_client import ChatCompletionClient
from app.core.auth import require_auth
from app.core.providers import get_chat_client
from app.models.user import User
from app.schemas.ai_media import (
    ImageGenerate,
    ImageRead,
    TranscriptionFormat,
    TranscriptionRead,
)
from app.services.ai_media_service import AiMediaService

router = APIRouter(prefix="/ai", tags=["AI"])

service = AiMediaService()


@router.post("/image", response_model=ImageRead)
def generate_image(
    payload: ImageGenerate,
    current_user: User = Depends(require_auth),
    client: ChatCompletionClient = Depends(get_chat_client),
):
    """Generate images from a text prompt."""
    return service.generate_image(client, current_user, payload)


@router.post("/transcribe", response_model=TranscriptionRead)
def transcribe_audio(
    audio_file: UploadFile = File(...),
    language: str | None = Form(None, max_length=16),
    prompt: str | None = Form(None, max_length=1000),
    response_format: TranscriptionFormat = Form("json"),
    temperature: float = Form(0, ge=0, le=1),
    current_user: User = Depends(require_auth),
    client: ChatCompletionClient = Depends(get_chat_client),
):
    """Transcribe an uploaded audio file (multipart form)."""
    return service.transcribe(
        client,
        current_user,
        audio_file,
        language=language,
        prompt=prompt,
        response_format=response_format,
        temperature=temperature,
    )
