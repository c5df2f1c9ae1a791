# app/services/ai_media_service.py
import logging

import openai
from fastapi import HTTPException, UploadFile, status

from app.core.ai_client import ChatCompletionClient
from app.models.user import User
from app.schemas.ai_media import ImageGenerate

logger = logging.getLogger(__name__)


class AiMediaService:
    """Image generation and audio transcription; nothing is persisted."""

    def generate_image(
        self,
        client: ChatCompletionClient,
        current_user: User,
        payload: ImageGenerate,
    ) -> dict:
        try:
            return client.generate_image(
                payload.prompt,
                size=payload.size,
                n=payload.n,
                quality=payload.quality,
                style=payload.style,
            )
        except openai.OpenAIError:
            logger.exception("Image generation failed for user %s", current_user.id)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Image generation failed",
            )

    def transcribe(
        self,
        client: ChatCompletionClient,
        current_user: User,
        audio_file: UploadFile,
        language: str | None = None,
        prompt: str | None = None,
        response_format: str = "json",
        temperature: float = 0,
    ) -> dict:
        """
        Transcribe an uploaded audio file.

        Raises:
            HTTPException(400): if the upload is empty.
            HTTPException(502): if the API call fails.
        """
        content = audio_file.file.read()
        if not content:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Audio file is empty",
            )

        try:
            return client.transcribe_audio(
                (audio_file.filename or "audio", content, audio_file.content_type),
                language=language,
                prompt=prompt,
                response_format=response_format,
                temperature=temperature,
            )
        except openai.OpenAIError:
            logger.exception("Transcription failed for user %s", current_user.id)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Transcription failed",
            )
