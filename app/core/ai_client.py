# app/core/ai_client.py
from typing import Any

from openai import OpenAI

SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Provide clear, concise, "
    "and accurate responses to user questions."
)


class ChatCompletionClient:
    """
    Chat completions, image generation and audio transcription through
    the OpenAI API.

    Built once at startup; the underlying OpenAI client keeps its own
    connection pool.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 1000,
        temperature: float = 0.7,
        image_model: str = "dall-e-3",
        audio_model: str = "whisper-1",
        client: OpenAI | None = None,
    ):
        self.client = client or OpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.image_model = image_model
        self.audio_model = audio_model

    def generate_chat_response(self, messages: list[dict[str, Any]]) -> str:
        """
        Ask the model for the next assistant message.

        Only role/content are sent. The system prompt is prepended when
        the transcript does not already carry a system message.

        Raises:
            openai.OpenAIError: on any API failure (no retry here).
        """
        core_messages = [
            {"role": m["role"], "content": m["content"]} for m in messages
        ]
        if not any(m["role"] == "system" for m in core_messages):
            core_messages.insert(0, {"role": "system", "content": SYSTEM_PROMPT})

        response = self.client.chat.completions.create(
            model=self.model,
            messages=core_messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        content = response.choices[0].message.content
        return (content or "").strip()

    def generate_image(
        self,
        prompt: str,
        size: str = "1024x1024",
        n: int = 1,
        quality: str = "standard",
        style: str = "vivid",
    ) -> dict[str, Any]:
        """
        Generate n images for the prompt.

        Returns {"images": [{"url": ..., "base64": ...}]}; url is "" when
        the API only sent base64 data.
        """
        response = self.client.images.generate(
            model=self.image_model,
            prompt=prompt,
            size=size,
            n=n,
            quality=quality,
            style=style,
        )
        return {
            "images": [
                {"url": image.url or "", "base64": image.b64_json}
                for image in response.data or []
            ]
        }

    def transcribe_audio(
        self,
        file: tuple[str, bytes, str | None],
        language: str | None = None,
        prompt: str | None = None,
        response_format: str = "json",
        temperature: float = 0,
    ) -> dict[str, Any]:
        """
        Transcribe an audio file given as (filename, content, content_type).

        text/srt/vtt formats come back as a plain string; only
        verbose_json carries language, duration and segments.
        """
        params: dict[str, Any] = {
            "model": self.audio_model,
            "file": file,
            "response_format": response_format,
            "temperature": temperature,
        }
        if language:
            params["language"] = language
        if prompt:
            params["prompt"] = prompt

        result = self.client.audio.transcriptions.create(**params)

        if isinstance(result, str):
            return {"text": result}

        segments = getattr(result, "segments", None)
        return {
            "text": result.text,
            "language": getattr(result, "language", None),
            "duration": getattr(result, "duration", None),
            "segments": [s.model_dump() for s in segments] if segments else None,
        }
