# app/schemas/ai_media.py
from typing import Any, Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field

ImageSize = Literal["256x256", "512x512", "1024x1024", "1792x1024", "1024x1792"]
ImageQuality = Literal["standard", "hd"]
ImageStyle = Literal["vivid", "natural"]
TranscriptionFormat = Literal["json", "text", "srt", "verbose_json", "vtt"]


class ImageGenerate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(min_length=1, max_length=1000)
    size: ImageSize = "1024x1024"
    n: int = Field(default=1, ge=1, le=4)
    quality: ImageQuality = "standard"
    style: ImageStyle = "vivid"


class GeneratedImage(SQLModel):
    url: str
    base64: str | None = None


class ImageRead(SQLModel):
    images: list[GeneratedImage]


class TranscriptionRead(SQLModel):
    """
    Transcribed text. language, duration and segments are only filled
    for the verbose_json format.
    """

    text: str
    language: str | None = None
    duration: float | None = None
    segments: list[dict[str, Any]] | None = None
