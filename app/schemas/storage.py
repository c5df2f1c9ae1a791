# app/schemas/storage.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class SignedUrlRequest(SQLModel):
    """
    Object location inside a storage bucket.

    path is relative to the bucket, e.g. "users/<uuid>/avatar.png".
    """

    model_config = ConfigDict(extra="forbid")

    path: str = Field(min_length=1, max_length=1024)
    bucket: str = Field(min_length=1, max_length=63)

    @field_validator("path")
    @classmethod
    def strip_leading_slash(cls, v: str) -> str:
        v = v.strip().lstrip("/")
        if not v:
            raise ValueError("path cannot be empty")
        return v


class SignedUploadUrlRead(SQLModel):
    signed_upload_url: str


class SignedDownloadUrlRead(SQLModel):
    signed_download_url: str
