# app/services/storage_service.py
import logging

from fastapi import HTTPException, status

from app.core.storage_client import StorageProvider
from app.models.user import User

logger = logging.getLogger(__name__)


class StorageService:
    """Signed upload/download URLs; no local state."""

    def __init__(self, avatars_bucket: str):
        self.avatars_bucket = avatars_bucket

    def create_upload_url(
        self,
        storage: StorageProvider,
        path: str,
        bucket: str,
        content_type: str | None = None,
    ) -> dict:
        try:
            url = storage.get_signed_upload_url(path, bucket, content_type=content_type)
        except Exception:
            logger.exception("Failed to generate upload URL for %s/%s", bucket, path)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to generate upload URL",
            )
        return {"signed_upload_url": url}

    def create_download_url(self, storage: StorageProvider, path: str, bucket: str) -> dict:
        try:
            url = storage.get_signed_download_url(path, bucket)
        except Exception:
            logger.exception("Failed to generate download URL for %s/%s", bucket, path)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to generate download URL",
            )
        return {"signed_download_url": url}

    def create_avatar_upload_url(self, storage: StorageProvider, current_user: User) -> dict:
        """Upload URL for the caller's avatar, one object per user."""
        return self.create_upload_url(
            storage,
            f"{current_user.id}.png",
            self.avatars_bucket,
            content_type="image/png",
        )
