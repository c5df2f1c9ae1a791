# app/routers/storage.py
from fastapi import APIRouter, Depends

from app.core.auth import require_auth
from app.core.config import get_settings
from app.core.providers import get_storage_provider
from app.core.storage_client import StorageProvider
from app.schemas.storage import (
    SignedDownloadUrlRead,
    SignedUploadUrlRead,
    SignedUrlRequest,
)
from app.services.storage_service import StorageService

router = APIRouter(
    prefix="/storage",
    tags=["Storage"],
    dependencies=[Depends(require_auth)],
)

service = StorageService(get_settings().AVATARS_BUCKET_NAME)


@router.post("/upload-url", response_model=SignedUploadUrlRead)
def create_upload_url(
    payload: SignedUrlRequest,
    storage: StorageProvider = Depends(get_storage_provider),
):
    """Short-lived signed URL for uploading an object."""
    return service.create_upload_url(storage, payload.path, payload.bucket)


@router.post("/download-url", response_model=SignedDownloadUrlRead)
def create_download_url(
    payload: SignedUrlRequest,
    storage: StorageProvider = Depends(get_storage_provider),
):
    """Signed URL for reading a private object (valid for one hour)."""
    return service.create_download_url(storage, payload.path, payload.bucket)
