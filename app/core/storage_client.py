# app/core/storage_client.py
"""
Presigned URLs for private objects.

Talks to any S3-compatible endpoint; in production that is Supabase
Storage's S3 gateway (https://<project>.supabase.co/storage/v1/s3).
Presigning is local, so no request leaves the process until the browser
uses the URL.
"""

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from app.core.config import Settings, get_s3_endpoint

# Write access should expire quickly; reads can live for an hour.
UPLOAD_URL_EXPIRES_IN = 60
DOWNLOAD_URL_EXPIRES_IN = 3600


def s3_client(settings: Settings) -> BaseClient:
    """
    Build the S3 client from settings.

    Raises:
        RuntimeError: if the access key pair is missing.
    """
    if not (settings.S3_ACCESS_KEY_ID and settings.S3_SECRET_ACCESS_KEY):
        raise RuntimeError(
            "S3 credentials not configured. "
            "Set S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY in .env."
        )
    return boto3.client(
        "s3",
        endpoint_url=get_s3_endpoint(settings),
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.S3_ACCESS_KEY_ID,
        aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


class StorageProvider:
    """
    Signed upload/download URLs for objects in a bucket.

    Paths are relative to the bucket, e.g. "users/<uuid>/avatar.png".
    """

    def __init__(self, client: BaseClient):
        self.client = client

    def get_signed_upload_url(
        self,
        path: str,
        bucket: str | None,
        expires_in: int = UPLOAD_URL_EXPIRES_IN,
        content_type: str | None = None,
    ) -> str:
        """
        URL the browser can PUT the object to, valid for expires_in seconds.

        With content_type set, the upload must send the same Content-Type.

        Raises:
            ValueError: if no bucket is given.
        """
        if not bucket:
            raise ValueError("Bucket name not provided")

        params = {"Bucket": bucket, "Key": path}
        if content_type:
            params["ContentType"] = content_type

        return self.client.generate_presigned_url(
            "put_object",
            Params=params,
            ExpiresIn=expires_in,
        )

    def get_signed_download_url(
        self,
        path: str,
        bucket: str | None,
        expires_in: int = DOWNLOAD_URL_EXPIRES_IN,
    ) -> str:
        """
        Time-limited GET URL for a private object.

        Raises:
            ValueError: if no bucket is given.
        """
        if not bucket:
            raise ValueError("Bucket name not provided")

        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": path},
            ExpiresIn=expires_in,
        )
