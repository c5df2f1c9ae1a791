from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from app.core.config import Settings
from app.core.storage_client import (
    DOWNLOAD_URL_EXPIRES_IN,
    UPLOAD_URL_EXPIRES_IN,
    StorageProvider,
    s3_client,
)


class TestStorageEndpoints:
    def test_upload_url(self, client, storage, user):
        storage.get_signed_upload_url.return_value = "https://storage.example.com/upload?token=t"

        response = client.post(
            "/api/v1/storage/upload-url",
            json={"path": "/users/avatar.png", "bucket": "avatars"},
        )

        assert response.status_code == 200
        assert response.json() == {"signed_upload_url": "https://storage.example.com/upload?token=t"}
        storage.get_signed_upload_url.assert_called_once_with("users/avatar.png", "avatars", content_type=None)

    def test_download_url(self, client, storage, user):
        storage.get_signed_download_url.return_value = "https://storage.example.com/object?token=t"

        response = client.post(
            "/api/v1/storage/download-url",
            json={"path": "reports/q1.pdf", "bucket": "documents"},
        )

        assert response.status_code == 200
        assert response.json() == {"signed_download_url": "https://storage.example.com/object?token=t"}

    def test_missing_bucket_rejected(self, client, storage, user):
        response = client.post("/api/v1/storage/upload-url", json={"path": "a.png"})

        assert response.status_code == 422
        storage.get_signed_upload_url.assert_not_called()

    def test_provider_failure(self, client, storage, user):
        storage.get_signed_download_url.side_effect = RuntimeError("bucket not found")

        response = client.post(
            "/api/v1/storage/download-url",
            json={"path": "a.png", "bucket": "missing"},
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to generate download URL"

    def test_requires_login(self, client, login):
        login(None)

        response = client.post("/api/v1/storage/upload-url", json={"path": "a.png", "bucket": "avatars"})

        assert response.status_code == 401

    def test_storage_not_configured(self, client, user):
        client.app.state.storage = None

        response = client.post("/api/v1/storage/upload-url", json={"path": "a.png", "bucket": "avatars"})

        assert response.status_code == 503


class TestStorageProvider:
    def _provider(self):
        s3 = MagicMock()
        s3.generate_presigned_url.return_value = "https://s3.example.com/signed"
        return StorageProvider(s3), s3

    def test_upload_url_expires_after_one_minute(self):
        provider, s3 = self._provider()

        url = provider.get_signed_upload_url("a.png", "avatars")

        assert url == "https://s3.example.com/signed"
        s3.generate_presigned_url.assert_called_once_with(
            "put_object",
            Params={"Bucket": "avatars", "Key": "a.png"},
            ExpiresIn=UPLOAD_URL_EXPIRES_IN,
        )
        assert UPLOAD_URL_EXPIRES_IN == 60

    def test_upload_url_custom_lifetime_and_content_type(self):
        provider, s3 = self._provider()

        provider.get_signed_upload_url("a.png", "avatars", expires_in=5, content_type="image/png")

        s3.generate_presigned_url.assert_called_once_with(
            "put_object",
            Params={"Bucket": "avatars", "Key": "a.png", "ContentType": "image/png"},
            ExpiresIn=5,
        )

    def test_download_url_expires_after_one_hour(self):
        provider, s3 = self._provider()

        provider.get_signed_download_url("reports/q1.pdf", "documents")

        s3.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "documents", "Key": "reports/q1.pdf"},
            ExpiresIn=DOWNLOAD_URL_EXPIRES_IN,
        )
        assert DOWNLOAD_URL_EXPIRES_IN == 3600

    @pytest.mark.parametrize("bucket_name", [None, ""])
    def test_bucket_required(self, bucket_name):
        provider, s3 = self._provider()

        with pytest.raises(ValueError):
            provider.get_signed_upload_url("a.png", bucket_name)
        with pytest.raises(ValueError):
            provider.get_signed_download_url("a.png", bucket_name)
        s3.generate_presigned_url.assert_not_called()


class TestS3Client:
    def _settings(self, **overrides):
        values = {
            "S3_ENDPOINT": "https://project.supabase.co/storage/v1/s3",
            "S3_REGION": "eu-central-1",
            "S3_ACCESS_KEY_ID": "test-access-key",
            "S3_SECRET_ACCESS_KEY": "test-secret-key",
        }
        values.update(overrides)
        return Settings(**values)

    def test_presigned_upload_carries_expiry(self):
        # Presigning is computed locally; no request is sent.
        provider = StorageProvider(s3_client(self._settings()))

        url = provider.get_signed_upload_url("users/a.png", "avatars")

        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        assert parsed.netloc == "project.supabase.co"
        assert parsed.path == "/storage/v1/s3/avatars/users/a.png"
        assert query["X-Amz-Expires"] == ["60"]
        assert query["X-Amz-Credential"][0].startswith("test-access-key/")

    def test_missing_credentials(self):
        with pytest.raises(RuntimeError, match="S3 credentials not configured"):
            s3_client(self._settings(S3_SECRET_ACCESS_KEY=None))

    def test_endpoint_defaults_to_supabase_gateway(self):
        settings = self._settings(S3_ENDPOINT=None, SUPABASE_URL="https://other.supabase.co/")
        provider = StorageProvider(s3_client(settings))

        url = provider.get_signed_download_url("q1.pdf", "documents")

        parsed = urlparse(url)
        assert parsed.netloc == "other.supabase.co"
        assert parsed.path == "/storage/v1/s3/documents/q1.pdf"
        assert parse_qs(parsed.query)["X-Amz-Expires"] == ["3600"]
