# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (Postgres connection string)
      - SUPABASE_URL (also the default S3 gateway host)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - S3_ENDPOINT / S3_ACCESS_KEY_ID / S3_SECRET_ACCESS_KEY (signed storage URLs)
      - STRIPE_SECRET_KEY / STRIPE_WEBHOOK_SECRET (billing)
      - OPENAI_API_KEY (AI chat, images, transcription)
    """

    PROJECT_NAME: str = "Shipkit API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    SUPABASE_URL: str
    DATABASE_URL: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Payments
    STRIPE_SECRET_KEY: str | None = None
    STRIPE_WEBHOOK_SECRET: str | None = None

    # AI chat
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    OPENAI_AUDIO_MODEL: str = "whisper-1"

    # Storage (S3-compatible; defaults to <SUPABASE_URL>/storage/v1/s3)
    S3_ENDPOINT: str | None = None
    S3_REGION: str = "auto"
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: str | None = None
    AVATARS_BUCKET_NAME: str = "avatars"

    # Mail (SMTP)
    SMTP_HOST: str | None = None
    SMTP_PORT: int = 587
    SMTP_USERNAME: str | None = None
    SMTP_PASSWORD: str | None = None
    SMTP_FROM_EMAIL: str = "noreply@example.com"
    SMTP_FROM_NAME: str = "Shipkit"
    SMTP_USE_TLS: bool = True
    SMTP_USE_SSL: bool = False

    CONTACT_FORM_TO: str = "contact@example.com"
    CONTACT_FORM_SUBJECT: str = "New Contact Form Submission"

    # Public site URL used for redirects after checkout / portal
    BASE_URL: str | None = None

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()


def get_base_url() -> str:
    """Public base URL of the web app; localhost when not configured."""
    base_url = get_settings().BASE_URL
    if base_url:
        return base_url.rstrip("/")
    return "http://localhost:3000"


def get_s3_endpoint(settings: Settings) -> str:
    """S3_ENDPOINT, or the Supabase project's S3 gateway."""
    if settings.S3_ENDPOINT:
        return settings.S3_ENDPOINT
    return f"{settings.SUPABASE_URL.rstrip('/')}/storage/v1/s3"
