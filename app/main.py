# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.ai_client import ChatCompletionClient
from app.core.config import get_settings
from app.core.payments_client import StripePaymentsProvider
from app.core.storage_client import StorageProvider, s3_client
from app.database import build_engine, create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import purchase as _purchase_models  # noqa: F401
from app.models import ai_chat as _ai_chat_models  # noqa: F401
from app.models import organization as _organization_models  # noqa: F401

# Routers
from app.routers.users import router as users_router
from app.routers.admin_users import router as admin_users_router
from app.routers.ai_chats import router as ai_chats_router
from app.routers.ai import router as ai_router
from app.routers.payments import router as payments_router
from app.routers.payments import webhook_router
from app.routers.storage import router as storage_router
from app.routers.contact import router as contact_router
from app.routers.organizations import router as organizations_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Build the DB engine, verify connectivity and create tables.
      - Build one client per external service and park it on app.state.
        A service without credentials stays None and its routes answer 503.

    Shutdown:
      - Dispose the engine's connection pool.
    """
    logger.info("Startup: connecting to Postgres...")
    engine = build_engine(settings.DATABASE_URL)
    try:
        create_db_and_tables(engine)
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    app.state.engine = engine

    app.state.payments = None
    if settings.STRIPE_SECRET_KEY:
        app.state.payments = StripePaymentsProvider(
            settings.STRIPE_SECRET_KEY,
            settings.STRIPE_WEBHOOK_SECRET,
        )
    else:
        logger.warning("Startup: STRIPE_SECRET_KEY not set, payments disabled.")

    app.state.chat_client = None
    if settings.OPENAI_API_KEY:
        app.state.chat_client = ChatCompletionClient(
            settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            image_model=settings.OPENAI_IMAGE_MODEL,
            audio_model=settings.OPENAI_AUDIO_MODEL,
        )
    else:
        logger.warning("Startup: OPENAI_API_KEY not set, AI features disabled.")

    app.state.storage = None
    if settings.S3_ACCESS_KEY_ID and settings.S3_SECRET_ACCESS_KEY:
        app.state.storage = StorageProvider(s3_client(settings))
    else:
        logger.warning("Startup: S3 credentials not set, storage disabled.")

    yield

    engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(admin_users_router, prefix=settings.API_V1_STR)
app.include_router(ai_chats_router, prefix=settings.API_V1_STR)
app.include_router(ai_router, prefix=settings.API_V1_STR)
app.include_router(payments_router, prefix=settings.API_V1_STR)
app.include_router(webhook_router, prefix=settings.API_V1_STR)
app.include_router(storage_router, prefix=settings.API_V1_STR)
app.include_router(contact_router, prefix=settings.API_V1_STR)
app.include_router(organizations_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "shipkit-api"}
