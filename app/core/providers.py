# app/core/providers.py
"""
FastAPI dependencies handing out the external clients built at startup.

app.main.lifespan stores one instance of each on app.state; a missing
client means the integration is not configured for this deployment.
"""

from fastapi import HTTPException, Request, status

from app.core.ai_client import ChatCompletionClient
from app.core.payments_client import StripePaymentsProvider
from app.core.storage_client import StorageProvider


def _require_state(request: Request, name: str, label: str):
    client = getattr(request.app.state, name, None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} is not configured",
        )
    return client


def get_payments_provider(request: Request) -> StripePaymentsProvider:
    return _require_state(request, "payments", "Payments")


def get_chat_client(request: Request) -> ChatCompletionClient:
    return _require_state(request, "chat_client", "AI")


def get_storage_provider(request: Request) -> StorageProvider:
    return _require_state(request, "storage", "Storage")
