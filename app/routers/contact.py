# app/routers/contact.py
from fastapi import APIRouter

from app.core.config import get_settings
from app.schemas.contact import ContactForm, NewsletterSubscribe
from app.schemas.user import SuccessResponse
from app.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])

settings = get_settings()
service = ContactService(
    contact_to=settings.CONTACT_FORM_TO,
    contact_subject=settings.CONTACT_FORM_SUBJECT,
    app_name=settings.PROJECT_NAME,
)


@router.post("/contact", response_model=SuccessResponse)
def submit_contact_form(payload: ContactForm):
    """Public contact form; forwarded by mail to CONTACT_FORM_TO."""
    return service.submit_contact_form(payload)


@router.post("/newsletter", response_model=SuccessResponse)
def subscribe_to_newsletter(payload: NewsletterSubscribe):
    return service.subscribe_to_newsletter(payload)
