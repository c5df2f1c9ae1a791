# app/services/contact_service.py
import logging
import smtplib

from fastapi import HTTPException, status

from app.core.email_client import send_email
from app.schemas.contact import ContactForm, NewsletterSubscribe

logger = logging.getLogger(__name__)

MAIL_ERRORS = (RuntimeError, smtplib.SMTPException, OSError)


class ContactService:
    """Public contact form and newsletter sign-up, both mail-only."""

    def __init__(self, contact_to: str, contact_subject: str, app_name: str):
        self.contact_to = contact_to
        self.contact_subject = contact_subject
        self.app_name = app_name

    def submit_contact_form(self, payload: ContactForm) -> dict:
        """
        Forward a contact form submission to the site owner.

        Raises:
            HTTPException(500): if the mail could not be sent.
        """
        try:
            send_email(
                to_email=self.contact_to,
                subject=self.contact_subject,
                text_body=(
                    f"Name: {payload.name}\n\n"
                    f"Email: {payload.email}\n\n"
                    f"Message: {payload.message}"
                ),
            )
        except MAIL_ERRORS:
            logger.exception("Failed to send contact form mail")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to send email",
            )
        return {"success": True}

    def subscribe_to_newsletter(self, payload: NewsletterSubscribe) -> dict:
        """Send the sign-up confirmation; a mail failure is reported, not raised."""
        try:
            send_email(
                to_email=payload.email,
                subject=f"Welcome to the {self.app_name} newsletter",
                text_body=(
                    f"Thanks for subscribing to the {self.app_name} newsletter "
                    f"with {payload.email}."
                ),
                html_body=(
                    f"<p>Thanks for subscribing to the <b>{self.app_name}</b> "
                    f"newsletter with {payload.email}.</p>"
                ),
            )
        except MAIL_ERRORS:
            logger.exception("Failed to send newsletter confirmation to %s", payload.email)
            return {"success": False}
        return {"success": True}
