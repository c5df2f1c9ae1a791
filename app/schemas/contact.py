# app/schemas/contact.py
from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ContactForm(SQLModel):
    """Public contact form submission."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    message: str = Field(min_length=10, max_length=5000)

    @field_validator("name", "message")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class NewsletterSubscribe(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
