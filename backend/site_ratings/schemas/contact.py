"""Pydantic schemas for the contact form endpoint."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ContactSubmission(BaseModel):
    """Request schema for POST /api/contact."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    email: str = Field(..., min_length=3, max_length=320, examples=["jane@example.com"])
    message: str = Field(..., min_length=1, max_length=10000)
    subject: Optional[str] = Field(default=None, max_length=255)

    @field_validator("message")
    @classmethod
    def validate_message_not_empty(cls, v: str) -> str:
        """Ensure message is not empty after stripping whitespace."""
        if not v.strip():
            raise ValueError("Message cannot be empty or whitespace only")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_shape(cls, v: str) -> str:
        """Light check only; the provider validates reply-to addresses."""
        v = v.strip()
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v


class ContactResponse(BaseModel):
    """Response schema for POST /api/contact."""

    success: bool
    error: Optional[str] = None
