"""Transactional email through a third-party provider (Resend)."""

from .sender import EmailAttachment, EmailResult, EmailSender, build_contact_email

__all__ = ["EmailAttachment", "EmailResult", "EmailSender", "build_contact_email"]
