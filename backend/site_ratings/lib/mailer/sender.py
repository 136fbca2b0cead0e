"""EmailSender: send transactional email through the Resend API.

Messages go from a fixed sender to a fixed recipient and are tagged for
categorisation. Each call makes a single attempt; failures are returned as
an ``EmailResult`` rather than raised.
"""

import base64
import html
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from site_ratings import config
from site_ratings.lib.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
EMAIL_CATEGORY = "contact_form"


@dataclass
class EmailAttachment:
    """File attached to an outgoing email."""

    filename: str
    content: bytes


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[Exception] = None


class EmailSender:
    """Sends HTML email through Resend.

    The API key is read when sending, so a missing key fails that send
    only and never the application startup.
    """

    def __init__(
        self,
        api_url: str = RESEND_API_URL,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize EmailSender with addresses from configuration."""
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds
        self.from_email = config.get_email_from()
        self.recipient_email = config.get_email_to()
        self._transport = transport

    async def send_email(
        self,
        subject: str,
        content: str,
        reply_to: Optional[str] = None,
        attachments: Optional[List[EmailAttachment]] = None,
    ) -> EmailResult:
        """Send one email.

        Args:
            subject: Subject line
            content: HTML body
            reply_to: Optional reply-to address
            attachments: Optional files to attach

        Returns:
            EmailResult with the provider response on success, or the error.
        """
        try:
            api_key = config.require_resend_api_key()

            logger.info(
                "Attempting to send email",
                extra={
                    "subject": subject,
                    "reply_to": reply_to,
                    "attachment_count": len(attachments or []),
                },
            )

            payload = self._build_payload(subject, content, reply_to, attachments)
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {api_key}"},
                )

            if response.status_code >= 400:
                raise EmailDeliveryError(
                    self._error_message(response),
                    status_code=response.status_code,
                )

            data = response.json()
            logger.info('Email sent successfully: %s', data.get("id"))
            return EmailResult(success=True, data=data)

        except Exception as e:
            logger.error('Email sending failed: %s', e, exc_info=True)
            return EmailResult(success=False, error=e)

    def _build_payload(
        self,
        subject: str,
        content: str,
        reply_to: Optional[str],
        attachments: Optional[List[EmailAttachment]],
    ) -> Dict[str, Any]:
        """Build the Resend request body."""
        payload: Dict[str, Any] = {
            "from": self.from_email,
            "to": [self.recipient_email],
            "subject": subject,
            "html": content,
            "headers": {"X-Entity-Ref-ID": str(int(time.time() * 1000))},
            "tags": [{"name": "category", "value": EMAIL_CATEGORY}],
        }
        if reply_to:
            payload["reply_to"] = reply_to
        if attachments:
            payload["attachments"] = [
                {
                    "filename": attachment.filename,
                    "content": base64.b64encode(attachment.content).decode("ascii"),
                }
                for attachment in attachments
            ]
        return payload

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Email provider returned HTTP {response.status_code}"


def build_contact_email(name: str, email: str, message: str) -> str:
    """Render a contact form submission as an HTML email body."""
    paragraphs = "".join(
        f"<p>{html.escape(line)}</p>" for line in message.splitlines() if line.strip()
    )
    return (
        "<h2>New contact form submission</h2>"
        f"<p><strong>Name:</strong> {html.escape(name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(email)}</p>"
        "<hr>"
        f"{paragraphs}"
    )
