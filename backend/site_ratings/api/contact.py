"""Contact form endpoint: forwards submissions by email."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from site_ratings.api.dependencies import get_email_sender
from site_ratings.lib.mailer import EmailSender, build_contact_email
from site_ratings.schemas.contact import ContactResponse, ContactSubmission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contact", tags=["contact"])

DEFAULT_SUBJECT = "New contact form submission"


@router.post(
    "",
    response_model=ContactResponse,
    responses={502: {"model": ContactResponse, "description": "Email provider failure"}},
    summary="Send a contact form message",
)
async def submit_contact(
    submission: ContactSubmission,
    sender: EmailSender = Depends(get_email_sender),
):
    """Email the submission to the site owner with reply-to set to the visitor."""
    result = await sender.send_email(
        subject=submission.subject or f"{DEFAULT_SUBJECT} from {submission.name}",
        content=build_contact_email(submission.name, submission.email, submission.message),
        reply_to=submission.email,
    )

    if not result.success:
        logger.warning('Contact email failed: %s', result.error)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"success": False, "error": str(result.error) or "Failed to send email"},
        )

    return ContactResponse(success=True)
