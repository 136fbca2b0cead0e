"""Contract tests for POST /api/contact."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from site_ratings.lib.exceptions import EmailDeliveryError
from site_ratings.lib.mailer import EmailResult, EmailSender


@pytest.fixture
def valid_contact_payload():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "message": "I would like to book a consultation.",
    }


def make_sender(result):
    sender = MagicMock(spec=EmailSender)
    sender.send_email = AsyncMock(return_value=result)
    return sender


class TestContactEndpoint:

    def test_successful_submission(self, client, override_email_sender, valid_contact_payload):
        sender = override_email_sender(
            make_sender(EmailResult(success=True, data={"id": "email_123"}))
        )

        response = client.post("/api/contact", json=valid_contact_payload)

        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None}

        kwargs = sender.send_email.await_args.kwargs
        assert kwargs["reply_to"] == "jane@example.com"
        assert kwargs["subject"] == "New contact form submission from Jane Doe"
        assert "I would like to book a consultation." in kwargs["content"]

    def test_custom_subject(self, client, override_email_sender, valid_contact_payload):
        sender = override_email_sender(make_sender(EmailResult(success=True)))

        client.post("/api/contact", json={**valid_contact_payload, "subject": "Appointment"})

        assert sender.send_email.await_args.kwargs["subject"] == "Appointment"

    def test_provider_failure_is_502(self, client, override_email_sender, valid_contact_payload):
        override_email_sender(
            make_sender(
                EmailResult(
                    success=False,
                    error=EmailDeliveryError("Domain not verified", status_code=403),
                )
            )
        )

        response = client.post("/api/contact", json=valid_contact_payload)

        assert response.status_code == 502
        assert response.json() == {"success": False, "error": "Domain not verified"}

    def test_validation_error_is_400(self, client, override_email_sender):
        sender = override_email_sender(make_sender(EmailResult(success=True)))

        response = client.post(
            "/api/contact",
            json={"name": "Jane", "email": "not-an-address", "message": "   "},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation error"
        fields = {detail["field"] for detail in body["details"]}
        assert fields == {"email", "message"}
        sender.send_email.assert_not_awaited()
