"""Tests for contact form email rendering and relay."""

import pytest

from storefront.mail.contact import (
    EMAIL_HEADING,
    ContactMailer,
    ContactSubmission,
    FormField,
    render_contact_email,
)

FIELDS = [
    FormField(label="Name", input_type="text"),
    FormField(label="Email", input_type="email"),
    FormField(label="Message", field_type="textarea"),
]


def test_render_lists_filled_fields_in_order() -> None:
    html = render_contact_email(
        {"field-0": "Ada", "field-1": "", "field-2": "Hello!"}, FIELDS
    )

    assert html == (
        EMAIL_HEADING
        + "<p><strong>Name:</strong> Ada</p>"
        + "<p><strong>Message:</strong> Hello!</p>"
    )


def test_render_escapes_values() -> None:
    html = render_contact_email({"field-0": "<script>alert(1)</script>"}, FIELDS)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_render_disclaimer() -> None:
    accepted = render_contact_email({"disclaimer": True}, FIELDS)
    declined = render_contact_email({"disclaimer": False}, FIELDS)

    assert accepted.endswith("<p><strong>Disclaimer Accepted:</strong> Yes</p>")
    assert declined.endswith("<p><strong>Disclaimer Accepted:</strong> No</p>")
    assert "Disclaimer" not in render_contact_email({}, FIELDS)


def test_submission_uses_camel_case_aliases() -> None:
    submission = ContactSubmission.model_validate(
        {
            "formData": {"field-0": "Ada", "disclaimer": True},
            "formFields": [{"label": "Name", "input_type": "text", "extra": 1}],
        }
    )

    assert submission.form_data["disclaimer"] is True
    assert submission.form_fields[0].label == "Name"


@pytest.mark.asyncio
async def test_contact_mailer_sends_with_reply_to(mocker) -> None:
    mailer = mocker.Mock()
    mailer.send = mocker.AsyncMock(return_value={"id": "email_1"})
    contact = ContactMailer(mailer, "shop@shop.example", "owner@shop.example", "New message")
    submission = ContactSubmission(form_data={"field-0": "Ada"}, form_fields=FIELDS)

    assert await contact.send(submission) == {"id": "email_1"}

    mailer.send.assert_awaited_once_with(
        sender="shop@shop.example",
        to="owner@shop.example",
        subject="New message",
        html=EMAIL_HEADING + "<p><strong>Name:</strong> Ada</p>",
        reply_to="shop@shop.example",
    )


def test_addresses_configured(mocker) -> None:
    assert ContactMailer(mocker.Mock(), "a@x", "b@x", "S").addresses_configured
    assert not ContactMailer(mocker.Mock(), None, "b@x", "S").addresses_configured
