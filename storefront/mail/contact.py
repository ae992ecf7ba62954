"""Contact form submissions relayed by email."""

import html
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from storefront.mail.client import ResendMailer

EMAIL_HEADING = "<h2>New Contact Form Submission</h2><br>"

FieldValue = Union[str, bool, int, float, None]


class FormField(BaseModel):
    """A field as configured in the CMS form slice."""

    model_config = ConfigDict(extra="allow")

    label: str
    input_type: Optional[str] = None
    field_type: Optional[str] = None
    required: Optional[bool] = None
    placeholder: Optional[str] = None


class ContactSubmission(BaseModel):
    """Submitted values keyed ``field-<index>``, plus the field definitions."""

    model_config = ConfigDict(populate_by_name=True)

    form_data: dict[str, FieldValue] = Field(..., alias="formData")
    form_fields: list[FormField] = Field(..., alias="formFields")


def _paragraph(label: str, value: Any) -> str:
    return f"<p><strong>{html.escape(label)}:</strong> {html.escape(str(value))}</p>"


def render_contact_email(
    form_data: Mapping[str, FieldValue], form_fields: Sequence[FormField]
) -> str:
    """HTML body listing every filled-in field in form order."""
    parts = [EMAIL_HEADING]
    for index, field in enumerate(form_fields):
        value = form_data.get(f"field-{index}")
        if value:
            parts.append(_paragraph(field.label, value))

    if "disclaimer" in form_data:
        parts.append(
            _paragraph("Disclaimer Accepted", "Yes" if form_data["disclaimer"] else "No")
        )
    return "".join(parts)


class ContactMailer:
    """Sends contact submissions to the site owner."""

    def __init__(
        self,
        mailer: ResendMailer,
        from_email: Optional[str],
        to_email: Optional[str],
        subject: str,
    ) -> None:
        self.mailer = mailer
        self.from_email = from_email
        self.to_email = to_email
        self.subject = subject

    @property
    def addresses_configured(self) -> bool:
        return bool(self.from_email and self.to_email)

    async def send(self, submission: ContactSubmission) -> dict[str, Any]:
        """Send ``submission``; replies go to the sending address.

        Raises:
            MailError: The mail API failed
        """
        return await self.mailer.send(
            sender=str(self.from_email),
            to=str(self.to_email),
            subject=self.subject,
            html=render_contact_email(submission.form_data, submission.form_fields),
            reply_to=self.from_email,
        )
