"""Contact form endpoint."""

from fastapi import APIRouter, Depends
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from storefront.api.contact.models import ContactResponse
from storefront.api.dependencies import get_contact_mailer
from storefront.core.errors import APIError
from storefront.core.logging import get_logger
from storefront.mail.client import MailError
from storefront.mail.contact import ContactMailer, ContactSubmission

router = APIRouter(prefix="/contact", tags=["contact"])
logger = get_logger(__name__)


@router.post("", response_model=ContactResponse)
async def submit_contact_form(
    submission: ContactSubmission,
    mailer: ContactMailer = Depends(get_contact_mailer),
) -> ContactResponse:
    """
    Relay a contact form submission to the site owner by email.

    Each configured field is included with its label when the visitor
    filled it in.
    """
    if not mailer.mailer.configured:
        logger.error("contact_mail_not_configured", missing="RESEND_API_KEY")
        raise APIError(HTTP_500_INTERNAL_SERVER_ERROR, "Resend API key not configured")

    if not mailer.addresses_configured:
        logger.error("contact_mail_not_configured", missing="FROM_EMAIL/TO_EMAIL")
        raise APIError(HTTP_500_INTERNAL_SERVER_ERROR, "Email configuration missing")

    try:
        result = await mailer.send(submission)
    except MailError as e:
        logger.error("contact_mail_failed", error=str(e))
        raise APIError(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send email") from e

    return ContactResponse(success=True, data={"id": result.get("id")})
