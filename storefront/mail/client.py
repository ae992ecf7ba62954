"""Transactional email API client (Resend)."""

import logging
from collections.abc import Sequence
from typing import Any, Optional

import httpx

from storefront.core.errors import StorefrontError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com"


class MailError(StorefrontError):
    """Raised when the mail API refuses or fails to send a message."""


class ResendMailer:
    """Sends email through the Resend REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        api_url: str = RESEND_API_URL,
    ) -> None:
        self.http_client = http_client
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def send(
        self,
        sender: str,
        to: str | Sequence[str],
        subject: str,
        html: str,
        reply_to: Optional[str] = None,
    ) -> dict[str, Any]:
        """Send one HTML email and return the API's response body.

        Raises:
            MailError: The API could not be reached or rejected the message
        """
        payload: dict[str, Any] = {
            "from": sender,
            "to": [to] if isinstance(to, str) else list(to),
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            response = await self.http_client.post(
                f"{self.api_url}/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise MailError(f"Mail API request failed: {e}") from e

        if response.is_error:
            raise MailError(
                f"Mail API returned {response.status_code}: {response.text}"
            )
        return dict(response.json())
