"""
Transactional email via the Resend HTTP API.

Without an API key (or with SIMULATE_EMAILS=true) messages are logged
instead of sent, and reported as successful.
"""
from dataclasses import dataclass
from typing import Optional

import httpx

from storefront.config import EmailConfig
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import OrderDetails
from storefront.services.templates import (
    order_confirmation_html,
    order_confirmation_subject,
    order_confirmation_text,
)

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


@dataclass
class EmailResult:
    """Outcome of a send attempt."""

    success: bool
    email_id: Optional[str] = None
    error: Optional[str] = None
    simulated: bool = False


class EmailService:
    """Sends emails through Resend."""

    def __init__(self, config: Optional[EmailConfig] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config or EmailConfig.from_env()
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(10.0, connect=5.0),
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def send(self, to: str, subject: str, html: str, text: Optional[str] = None) -> EmailResult:
        """Send one email. Never raises; failures come back as EmailResult(success=False)."""
        if self.config.should_simulate:
            logger.info(
                f"Simulated email to {sanitize_string_for_logging(to)} "
                f"from {self.config.from_address}: {sanitize_string_for_logging(subject, 100)}"
            )
            return EmailResult(success=True, simulated=True)

        payload = {
            "from": self.config.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
            "reply_to": self.config.reply_to,
        }
        if text:
            payload["text"] = text

        try:
            client = await self._get_http_client()
            response = await client.post(
                RESEND_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.config.api_key}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Resend rejected email ({e.response.status_code}): {e.response.text[:200]}")
            return EmailResult(success=False, error=f"HTTP {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error sending email via Resend: {e}")
            return EmailResult(success=False, error=str(e))

        logger.info(f"Email sent to {sanitize_string_for_logging(to)}: {data.get('id')}")
        return EmailResult(success=True, email_id=data.get("id"))

    async def send_order_confirmation(self, order: OrderDetails) -> bool:
        """Email the order confirmation. False when the customer left no email or sending failed."""
        if not order.customer.email:
            logger.info(f"No email provided for order confirmation {order.order_id}")
            return False

        result = await self.send(
            to=order.customer.email,
            subject=order_confirmation_subject(order),
            html=order_confirmation_html(order),
            text=order_confirmation_text(order),
        )
        return result.success
