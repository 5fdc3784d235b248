"""
Notification Service

Preference-gated email alerts. Every send first looks up the recipient's
profile; a missing profile or a disabled preference skips the email.
"""
from typing import Optional

from storefront.errors import ERROR_NOTIFICATION_FAILED, NotificationError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import NotificationType
from storefront.services.email import EmailResult, EmailService
from storefront.services.money import Number
from storefront.services.repositories import ProfileRepository
from storefront.services.templates import (
    marketing_html,
    new_product_html,
    new_product_text,
    price_drop_html,
    price_drop_text,
)

logger = get_logger(__name__)


class NotificationService:
    """Sends alerts to users who opted in to them."""

    def __init__(self, profiles: ProfileRepository, email: EmailService):
        self.profiles = profiles
        self.email = email

    async def send_notification(
        self,
        notification_type: NotificationType,
        recipient_id: str,
        recipient_email: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> Optional[EmailResult]:
        """
        Send one notification if the recipient allows this type.

        Returns:
            EmailResult when sent, None when skipped

        Raises:
            NotificationError: the email provider rejected the message
        """
        preferences = await self.profiles.get_preferences(recipient_id)
        if preferences is None:
            logger.warning(f"Recipient profile not found: {sanitize_id_for_logging(recipient_id)}")
            return None

        if not preferences.allows(notification_type):
            logger.info(
                f"Notifications disabled for user {sanitize_id_for_logging(recipient_id)}, "
                f"type {notification_type.value}"
            )
            return None

        result = await self.email.send(recipient_email, subject, html, text)
        if not result.success:
            raise NotificationError(result.error or ERROR_NOTIFICATION_FAILED)

        logger.info(f"Notification {notification_type.value} sent to {sanitize_id_for_logging(recipient_id)}")
        return result

    async def send_price_drop_alert(
        self,
        product_name: str,
        old_price: Number,
        new_price: Number,
        recipient_id: str,
        recipient_email: str,
    ) -> Optional[EmailResult]:
        return await self.send_notification(
            NotificationType.PRICE_DROP,
            recipient_id,
            recipient_email,
            subject=f"Price Drop Alert: {product_name}",
            html=price_drop_html(product_name, old_price, new_price),
            text=price_drop_text(product_name, old_price, new_price),
        )

    async def send_new_product_alert(
        self,
        product_name: str,
        product_description: str,
        price: Number,
        recipient_id: str,
        recipient_email: str,
    ) -> Optional[EmailResult]:
        return await self.send_notification(
            NotificationType.NEW_PRODUCT,
            recipient_id,
            recipient_email,
            subject=f"New Product: {product_name}",
            html=new_product_html(product_name, product_description, price),
            text=new_product_text(product_name, product_description, price),
        )

    async def send_marketing_email(
        self,
        subject: str,
        content: str,
        recipient_id: str,
        recipient_email: str,
    ) -> Optional[EmailResult]:
        return await self.send_notification(
            NotificationType.MARKETING,
            recipient_id,
            recipient_email,
            subject=subject,
            html=marketing_html(content),
            text=content,
        )
