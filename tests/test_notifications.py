"""Tests for preference-gated notifications"""
from unittest.mock import AsyncMock, Mock

import pytest

from storefront.errors import NotificationError
from storefront.models import NotificationPreferences, NotificationType
from storefront.services.email import EmailResult
from storefront.services.notifications import NotificationService


@pytest.fixture
def profiles():
    repo = Mock()
    repo.get_preferences = AsyncMock(return_value=NotificationPreferences())
    return repo


@pytest.fixture
def email():
    service = Mock()
    service.send = AsyncMock(return_value=EmailResult(success=True, email_id="email-1"))
    return service


@pytest.fixture
def notifications(profiles, email):
    return NotificationService(profiles, email)


@pytest.mark.asyncio
async def test_missing_profile_skips(notifications, profiles, email):
    profiles.get_preferences = AsyncMock(return_value=None)

    result = await notifications.send_price_drop_alert("Lamp", 40, 30, "user-1", "a@example.com")

    assert result is None
    email.send.assert_not_called()


@pytest.mark.asyncio
async def test_price_drop_sent_by_default(notifications, email):
    result = await notifications.send_price_drop_alert("Lamp", 40, 30, "user-1", "a@example.com")

    assert result.email_id == "email-1"
    to, subject, html, text = email.send.call_args.args
    assert to == "a@example.com"
    assert subject == "Price Drop Alert: Lamp"
    assert "Save 25%!" in html
    assert "Now: $30.00" in text


@pytest.mark.asyncio
async def test_marketing_is_opt_in(notifications, profiles, email):
    """Test marketing email is skipped until the user opts in."""
    assert await notifications.send_marketing_email("Sale", "<p>50% off</p>", "user-1", "a@example.com") is None
    email.send.assert_not_called()

    profiles.get_preferences = AsyncMock(return_value=NotificationPreferences(marketing_emails=True))

    result = await notifications.send_marketing_email("Sale", "<p>50% off</p>", "user-1", "a@example.com")

    assert result.success is True
    assert "Unsubscribe" in email.send.call_args.args[2]


@pytest.mark.asyncio
async def test_disabled_new_listing_alerts(notifications, profiles, email):
    profiles.get_preferences = AsyncMock(return_value=NotificationPreferences(new_listing_alerts=False))

    result = await notifications.send_new_product_alert("Lamp", "Brass desk lamp", 30, "user-1", "a@example.com")

    assert result is None
    email.send.assert_not_called()


@pytest.mark.asyncio
async def test_order_update_follows_email_toggle(notifications, profiles, email):
    profiles.get_preferences = AsyncMock(return_value=NotificationPreferences(email_notifications=False))

    result = await notifications.send_notification(
        NotificationType.ORDER_UPDATE, "user-1", "a@example.com", "Shipped", "<p>Shipped</p>"
    )

    assert result is None
    email.send.assert_not_called()


@pytest.mark.asyncio
async def test_send_failure_raises(notifications, email):
    email.send = AsyncMock(return_value=EmailResult(success=False, error="HTTP 500"))

    with pytest.raises(NotificationError, match="HTTP 500"):
        await notifications.send_new_product_alert("Lamp", "Brass desk lamp", 30, "user-1", "a@example.com")
