"""Tests for the notify helper."""

from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import async_mock_service

from custom_components.iman_tracker.notification_helper import (
    async_send_notification,
    split_notify_service,
)


def test_split_notify_service() -> None:
    """Bare service names default to the notify domain."""
    assert split_notify_service("mobile_app_phone") == ("notify", "mobile_app_phone")
    assert split_notify_service("notify.family") == ("notify", "family")


async def test_send_notification_calls_service(hass: HomeAssistant) -> None:
    """Title, message and extra data are passed to the notify service."""
    calls = async_mock_service(hass, "notify", "phone")

    await async_send_notification(
        hass, "phone", "Streak milestone", "7 day prayer streak", {"milestone": 7}
    )

    assert len(calls) == 1
    assert calls[0].data == {
        "title": "Streak milestone",
        "message": "7 day prayer streak",
        "data": {"milestone": 7},
    }


async def test_missing_service_is_skipped(hass: HomeAssistant) -> None:
    """An unavailable notify service only logs a warning."""
    await async_send_notification(hass, "notify.nobody", "Title", "Message")
