# File: notification_helper.py
"""Sends notifications using Home Assistant's notify services.

Used for streak milestone messages. The notify service is configured per entry
(e.g. ``notify.mobile_app_phone`` or just ``mobile_app_phone``). Sending runs as
a fire-and-forget background task, so nothing here may raise.
"""

from __future__ import annotations

from typing import Any, Optional

from homeassistant.core import HomeAssistant

from . import const


def split_notify_service(notify_service: str) -> tuple[str, str]:
    """Return (domain, service) for a notify service name.

    Examples:
        split_notify_service("mobile_app_phone") → ("notify", "mobile_app_phone")
        split_notify_service("notify.family") → ("notify", "family")
    """
    if const.DISPLAY_DOT not in notify_service:
        return const.NOTIFY_DOMAIN, notify_service
    domain, service = notify_service.split(const.DISPLAY_DOT, 1)
    return domain, service


async def async_send_notification(
    hass: HomeAssistant,
    notify_service: str,
    title: str,
    message: str,
    extra_data: Optional[dict[str, Any]] = None,
) -> None:
    """Send a notification using the specified notify service.

    Gracefully handles missing notification services. If the service doesn't
    exist, logs a warning and returns without raising an exception.
    """
    domain, service = split_notify_service(notify_service)

    if not hass.services.has_service(domain, service):
        const.LOGGER.warning(
            "WARNING: Notification service '%s.%s' not available - skipping "
            "notification. Configure the '%s' integration to receive streak "
            "milestone messages",
            domain,
            service,
            domain,
        )
        return

    payload: dict[str, Any] = {const.NOTIFY_TITLE: title, const.NOTIFY_MESSAGE: message}
    if extra_data:
        payload[const.NOTIFY_DATA] = dict(extra_data)

    try:
        await hass.services.async_call(domain, service, payload, blocking=True)
        const.LOGGER.debug("DEBUG: Notification sent via '%s.%s'", domain, service)

    except Exception as err:  # pylint: disable=broad-exception-caught
        # Runs in a fire-and-forget background task; an escaping exception
        # would surface as "Task exception was never retrieved".
        const.LOGGER.error(
            "ERROR: Unexpected error sending notification via '%s.%s': %s",
            domain,
            service,
            err,
        )
