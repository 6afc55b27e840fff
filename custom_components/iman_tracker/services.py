# File: services.py
"""Defines custom services for the Iman Tracker integration.

These services allow logging activity through scripts, automations and
dashboard buttons. Every service accepts an optional ``config_entry_id`` to
pick the user; without it the first loaded entry is used.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Optional

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import ImanTrackerCoordinator

# --- Service Schemas ---
_ENTRY_FIELD = {vol.Optional(const.FIELD_CONFIG_ENTRY_ID): cv.string}

MARK_PRAYER_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_PRAYER): vol.In(const.FARD_PRAYERS),
        vol.Optional(const.FIELD_COMPLETED, default=True): cv.boolean,
    }
)

COUNT_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Optional(const.FIELD_COUNT, default=1): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
    }
)

ADD_DHIKR_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_COUNT): vol.All(vol.Coerce(int), vol.Range(min=0)),
    }
)

LOG_QURAN_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Optional(const.FIELD_PAGES, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(const.FIELD_VERSES, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(const.FIELD_MEMORIZED, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
    }
)

RECORD_WORKOUT_SCHEMA = vol.Schema(_ENTRY_FIELD)

SET_GOAL_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_CATEGORY): cv.string,
        vol.Required(const.FIELD_GOAL): cv.string,
        vol.Required(const.FIELD_VALUE): vol.Coerce(int),
    }
)

ADJUST_QADA_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_PRAYER): vol.In(const.FARD_PRAYERS),
        vol.Required(const.FIELD_DELTA): vol.Coerce(int),
    }
)

RESET_STREAK_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Required(const.FIELD_STREAK_TYPE): vol.In(const.STREAK_TYPES),
    }
)

SYNC_NOW_SCHEMA = vol.Schema(
    {
        **_ENTRY_FIELD,
        vol.Optional(const.FIELD_DIRECTION, default=const.SYNC_DIRECTION_PUSH): vol.In(
            [const.SYNC_DIRECTION_PUSH, const.SYNC_DIRECTION_PULL]
        ),
    }
)


def get_coordinator(
    hass: HomeAssistant, entry_id: Optional[str] = None
) -> Optional[ImanTrackerCoordinator]:
    """Return the coordinator of an entry, or of the first loaded entry.

    Raises:
        HomeAssistantError: An explicit entry id is not loaded.
    """
    domain_entries: dict[str, Any] = hass.data.get(const.DOMAIN) or {}
    if entry_id:
        if entry_id not in domain_entries:
            raise HomeAssistantError(const.ERROR_ENTRY_NOT_FOUND_FMT.format(entry_id))
        return domain_entries[entry_id][const.COORDINATOR]

    first_entry_id = next(iter(domain_entries), None)
    if first_entry_id is None:
        return None
    return domain_entries[first_entry_id][const.COORDINATOR]


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Iman Tracker services."""

    async def _async_run(
        call: ServiceCall,
        label: str,
        action: Callable[[ImanTrackerCoordinator], Awaitable[Any]],
    ) -> None:
        """Resolve the coordinator and run an action, mapping bad input errors."""
        coordinator = get_coordinator(hass, call.data.get(const.FIELD_CONFIG_ENTRY_ID))
        if coordinator is None:
            const.LOGGER.warning("WARNING: %s: %s", label, const.MSG_NO_ENTRY_FOUND)
            return
        try:
            await action(coordinator)
        except ValueError as err:
            const.LOGGER.warning("WARNING: %s: %s", label, err)
            raise HomeAssistantError(str(err)) from err

    async def handle_mark_prayer(call: ServiceCall) -> None:
        """Handle marking a fard prayer."""
        await _async_run(
            call,
            "Mark Prayer",
            lambda coordinator: coordinator.async_mark_prayer(
                call.data[const.FIELD_PRAYER], call.data[const.FIELD_COMPLETED]
            ),
        )

    async def handle_log_sunnah(call: ServiceCall) -> None:
        """Handle logging sunnah prayers."""
        await _async_run(
            call,
            "Log Sunnah",
            lambda coordinator: coordinator.async_log_sunnah(
                call.data[const.FIELD_COUNT]
            ),
        )

    async def handle_log_tahajjud(call: ServiceCall) -> None:
        """Handle logging tahajjud nights."""
        await _async_run(
            call,
            "Log Tahajjud",
            lambda coordinator: coordinator.async_log_tahajjud(
                call.data[const.FIELD_COUNT]
            ),
        )

    async def handle_add_dhikr(call: ServiceCall) -> None:
        """Handle adding dhikr."""
        await _async_run(
            call,
            "Add Dhikr",
            lambda coordinator: coordinator.async_add_dhikr(
                call.data[const.FIELD_COUNT]
            ),
        )

    async def handle_log_quran(call: ServiceCall) -> None:
        """Handle logging Quran reading and memorization."""
        await _async_run(
            call,
            "Log Quran",
            lambda coordinator: coordinator.async_log_quran(
                pages=call.data[const.FIELD_PAGES],
                verses=call.data[const.FIELD_VERSES],
                memorized=call.data[const.FIELD_MEMORIZED],
            ),
        )

    async def handle_log_fasting_day(call: ServiceCall) -> None:
        """Handle logging fasted days."""
        await _async_run(
            call,
            "Log Fasting Day",
            lambda coordinator: coordinator.async_log_fasting_day(
                call.data[const.FIELD_COUNT]
            ),
        )

    async def handle_record_workout(call: ServiceCall) -> None:
        """Handle recording a workout."""
        await _async_run(
            call,
            "Record Workout",
            lambda coordinator: coordinator.async_record_workout(),
        )

    async def handle_set_goal(call: ServiceCall) -> None:
        """Handle changing a goal target."""
        await _async_run(
            call,
            "Set Goal",
            lambda coordinator: coordinator.async_set_goal(
                call.data[const.FIELD_CATEGORY],
                call.data[const.FIELD_GOAL],
                call.data[const.FIELD_VALUE],
            ),
        )

    async def handle_adjust_qada(call: ServiceCall) -> None:
        """Handle adjusting a missed-prayer counter."""
        await _async_run(
            call,
            "Adjust Qada",
            lambda coordinator: coordinator.async_adjust_qada(
                call.data[const.FIELD_PRAYER], call.data[const.FIELD_DELTA]
            ),
        )

    async def handle_reset_streak(call: ServiceCall) -> None:
        """Handle resetting a streak."""
        await _async_run(
            call,
            "Reset Streak",
            lambda coordinator: coordinator.async_reset_streak(
                call.data[const.FIELD_STREAK_TYPE]
            ),
        )

    async def handle_sync_now(call: ServiceCall) -> None:
        """Handle an on-demand sync."""
        await _async_run(
            call,
            "Sync Now",
            lambda coordinator: coordinator.async_sync_now(
                call.data[const.FIELD_DIRECTION]
            ),
        )

    registrations = [
        (const.SERVICE_MARK_PRAYER, handle_mark_prayer, MARK_PRAYER_SCHEMA),
        (const.SERVICE_LOG_SUNNAH, handle_log_sunnah, COUNT_SCHEMA),
        (const.SERVICE_LOG_TAHAJJUD, handle_log_tahajjud, COUNT_SCHEMA),
        (const.SERVICE_ADD_DHIKR, handle_add_dhikr, ADD_DHIKR_SCHEMA),
        (const.SERVICE_LOG_QURAN, handle_log_quran, LOG_QURAN_SCHEMA),
        (const.SERVICE_LOG_FASTING_DAY, handle_log_fasting_day, COUNT_SCHEMA),
        (const.SERVICE_RECORD_WORKOUT, handle_record_workout, RECORD_WORKOUT_SCHEMA),
        (const.SERVICE_SET_GOAL, handle_set_goal, SET_GOAL_SCHEMA),
        (const.SERVICE_ADJUST_QADA, handle_adjust_qada, ADJUST_QADA_SCHEMA),
        (const.SERVICE_RESET_STREAK, handle_reset_streak, RESET_STREAK_SCHEMA),
        (const.SERVICE_SYNC_NOW, handle_sync_now, SYNC_NOW_SCHEMA),
    ]
    for service, handler, schema in registrations:
        hass.services.async_register(const.DOMAIN, service, handler, schema=schema)

    const.LOGGER.info("INFO: Iman Tracker services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Iman Tracker services when unloading the integration."""
    for service in const.SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Iman Tracker services have been unregistered")
