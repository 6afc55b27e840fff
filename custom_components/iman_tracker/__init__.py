# File: __init__.py
"""Initialization file for the Iman Tracker integration.

Handles setting up the integration, including loading configuration entries,
initializing storage and coordinator, and configuring services. One config
entry is one signed-in user: unloading the entry signs that user out, removing
it deletes their local data.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import ImanTrackerCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import ImanTrackerStorageManager
from .sync_bridge import ImanSyncBridge


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Iman Tracker entry: %s", entry.entry_id)

    # Local calendar days follow the Home Assistant timezone
    const.set_default_timezone(hass)

    storage_manager = ImanTrackerStorageManager(hass, entry.data[const.CONF_USER_ID])
    sync_bridge = ImanSyncBridge(
        hass,
        storage_manager,
        entry.data.get(const.CONF_SUPABASE_URL),
        entry.data.get(const.CONF_SUPABASE_KEY),
        entry.data.get(const.CONF_REMOTE_TABLE, const.DEFAULT_REMOTE_TABLE),
    )
    coordinator = ImanTrackerCoordinator(hass, entry, storage_manager, sync_bridge)
    await coordinator.async_initialize()

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        await coordinator.async_shutdown()
        raise

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    if not hass.services.has_service(const.DOMAIN, const.SERVICE_SYNC_NOW):
        async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_update_options))

    const.LOGGER.info("INFO: Iman Tracker setup complete for entry: %s", entry.entry_id)
    return True


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so new intervals and weights take effect."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry (sign-out)."""
    const.LOGGER.info("INFO: Unloading Iman Tracker entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        data = hass.data[const.DOMAIN].pop(entry.entry_id)
        coordinator: ImanTrackerCoordinator = data[const.COORDINATOR]
        await coordinator.async_shutdown()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting that user's storage."""
    const.LOGGER.info("INFO: Removing Iman Tracker entry: %s", entry.entry_id)

    user_id = entry.data.get(const.CONF_USER_ID)
    if user_id:
        storage_manager = ImanTrackerStorageManager(hass, user_id)
        await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: Iman Tracker entry data cleared: %s", entry.entry_id)
