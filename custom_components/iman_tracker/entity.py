"""Base entity classes for Iman Tracker integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import ImanTrackerCoordinator


class ImanTrackerCoordinatorEntity(CoordinatorEntity[ImanTrackerCoordinator]):
    """Base entity class for Iman Tracker sensors with typed coordinator access.

    All entities of one config entry hang off a single device named after the
    signed-in user.
    """

    _attr_has_entity_name = True

    def __init__(self, coordinator: ImanTrackerCoordinator, entry: ConfigEntry) -> None:
        """Initialize the entity and its device info."""
        super().__init__(coordinator)
        self._entry = entry
        self._attr_device_info = DeviceInfo(
            identifiers={(const.DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer=const.IMAN_TRACKER_TITLE,
        )

    @property
    def coordinator(self) -> ImanTrackerCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: ImanTrackerCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
