"""Diagnostics support for Iman Tracker integration.

Returns the raw per-user storage snapshot, the same shape that is mirrored to
the remote table, plus the currently published scores. Supabase credentials
are redacted.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import ImanTrackerCoordinator

TO_REDACT = {const.CONF_SUPABASE_KEY}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: ImanTrackerCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return {
        "entry": async_redact_data(dict(entry.data), TO_REDACT),
        "options": dict(entry.options),
        "storage": await coordinator.storage_manager.async_snapshot(),
        "scores": {
            const.DATA_META_OVERALL_SCORE: coordinator.overall_score,
            const.DATA_META_SECTION_SCORES: {
                category: (
                    {"value": score.value, "capped": score.capped}
                    if score is not None
                    else None
                )
                for category, score in coordinator.section_scores.items()
            },
        },
        "sync_configured": coordinator.sync_bridge.is_configured,
    }
