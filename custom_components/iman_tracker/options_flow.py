# File: options_flow.py
"""Options Flow for the Iman Tracker integration.

Tick intervals, score decay, section weights of the overall score and the
notify service for milestone messages. Saving the options reloads the entry.
"""

from typing import Any, Optional

import voluptuous as vol
from homeassistant import config_entries

from . import const


class ImanTrackerOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for Iman Tracker settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""

    async def async_step_init(self, user_input: Optional[dict[str, Any]] = None):
        """Show and store the integration options."""
        if user_input is not None:
            user_input[const.CONF_NOTIFY_SERVICE] = user_input.get(
                const.CONF_NOTIFY_SERVICE, ""
            ).strip()
            const.LOGGER.debug(
                "DEBUG: Options updated for entry '%s'", self.config_entry.entry_id
            )
            return self.async_create_entry(title="", data=user_input)

        options = self.config_entry.options
        weight_fields = {
            vol.Optional(
                const.CONF_SECTION_WEIGHTS[category],
                default=options.get(
                    const.CONF_SECTION_WEIGHTS[category],
                    const.DEFAULT_SECTION_WEIGHTS[category],
                ),
            ): vol.All(vol.Coerce(int), vol.Range(min=0, max=100))
            for category in const.GOAL_CATEGORIES
        }
        schema = vol.Schema(
            {
                vol.Optional(
                    const.CONF_SCORE_INTERVAL,
                    default=options.get(
                        const.CONF_SCORE_INTERVAL, const.DEFAULT_SCORE_INTERVAL
                    ),
                ): vol.All(
                    vol.Coerce(int),
                    vol.Range(min=const.MIN_SCORE_INTERVAL, max=const.MAX_SCORE_INTERVAL),
                ),
                vol.Optional(
                    const.CONF_SYNC_INTERVAL,
                    default=options.get(
                        const.CONF_SYNC_INTERVAL, const.DEFAULT_SYNC_INTERVAL
                    ),
                ): vol.All(
                    vol.Coerce(int),
                    vol.Range(min=const.MIN_SYNC_INTERVAL, max=const.MAX_SYNC_INTERVAL),
                ),
                vol.Optional(
                    const.CONF_DECAY_ENABLED,
                    default=options.get(
                        const.CONF_DECAY_ENABLED, const.DEFAULT_DECAY_ENABLED
                    ),
                ): bool,
                vol.Optional(
                    const.CONF_NOTIFY_SERVICE,
                    default=options.get(
                        const.CONF_NOTIFY_SERVICE,
                        self.config_entry.data.get(const.CONF_NOTIFY_SERVICE, ""),
                    ),
                ): str,
                **weight_fields,
            }
        )
        return self.async_show_form(step_id=const.OPTIONS_FLOW_STEP_INIT, data_schema=schema)
