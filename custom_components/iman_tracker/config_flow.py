# File: config_flow.py
"""Config flow for the Iman Tracker integration.

One config entry represents one signed-in user. The user id becomes the entry's
unique id and namespaces all of that user's storage. Supabase credentials are
optional; without them the integration runs in local-only mode.
"""

from typing import Any, Optional

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from .options_flow import ImanTrackerOptionsFlowHandler

# Pylint disable for valid config flow architectural patterns:
# - abstract-method: is_matching is not required for config flows in current HA versions
# pylint: disable=abstract-method


def validate_user_input(user_input: dict[str, Any]) -> dict[str, str]:
    """Return form errors for the user step (empty when valid)."""
    errors: dict[str, str] = {}

    if not user_input.get(const.CONF_USER_ID, "").strip():
        errors[const.CONF_USER_ID] = const.CFOF_ERROR_USER_ID_REQUIRED

    url = user_input.get(const.CONF_SUPABASE_URL, "").strip()
    if url:
        if not url.startswith(("http://", "https://")):
            errors[const.CONF_SUPABASE_URL] = const.CFOF_ERROR_INVALID_URL
        elif not user_input.get(const.CONF_SUPABASE_KEY, "").strip():
            errors[const.CONF_SUPABASE_KEY] = const.CFOF_ERROR_KEY_REQUIRED

    return errors


class ImanTrackerConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Iman Tracker."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Ask for the user id, display name and optional Supabase settings."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = validate_user_input(user_input)
            if not errors:
                user_id = user_input[const.CONF_USER_ID].strip()
                await self.async_set_unique_id(user_id)
                self._abort_if_unique_id_configured()

                data = {
                    const.CONF_USER_ID: user_id,
                    const.CONF_NAME: user_input.get(const.CONF_NAME, "").strip()
                    or user_id,
                    const.CONF_SUPABASE_URL: user_input.get(
                        const.CONF_SUPABASE_URL, ""
                    ).strip(),
                    const.CONF_SUPABASE_KEY: user_input.get(
                        const.CONF_SUPABASE_KEY, ""
                    ).strip(),
                    const.CONF_REMOTE_TABLE: user_input.get(
                        const.CONF_REMOTE_TABLE, const.DEFAULT_REMOTE_TABLE
                    ).strip()
                    or const.DEFAULT_REMOTE_TABLE,
                    const.CONF_NOTIFY_SERVICE: user_input.get(
                        const.CONF_NOTIFY_SERVICE, ""
                    ).strip(),
                }
                const.LOGGER.debug(
                    "DEBUG: Creating Iman Tracker entry for user '%s'", user_id
                )
                return self.async_create_entry(title=data[const.CONF_NAME], data=data)

        schema = vol.Schema(
            {
                vol.Required(const.CONF_USER_ID): str,
                vol.Optional(const.CONF_NAME, default=""): str,
                vol.Optional(const.CONF_SUPABASE_URL, default=""): str,
                vol.Optional(const.CONF_SUPABASE_KEY, default=""): str,
                vol.Optional(
                    const.CONF_REMOTE_TABLE, default=const.DEFAULT_REMOTE_TABLE
                ): str,
                vol.Optional(const.CONF_NOTIFY_SERVICE, default=""): str,
            }
        )
        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER, data_schema=schema, errors=errors
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return ImanTrackerOptionsFlowHandler(config_entry)
