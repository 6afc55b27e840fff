"""Shared fixtures for Iman Tracker tests."""

from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.iman_tracker import const
from tests.helpers import (
    TEST_SUPABASE_KEY,
    TEST_SUPABASE_URL,
    TEST_USER_ID,
    build_entry_data,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a local-only config entry."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="Test User",
        data=build_entry_data(),
        options={},
        entry_id="test_entry_id",
        unique_id=TEST_USER_ID,
    )


@pytest.fixture
def sync_config_entry() -> MockConfigEntry:
    """Return a config entry with Supabase sync configured."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="Test User",
        data=build_entry_data(
            **{
                const.CONF_SUPABASE_URL: TEST_SUPABASE_URL,
                const.CONF_SUPABASE_KEY: TEST_SUPABASE_KEY,
            }
        ),
        options={},
        entry_id="sync_entry_id",
        unique_id=TEST_USER_ID,
    )


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> MockConfigEntry:
    """Set up the integration with the local-only entry."""
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry
