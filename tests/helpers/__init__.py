"""Test helpers for Iman Tracker integration tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Constants
        TEST_USER_ID, TEST_REMOTE_ENDPOINT,

        # Setup
        build_entry_data, local_datetime, get_coordinator,

        # Entities
        get_sensor_state,
    )

See individual modules for full documentation:
- setup.py: Entry data, coordinator access and time helpers
- entities.py: Sensor lookup by unique id
"""

from tests.helpers.entities import get_sensor_state
from tests.helpers.setup import (
    TEST_REMOTE_ENDPOINT,
    TEST_SUPABASE_KEY,
    TEST_SUPABASE_URL,
    TEST_USER_ID,
    build_entry_data,
    get_coordinator,
    local_datetime,
)

__all__ = [
    "TEST_REMOTE_ENDPOINT",
    "TEST_SUPABASE_KEY",
    "TEST_SUPABASE_URL",
    "TEST_USER_ID",
    "build_entry_data",
    "get_coordinator",
    "get_sensor_state",
    "local_datetime",
]
