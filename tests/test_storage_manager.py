"""Direct unit tests for ImanTrackerStorageManager.

Tests cover key building, default substitution, error handling, periodic
resets, snapshots and deletion.
"""

# pylint: disable=protected-access  # Accessing _stores for testing
# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names

from datetime import date
from typing import Any
from unittest.mock import patch

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

from custom_components.iman_tracker import const
from custom_components.iman_tracker.storage_manager import (
    ImanTrackerStorageManager,
    build_storage_key,
    goals_blob,
)
from tests.helpers import TEST_USER_ID

PRAYER_BLOB = goals_blob(const.CATEGORY_PRAYER)


@pytest.fixture
def storage_manager(hass: HomeAssistant) -> ImanTrackerStorageManager:
    """Return a storage manager for the test user."""
    return ImanTrackerStorageManager(hass, TEST_USER_ID)


class TestBuildStorageKey:
    """Tests for build_storage_key."""

    def test_namespaced_by_user(self) -> None:
        """Keys carry the domain, the user id and the blob name."""
        assert build_storage_key(PRAYER_BLOB, "abc") == "iman_tracker.abc.goals_prayer"
        assert build_storage_key(PRAYER_BLOB, "abc") != build_storage_key(
            PRAYER_BLOB, "xyz"
        )

    def test_unknown_blob_rejected(self) -> None:
        """Only known blobs have keys."""
        with pytest.raises(ValueError):
            build_storage_key("goals_charity", "abc")

    def test_empty_user_rejected(self) -> None:
        """Keys are never built without a user."""
        with pytest.raises(ValueError):
            build_storage_key(PRAYER_BLOB, "")


async def test_load_goals_returns_defaults_on_first_run(
    storage_manager: ImanTrackerStorageManager,
) -> None:
    """No stored blob → category defaults."""
    record = await storage_manager.async_load_goals(const.CATEGORY_DHIKR)

    assert record == const.DEFAULT_GOALS[const.CATEGORY_DHIKR]
    assert record is not const.DEFAULT_GOALS[const.CATEGORY_DHIKR]


async def test_load_goals_fills_missing_fields(
    storage_manager: ImanTrackerStorageManager,
    hass_storage: dict[str, Any],
) -> None:
    """Fields missing from an older blob come from defaults."""
    key = storage_manager.get_storage_key(PRAYER_BLOB)
    hass_storage[key] = {
        "version": const.STORAGE_VERSION,
        "key": key,
        "data": {
            const.DATA_PRAYER_FARD: {const.PRAYER_FAJR: True},
            const.DATA_PRAYER_SUNNAH_COMPLETED: 3,
        },
    }

    record = await storage_manager.async_load_goals(const.CATEGORY_PRAYER)

    assert record[const.DATA_PRAYER_FARD][const.PRAYER_FAJR] is True
    assert record[const.DATA_PRAYER_FARD][const.PRAYER_ISHA] is False
    assert record[const.DATA_PRAYER_SUNNAH_COMPLETED] == 3
    assert record[const.DATA_PRAYER_SUNNAH_GOAL] == 5


async def test_load_error_falls_back_to_defaults(
    storage_manager: ImanTrackerStorageManager,
) -> None:
    """A failing read is logged and defaults are used."""
    with patch.object(
        storage_manager._stores[PRAYER_BLOB],
        "async_load",
        side_effect=HomeAssistantError("corrupt"),
    ):
        record = await storage_manager.async_load_goals(const.CATEGORY_PRAYER)

    assert record == const.DEFAULT_GOALS[const.CATEGORY_PRAYER]


async def test_save_goals_overwrites_and_marks_stale(
    storage_manager: ImanTrackerStorageManager,
    hass_storage: dict[str, Any],
) -> None:
    """Saving replaces the blob and marks the category stale once."""
    record = await storage_manager.async_load_goals(const.CATEGORY_FASTING)
    record[const.DATA_FASTING_WEEKLY_COMPLETED] = 1

    await storage_manager.async_save_goals(const.CATEGORY_FASTING, record)

    key = storage_manager.get_storage_key(goals_blob(const.CATEGORY_FASTING))
    assert hass_storage[key]["data"][const.DATA_FASTING_WEEKLY_COMPLETED] == 1
    assert storage_manager.pop_stale_categories() == {const.CATEGORY_FASTING}
    assert storage_manager.pop_stale_categories() == set()


async def test_save_error_is_swallowed(
    storage_manager: ImanTrackerStorageManager,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """File system errors are logged, not raised."""
    with patch.object(
        storage_manager._stores[const.STORAGE_BLOB_QADA],
        "async_save",
        side_effect=OSError("disk full"),
    ):
        await storage_manager.async_save_qada({const.PRAYER_FAJR: 1})

    assert "disk full" in caplog.text


async def test_unknown_category_rejected(
    storage_manager: ImanTrackerStorageManager,
) -> None:
    """Unknown categories and streak types raise ValueError."""
    with pytest.raises(ValueError):
        await storage_manager.async_load_goals("charity")
    with pytest.raises(ValueError):
        await storage_manager.async_load_streak("reading")


class TestResets:
    """Tests for daily and weekly resets."""

    async def _seed_progress(self, storage_manager: ImanTrackerStorageManager) -> None:
        prayer = await storage_manager.async_load_goals(const.CATEGORY_PRAYER)
        prayer[const.DATA_PRAYER_FARD][const.PRAYER_FAJR] = True
        prayer[const.DATA_PRAYER_SUNNAH_COMPLETED] = 2
        prayer[const.DATA_PRAYER_SUNNAH_GOAL] = 8
        prayer[const.DATA_PRAYER_TAHAJJUD_COMPLETED] = 1
        await storage_manager.async_save_goals(const.CATEGORY_PRAYER, prayer)

        dhikr = await storage_manager.async_load_goals(const.CATEGORY_DHIKR)
        dhikr[const.DATA_DHIKR_DAILY_COMPLETED] = 50
        dhikr[const.DATA_DHIKR_WEEKLY_COMPLETED] = 300
        await storage_manager.async_save_goals(const.CATEGORY_DHIKR, dhikr)

    async def test_daily_reset_zeroes_daily_completions_only(
        self, storage_manager: ImanTrackerStorageManager
    ) -> None:
        """Daily fields reset, weekly fields and targets stay."""
        await self._seed_progress(storage_manager)

        assert await storage_manager.async_apply_daily_reset(date(2026, 3, 4))

        prayer = await storage_manager.async_load_goals(const.CATEGORY_PRAYER)
        dhikr = await storage_manager.async_load_goals(const.CATEGORY_DHIKR)
        assert not any(prayer[const.DATA_PRAYER_FARD].values())
        assert prayer[const.DATA_PRAYER_SUNNAH_COMPLETED] == 0
        assert prayer[const.DATA_PRAYER_SUNNAH_GOAL] == 8
        assert prayer[const.DATA_PRAYER_TAHAJJUD_COMPLETED] == 1
        assert dhikr[const.DATA_DHIKR_DAILY_COMPLETED] == 0
        assert dhikr[const.DATA_DHIKR_WEEKLY_COMPLETED] == 300

        meta = await storage_manager.async_load_meta()
        assert meta[const.DATA_META_LAST_DAILY_RESET] == "2026-03-04"

    async def test_daily_reset_is_idempotent(
        self, storage_manager: ImanTrackerStorageManager
    ) -> None:
        """A second reset with the same day leaves state identical."""
        assert await storage_manager.async_apply_daily_reset(date(2026, 3, 4))
        await self._seed_progress(storage_manager)
        before = await storage_manager.async_snapshot()

        assert not await storage_manager.async_apply_daily_reset(date(2026, 3, 4))

        assert await storage_manager.async_snapshot() == before

    async def test_weekly_reset_keyed_to_iso_week(
        self, storage_manager: ImanTrackerStorageManager
    ) -> None:
        """Weekly fields reset once per ISO week."""
        assert await storage_manager.async_apply_weekly_reset(date(2026, 3, 2))
        await self._seed_progress(storage_manager)

        # Sunday of the same ISO week
        assert not await storage_manager.async_apply_weekly_reset(date(2026, 3, 8))
        # Next Monday
        assert await storage_manager.async_apply_weekly_reset(date(2026, 3, 9))

        prayer = await storage_manager.async_load_goals(const.CATEGORY_PRAYER)
        dhikr = await storage_manager.async_load_goals(const.CATEGORY_DHIKR)
        assert prayer[const.DATA_PRAYER_TAHAJJUD_COMPLETED] == 0
        assert prayer[const.DATA_PRAYER_SUNNAH_COMPLETED] == 2
        assert dhikr[const.DATA_DHIKR_WEEKLY_COMPLETED] == 0
        assert dhikr[const.DATA_DHIKR_DAILY_COMPLETED] == 50


async def test_snapshot_and_restore(
    hass: HomeAssistant, storage_manager: ImanTrackerStorageManager
) -> None:
    """A snapshot restored into another user's storage reproduces the state."""
    streak = await storage_manager.async_load_streak(const.STREAK_TYPE_QURAN)
    streak[const.DATA_STREAK_CURRENT] = 4
    streak[const.DATA_STREAK_LONGEST] = 9
    await storage_manager.async_save_streak(const.STREAK_TYPE_QURAN, streak)
    await storage_manager.async_save_qada({**const.DEFAULT_QADA, const.PRAYER_ASR: 3})

    snapshot = await storage_manager.async_snapshot()
    other = ImanTrackerStorageManager(hass, "user-2")
    await other.async_restore_snapshot(snapshot)

    assert (await other.async_load_streak(const.STREAK_TYPE_QURAN))[
        const.DATA_STREAK_LONGEST
    ] == 9
    assert (await other.async_load_qada())[const.PRAYER_ASR] == 3


async def test_clear_and_delete_storage(
    storage_manager: ImanTrackerStorageManager,
    hass_storage: dict[str, Any],
) -> None:
    """Clearing writes defaults; deleting removes every blob of the user."""
    await storage_manager.async_save_qada({**const.DEFAULT_QADA, const.PRAYER_FAJR: 2})

    await storage_manager.async_clear_data()

    assert await storage_manager.async_load_qada() == const.DEFAULT_QADA
    assert all(
        storage_manager.get_storage_key(blob) in hass_storage
        for blob in const.STORAGE_BLOBS
    )

    await storage_manager.async_delete_storage()

    assert not any(
        storage_manager.get_storage_key(blob) in hass_storage
        for blob in const.STORAGE_BLOBS
    )
