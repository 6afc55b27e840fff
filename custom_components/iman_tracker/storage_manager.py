# File: storage_manager.py
"""Handles persistent data storage for the Iman Tracker integration.

Uses Home Assistant's Storage helper to keep one JSON blob per goal category,
per streak type, for the qada counters and for reset/score metadata. Every blob
is namespaced by the signed-in user's id so that several accounts on one Home
Assistant instance never read each other's data.
"""

from __future__ import annotations

import copy
from datetime import date, datetime
from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from .utils import dt_utils


def build_storage_key(category: str, user_id: str) -> str:
    """Return the storage key of one blob for one user.

    Args:
        category: Blob name from const.STORAGE_BLOBS (e.g. "goals_prayer").
        user_id: Id of the signed-in user.

    Raises:
        ValueError: Unknown blob name or empty user id.

    Example:
        build_storage_key("goals_prayer", "abc") → "iman_tracker.abc.goals_prayer"
    """
    if category not in const.STORAGE_BLOBS:
        raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))
    if not user_id:
        raise ValueError(const.ERROR_USER_ID_REQUIRED)
    return f"{const.DOMAIN}{const.DISPLAY_DOT}{user_id}{const.DISPLAY_DOT}{category}"


def goals_blob(category: str) -> str:
    """Return the blob name for a goal category."""
    return f"{const.STORAGE_BLOB_GOALS_PREFIX}{category}"


def streak_blob(streak_type: str) -> str:
    """Return the blob name for a streak type."""
    return f"{const.STORAGE_BLOB_STREAK_PREFIX}{streak_type}"


def _fill_defaults(data: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Return `data` with any key missing from an older blob taken from defaults."""
    merged = copy.deepcopy(defaults)
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _fill_defaults(value, merged[key])
        else:
            merged[key] = value
    return merged


class ImanTrackerStorageManager:
    """Manages loading and saving the per-user blobs in Home Assistant's storage.

    Loads never raise: a missing, unreadable or corrupted blob yields defaults.
    Saves never raise either: failures are logged and the in-memory state held
    by the coordinator stays authoritative.
    """

    def __init__(self, hass: HomeAssistant, user_id: str) -> None:
        """Initialize the storage manager.

        Args:
            hass: Home Assistant core object.
            user_id: Id of the signed-in user; namespaces every storage key.
        """
        self.hass = hass
        self.user_id = user_id
        self._stores: dict[str, Store] = {
            blob: Store(hass, const.STORAGE_VERSION, build_storage_key(blob, user_id))
            for blob in const.STORAGE_BLOBS
        }
        self._stale_categories: set[str] = set()

    # ────────────────────────────────────────────────────────────────
    # Low-level blob access
    # ────────────────────────────────────────────────────────────────

    def get_storage_key(self, blob: str) -> str:
        """Return the storage key used for a blob."""
        return self._stores[blob].key

    async def _async_load_blob(self, blob: str, defaults: dict[str, Any]) -> dict[str, Any]:
        """Load a blob, substituting defaults on absence or failure."""
        store = self._stores[blob]
        try:
            data = await store.async_load()
        except (HomeAssistantError, OSError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Failed to load storage '%s': %s. Using defaults",
                store.key,
                err,
            )
            return copy.deepcopy(defaults)

        if data is None:
            const.LOGGER.debug(
                "DEBUG: No stored data for '%s'. Initializing defaults", store.key
            )
            return copy.deepcopy(defaults)
        if not isinstance(data, dict):
            const.LOGGER.warning(
                "WARNING: Unexpected data in storage '%s'. Using defaults", store.key
            )
            return copy.deepcopy(defaults)

        return _fill_defaults(data, defaults)

    async def _async_save_blob(self, blob: str, data: dict[str, Any]) -> None:
        """Overwrite a blob.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
        """
        store = self._stores[blob]
        try:
            await store.async_save(data)
            const.LOGGER.debug("DEBUG: Data saved successfully to '%s'", store.key)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except (ValueError, HomeAssistantError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage '%s' due to invalid data: %s",
                store.key,
                err,
            )

    # ────────────────────────────────────────────────────────────────
    # Goals
    # ────────────────────────────────────────────────────────────────

    async def async_load_goals(self, category: str) -> dict[str, Any]:
        """Return the goal record of a category, or its defaults on first run."""
        if category not in const.GOAL_CATEGORIES:
            raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))
        return await self._async_load_blob(
            goals_blob(category), const.DEFAULT_GOALS[category]
        )

    async def async_save_goals(self, category: str, record: dict[str, Any]) -> None:
        """Overwrite the goal record of a category and mark its score stale."""
        if category not in const.GOAL_CATEGORIES:
            raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))
        await self._async_save_blob(goals_blob(category), record)
        self._stale_categories.add(category)

    def pop_stale_categories(self) -> set[str]:
        """Return and clear the categories saved since the last call."""
        stale = self._stale_categories
        self._stale_categories = set()
        return stale

    # ────────────────────────────────────────────────────────────────
    # Periodic Resets
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _zero_completions(record: dict[str, Any], category: str, scope: str) -> None:
        """Zero every completion of the given scope, keeping goal targets."""
        for component in const.GOAL_COMPONENTS[category]:
            if component[const.COMPONENT_SCOPE] != scope:
                continue
            if component[const.COMPONENT_KIND] == const.GOAL_KIND_FLAGS:
                flags = record.get(component[const.COMPONENT_GOAL]) or {}
                record[component[const.COMPONENT_GOAL]] = dict.fromkeys(flags, False)
            else:
                record[component[const.COMPONENT_COMPLETED]] = const.DEFAULT_ZERO

    async def _async_apply_reset(
        self, scope: str, meta_key: str, marker: str
    ) -> bool:
        """Reset completions of one scope when the stored marker differs."""
        meta = await self.async_load_meta()
        if meta.get(meta_key) == marker:
            return False

        const.LOGGER.debug(
            "DEBUG: Applying %s reset for user '%s' (%s → %s)",
            scope,
            self.user_id,
            meta.get(meta_key),
            marker,
        )
        for category in const.GOAL_CATEGORIES:
            if not any(
                component[const.COMPONENT_SCOPE] == scope
                for component in const.GOAL_COMPONENTS[category]
            ):
                continue
            record = await self.async_load_goals(category)
            self._zero_completions(record, category, scope)
            await self.async_save_goals(category, record)

        meta[meta_key] = marker
        await self.async_save_meta(meta)
        return True

    async def async_apply_daily_reset(self, now: date | datetime | None = None) -> bool:
        """Zero daily completions when the local calendar day changed.

        Returns:
            True if a reset was applied, False if already done for this day.
        """
        today = dt_utils.to_local_date(now)
        return await self._async_apply_reset(
            const.GOAL_SCOPE_DAILY, const.DATA_META_LAST_DAILY_RESET, today.isoformat()
        )

    async def async_apply_weekly_reset(
        self, now: date | datetime | None = None
    ) -> bool:
        """Zero weekly completions when the ISO week changed.

        Returns:
            True if a reset was applied, False if already done for this week.
        """
        today = dt_utils.to_local_date(now)
        return await self._async_apply_reset(
            const.GOAL_SCOPE_WEEKLY,
            const.DATA_META_LAST_WEEKLY_RESET,
            dt_utils.iso_week_key(today),
        )

    # ────────────────────────────────────────────────────────────────
    # Streaks, Qada, Meta
    # ────────────────────────────────────────────────────────────────

    async def async_load_streak(self, streak_type: str) -> dict[str, Any]:
        """Return the streak record of a streak type."""
        if streak_type not in const.STREAK_TYPES:
            raise ValueError(const.ERROR_UNKNOWN_STREAK_TYPE_FMT.format(streak_type))
        return await self._async_load_blob(
            streak_blob(streak_type), const.DEFAULT_STREAK
        )

    async def async_save_streak(self, streak_type: str, record: dict[str, Any]) -> None:
        """Overwrite the streak record of a streak type."""
        if streak_type not in const.STREAK_TYPES:
            raise ValueError(const.ERROR_UNKNOWN_STREAK_TYPE_FMT.format(streak_type))
        await self._async_save_blob(streak_blob(streak_type), record)

    async def async_load_qada(self) -> dict[str, int]:
        """Return the missed-prayer counters."""
        return await self._async_load_blob(const.STORAGE_BLOB_QADA, const.DEFAULT_QADA)

    async def async_save_qada(self, qada: dict[str, int]) -> None:
        """Overwrite the missed-prayer counters."""
        await self._async_save_blob(const.STORAGE_BLOB_QADA, qada)

    async def async_load_meta(self) -> dict[str, Any]:
        """Return reset markers, last published scores and sync time."""
        return await self._async_load_blob(const.STORAGE_BLOB_META, const.DEFAULT_META)

    async def async_save_meta(self, meta: dict[str, Any]) -> None:
        """Overwrite the meta blob."""
        await self._async_save_blob(const.STORAGE_BLOB_META, meta)

    # ────────────────────────────────────────────────────────────────
    # Snapshots
    # ────────────────────────────────────────────────────────────────

    async def async_snapshot(self) -> dict[str, Any]:
        """Return the whole per-user state."""
        return {
            const.DATA_SNAPSHOT_GOALS: {
                category: await self.async_load_goals(category)
                for category in const.GOAL_CATEGORIES
            },
            const.DATA_SNAPSHOT_STREAKS: {
                streak_type: await self.async_load_streak(streak_type)
                for streak_type in const.STREAK_TYPES
            },
            const.DATA_SNAPSHOT_QADA: await self.async_load_qada(),
            const.DATA_SNAPSHOT_META: await self.async_load_meta(),
        }

    async def async_restore_snapshot(self, snapshot: dict[str, Any]) -> None:
        """Overwrite local blobs with the parts present in a snapshot."""
        for category, record in snapshot.get(const.DATA_SNAPSHOT_GOALS, {}).items():
            if category in const.GOAL_CATEGORIES:
                await self.async_save_goals(
                    category, _fill_defaults(record, const.DEFAULT_GOALS[category])
                )
        for streak_type, record in snapshot.get(const.DATA_SNAPSHOT_STREAKS, {}).items():
            if streak_type in const.STREAK_TYPES:
                await self.async_save_streak(
                    streak_type, _fill_defaults(record, const.DEFAULT_STREAK)
                )
        if (qada := snapshot.get(const.DATA_SNAPSHOT_QADA)) is not None:
            await self.async_save_qada(_fill_defaults(qada, const.DEFAULT_QADA))
        if (meta := snapshot.get(const.DATA_SNAPSHOT_META)) is not None:
            current = await self.async_load_meta()
            current.update(meta)
            await self.async_save_meta(current)

    # ────────────────────────────────────────────────────────────────
    # Clearing
    # ────────────────────────────────────────────────────────────────

    async def async_clear_data(self) -> None:
        """Reset every blob of this user to its defaults."""
        const.LOGGER.warning(
            "WARNING: Clearing all Iman Tracker data for user '%s'", self.user_id
        )
        for category in const.GOAL_CATEGORIES:
            await self.async_save_goals(
                category, copy.deepcopy(const.DEFAULT_GOALS[category])
            )
        for streak_type in const.STREAK_TYPES:
            await self.async_save_streak(
                streak_type, copy.deepcopy(const.DEFAULT_STREAK)
            )
        await self.async_save_qada(copy.deepcopy(const.DEFAULT_QADA))
        await self.async_save_meta(copy.deepcopy(const.DEFAULT_META))

    async def async_delete_storage(self) -> None:
        """Remove every blob of this user from disk."""
        for store in self._stores.values():
            try:
                await store.async_remove()
            except OSError as err:
                const.LOGGER.error(
                    "ERROR: Failed to remove storage file %s: %s. "
                    "Check file permissions",
                    store.path,
                    err,
                )
        self._stale_categories.clear()
        const.LOGGER.info(
            "INFO: Storage removed for user '%s'", self.user_id
        )
