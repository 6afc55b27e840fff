# File: sync_bridge.py
"""Best-effort mirror of the local Iman Tracker state to a Supabase table.

The whole per-user state is flattened into one row keyed by ``user_id`` and
upserted through the Supabase PostgREST endpoint. Local storage stays
authoritative: network, timeout, auth and HTTP failures are logged and the
call reports False. There is no retry queue; the next periodic sync tries
again.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from . import const
from .utils import dt_utils

if TYPE_CHECKING:
    from .storage_manager import ImanTrackerStorageManager

HTTP_OK_STATUSES = (200, 201, 204)


# ==============================================================================
# Row Mapping
# ==============================================================================


def _streak_column(streak_type: str, column: str) -> str:
    """Return the remote column of a streak field (general is unprefixed)."""
    if streak_type == const.STREAK_TYPE_GENERAL:
        return column
    return f"{streak_type}_{column}"


def snapshot_to_row(user_id: str, snapshot: dict[str, Any]) -> dict[str, Any]:
    """Flatten a storage snapshot into one remote row."""
    goals = snapshot.get(const.DATA_SNAPSHOT_GOALS, {})
    streaks = snapshot.get(const.DATA_SNAPSHOT_STREAKS, {})
    qada = snapshot.get(const.DATA_SNAPSHOT_QADA, {})
    meta = snapshot.get(const.DATA_SNAPSHOT_META, {})

    row: dict[str, Any] = {
        const.REMOTE_USER_ID: user_id,
        const.REMOTE_UPDATED_AT: dt_utils.dt_now_utc().isoformat(),
    }

    fard = goals.get(const.CATEGORY_PRAYER, {}).get(const.DATA_PRAYER_FARD, {})
    for prayer in const.FARD_PRAYERS:
        row[f"{const.REMOTE_FARD_PREFIX}{prayer}"] = bool(fard.get(prayer, False))

    for category, key, column in const.REMOTE_GOAL_COLUMNS:
        row[column] = goals.get(category, {}).get(key, const.DEFAULT_ZERO)

    section_scores = meta.get(const.DATA_META_SECTION_SCORES) or {}
    for category in const.GOAL_CATEGORIES:
        row[f"{category}{const.REMOTE_SCORE_SUFFIX}"] = section_scores.get(category)
    row[const.REMOTE_OVERALL_SCORE] = meta.get(
        const.DATA_META_OVERALL_SCORE, const.DEFAULT_ZERO
    )
    row[const.REMOTE_LAST_DAILY_RESET] = meta.get(const.DATA_META_LAST_DAILY_RESET)
    row[const.REMOTE_LAST_WEEKLY_RESET] = meta.get(const.DATA_META_LAST_WEEKLY_RESET)

    for streak_type in const.STREAK_TYPES:
        record = streaks.get(streak_type, {})
        for key, column in const.REMOTE_STREAK_COLUMNS.items():
            row[_streak_column(streak_type, column)] = record.get(
                key, const.DEFAULT_STREAK[key]
            )

    for prayer in const.FARD_PRAYERS:
        row[f"{const.REMOTE_QADA_PREFIX}{prayer}"] = qada.get(
            prayer, const.DEFAULT_ZERO
        )

    return row


def row_to_snapshot(row: dict[str, Any]) -> dict[str, Any]:
    """Rebuild a storage snapshot from a remote row.

    Columns that are absent or null are left out so that local defaults fill
    them on restore.
    """
    goals: dict[str, dict[str, Any]] = {
        category: {} for category in const.GOAL_CATEGORIES
    }

    fard = {
        prayer: bool(row[f"{const.REMOTE_FARD_PREFIX}{prayer}"])
        for prayer in const.FARD_PRAYERS
        if row.get(f"{const.REMOTE_FARD_PREFIX}{prayer}") is not None
    }
    if fard:
        goals[const.CATEGORY_PRAYER][const.DATA_PRAYER_FARD] = fard

    for category, key, column in const.REMOTE_GOAL_COLUMNS:
        if row.get(column) is not None:
            goals[category][key] = row[column]

    streaks: dict[str, dict[str, Any]] = {}
    for streak_type in const.STREAK_TYPES:
        streaks[streak_type] = {
            key: row[_streak_column(streak_type, column)]
            for key, column in const.REMOTE_STREAK_COLUMNS.items()
            if row.get(_streak_column(streak_type, column)) is not None
        }

    qada = {
        prayer: max(const.DEFAULT_ZERO, int(row[f"{const.REMOTE_QADA_PREFIX}{prayer}"]))
        for prayer in const.FARD_PRAYERS
        if row.get(f"{const.REMOTE_QADA_PREFIX}{prayer}") is not None
    }

    meta: dict[str, Any] = {
        const.DATA_META_SECTION_SCORES: {
            category: row.get(f"{category}{const.REMOTE_SCORE_SUFFIX}")
            for category in const.GOAL_CATEGORIES
        },
    }
    if row.get(const.REMOTE_OVERALL_SCORE) is not None:
        meta[const.DATA_META_OVERALL_SCORE] = row[const.REMOTE_OVERALL_SCORE]
    if row.get(const.REMOTE_LAST_DAILY_RESET) is not None:
        meta[const.DATA_META_LAST_DAILY_RESET] = row[const.REMOTE_LAST_DAILY_RESET]
    if row.get(const.REMOTE_LAST_WEEKLY_RESET) is not None:
        meta[const.DATA_META_LAST_WEEKLY_RESET] = row[const.REMOTE_LAST_WEEKLY_RESET]

    return {
        const.DATA_SNAPSHOT_GOALS: goals,
        const.DATA_SNAPSHOT_STREAKS: streaks,
        const.DATA_SNAPSHOT_QADA: qada,
        const.DATA_SNAPSHOT_META: meta,
    }


# ==============================================================================
# Bridge
# ==============================================================================


class ImanSyncBridge:
    """Pushes and pulls the per-user row to and from Supabase."""

    def __init__(
        self,
        hass: HomeAssistant,
        storage_manager: ImanTrackerStorageManager,
        supabase_url: str | None,
        supabase_key: str | None,
        table: str = const.DEFAULT_REMOTE_TABLE,
    ) -> None:
        """Initialize the bridge.

        Without both a URL and a key the bridge runs in local-only mode and
        every call returns False without touching the network.
        """
        self.hass = hass
        self._storage = storage_manager
        self._url = (supabase_url or "").rstrip("/")
        self._key = supabase_key or ""
        self._table = table or const.DEFAULT_REMOTE_TABLE

    @property
    def is_configured(self) -> bool:
        """Return True when remote sync is configured."""
        return bool(self._url and self._key)

    @property
    def endpoint(self) -> str:
        """Return the PostgREST URL of the remote table."""
        return f"{self._url}{const.SUPABASE_REST_PATH}{self._table}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._key,
            "Authorization": f"Bearer {self._key}",
            "Content-Type": "application/json",
        }

    # ────────────────────────────────────────────────────────────────
    # Raw requests
    # ────────────────────────────────────────────────────────────────

    async def _async_fetch_row(self, user_id: str) -> dict[str, Any] | None:
        """Return the remote row of a user, or None when there is none.

        Raises:
            HomeAssistantError: Non-success HTTP status or malformed body.
            TimeoutError: Request exceeded const.SYNC_TIMEOUT.
            aiohttp.ClientError: Network failure.
        """
        session = async_get_clientsession(self.hass)
        async with asyncio.timeout(const.SYNC_TIMEOUT):
            async with session.get(
                self.endpoint,
                params={const.REMOTE_USER_ID: f"eq.{user_id}", "select": "*"},
                headers=self._headers(),
            ) as response:
                if response.status not in HTTP_OK_STATUSES:
                    raise HomeAssistantError(
                        f"HTTP {response.status} fetching row from {self._table}"
                    )
                rows = await response.json()

        if not isinstance(rows, list):
            raise HomeAssistantError(f"Unexpected response from {self._table}")
        return rows[0] if rows else None

    async def _async_upsert_row(self, row: dict[str, Any]) -> None:
        """Insert or update one row keyed by user_id.

        Raises:
            HomeAssistantError: Non-success HTTP status.
            TimeoutError: Request exceeded const.SYNC_TIMEOUT.
            aiohttp.ClientError: Network failure.
        """
        session = async_get_clientsession(self.hass)
        headers = self._headers()
        headers["Prefer"] = "resolution=merge-duplicates,return=minimal"
        async with asyncio.timeout(const.SYNC_TIMEOUT):
            async with session.post(
                self.endpoint,
                params={"on_conflict": const.REMOTE_USER_ID},
                headers=headers,
                json=row,
            ) as response:
                if response.status not in HTTP_OK_STATUSES:
                    raise HomeAssistantError(
                        f"HTTP {response.status} upserting row into {self._table}"
                    )

    async def _async_fetch_snapshot(self, user_id: str) -> dict[str, Any] | None:
        """Return the user's remote row as a storage snapshot, or None.

        Raises:
            HomeAssistantError: Non-success HTTP status or a row that cannot be
                mapped (e.g. a non-numeric qada column).
            TimeoutError: Request exceeded const.SYNC_TIMEOUT.
            aiohttp.ClientError: Network failure.
        """
        row = await self._async_fetch_row(user_id)
        if row is None:
            return None
        try:
            return row_to_snapshot(row)
        except (TypeError, ValueError) as err:
            raise HomeAssistantError(
                f"Malformed row in {self._table} for user '{user_id}': {err}"
            ) from err

    async def _async_mark_synced(self) -> None:
        meta = await self._storage.async_load_meta()
        meta[const.DATA_META_LAST_SYNCED] = dt_utils.dt_now_utc().isoformat()
        await self._storage.async_save_meta(meta)

    # ────────────────────────────────────────────────────────────────
    # Public operations
    # ────────────────────────────────────────────────────────────────

    async def async_push_local_to_remote(self, user_id: str) -> bool:
        """Upsert the local snapshot as the user's remote row.

        Returns:
            True on success; False in local-only mode or on any failure.
        """
        if not self.is_configured:
            return False

        snapshot = await self._storage.async_snapshot()
        try:
            await self._async_upsert_row(snapshot_to_row(user_id, snapshot))
        except TimeoutError:
            const.LOGGER.warning(
                "WARNING: Timed out pushing data for user '%s'. Will retry on next sync",
                user_id,
            )
            return False
        except (aiohttp.ClientError, HomeAssistantError) as err:
            const.LOGGER.warning(
                "WARNING: Failed to push data for user '%s': %s", user_id, err
            )
            return False

        await self._async_mark_synced()
        const.LOGGER.debug("DEBUG: Pushed local data for user '%s'", user_id)
        return True

    async def async_pull_remote_to_local(self, user_id: str) -> bool:
        """Overwrite local state with the user's remote row if one exists.

        Returns:
            True if a row was found and restored.
        """
        if not self.is_configured:
            return False

        try:
            snapshot = await self._async_fetch_snapshot(user_id)
        except TimeoutError:
            const.LOGGER.warning(
                "WARNING: Timed out pulling data for user '%s'", user_id
            )
            return False
        except (aiohttp.ClientError, HomeAssistantError, ValueError) as err:
            const.LOGGER.warning(
                "WARNING: Failed to pull data for user '%s': %s", user_id, err
            )
            return False

        if snapshot is None:
            const.LOGGER.debug("DEBUG: No remote row for user '%s'", user_id)
            return False

        await self._storage.async_restore_snapshot(snapshot)
        await self._async_mark_synced()
        const.LOGGER.info("INFO: Restored remote data for user '%s'", user_id)
        return True

    async def async_initialize_for_new_user(self, user_id: str) -> bool:
        """Adopt the remote row if one exists, otherwise seed it from local data.

        Safe to call on every sign-in.

        Returns:
            True if local and remote state are aligned afterwards.
        """
        if not self.is_configured:
            return False

        try:
            snapshot = await self._async_fetch_snapshot(user_id)
        except TimeoutError:
            const.LOGGER.warning(
                "WARNING: Timed out checking remote data for user '%s'", user_id
            )
            return False
        except (aiohttp.ClientError, HomeAssistantError, ValueError) as err:
            const.LOGGER.warning(
                "WARNING: Failed to check remote data for user '%s': %s", user_id, err
            )
            return False

        if snapshot is not None:
            await self._storage.async_restore_snapshot(snapshot)
            await self._async_mark_synced()
            const.LOGGER.info("INFO: Restored remote data for user '%s'", user_id)
            return True

        const.LOGGER.info(
            "INFO: No remote data for user '%s'. Uploading local data", user_id
        )
        return await self.async_push_local_to_remote(user_id)
