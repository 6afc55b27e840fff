# File: coordinator.py
"""Coordinator for the Iman Tracker integration.

Owns the in-memory goals, scores, streaks and qada counters of one signed-in
user (one config entry). Every user action runs the same pipeline:

    storage mutation → score recompute → streak update → optional push → listeners

Two periodic ticks run alongside:
    - Score tick (DataUpdateCoordinator update_interval): daily/weekly resets,
      passive streak break checks, score recompute with optional decay.
    - Sync tick (async_track_time_interval): best-effort push to the remote row.
"""

# Pylint suppressions for valid coordinator architectural patterns:
# - too-many-public-methods: Each service/feature requires its own public method
# pylint: disable=too-many-public-methods

from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const
from .engines import ScoreEngine, SectionScore, StreakEngine, StreakUpdate
from .notification_helper import async_send_notification
from .storage_manager import ImanTrackerStorageManager
from .sync_bridge import ImanSyncBridge
from .utils import dt_utils


class ImanTrackerCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for one Iman Tracker user."""

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: ImanTrackerStorageManager,
        sync_bridge: ImanSyncBridge,
    ) -> None:
        """Initialize the ImanTrackerCoordinator."""
        score_interval_seconds = config_entry.options.get(
            const.CONF_SCORE_INTERVAL, const.DEFAULT_SCORE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(seconds=score_interval_seconds),
        )
        self.storage_manager = storage_manager
        self.sync_bridge = sync_bridge

        self.goals: dict[str, dict[str, Any]] = {}
        self.streaks: dict[str, dict[str, Any]] = {}
        self.qada: dict[str, int] = {}
        self.meta: dict[str, Any] = {}
        self.section_scores: dict[str, SectionScore | None] = {}
        self.overall_score: float = 0.0

        self._sync_in_progress = False
        self._unsub_sync: Callable[[], None] | None = None

    # -------------------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------------------

    @property
    def user_id(self) -> str:
        """Return the id of the signed-in user."""
        return self.storage_manager.user_id

    @property
    def section_weights(self) -> dict[str, float]:
        """Return overall-score weights per category from the options."""
        return {
            category: self.config_entry.options.get(
                const.CONF_SECTION_WEIGHTS[category],
                const.DEFAULT_SECTION_WEIGHTS[category],
            )
            for category in const.GOAL_CATEGORIES
        }

    @property
    def decay_enabled(self) -> bool:
        """Return True when published scores decay over time."""
        return self.config_entry.options.get(
            const.CONF_DECAY_ENABLED, const.DEFAULT_DECAY_ENABLED
        )

    @property
    def notify_service(self) -> str | None:
        """Return the configured notify service, options taking precedence."""
        return self.config_entry.options.get(
            const.CONF_NOTIFY_SERVICE,
            self.config_entry.data.get(const.CONF_NOTIFY_SERVICE),
        ) or None

    @property
    def sync_in_progress(self) -> bool:
        """Return True while a push or pull is running."""
        return self._sync_in_progress

    def get_streak_state(self, streak_type: str, today: date | None = None) -> str:
        """Return the streak state of a streak type for today."""
        return StreakEngine.get_state(
            self.streaks.get(streak_type, const.DEFAULT_STREAK),
            today or dt_utils.dt_today_local(),
        )

    def get_goal_completion(self, category: str) -> dict[str, bool]:
        """Return daily/weekly goal completion flags of a category."""
        return ScoreEngine.check_goals_completion(category, self.goals[category])

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    async def async_initialize(self) -> None:
        """Align with the remote row, load every blob and start the sync timer."""
        if self.sync_bridge.is_configured:
            await self.sync_bridge.async_initialize_for_new_user(self.user_id)

        await self._async_load_all()
        self.section_scores = ScoreEngine.compute_all_section_scores(self.goals)
        self.overall_score = ScoreEngine.compute_overall_score(
            self.section_scores, self.section_weights
        )

        if self.sync_bridge.is_configured:
            sync_minutes = self.config_entry.options.get(
                const.CONF_SYNC_INTERVAL, const.DEFAULT_SYNC_INTERVAL
            )
            self._unsub_sync = async_track_time_interval(
                self.hass, self._async_sync_tick, timedelta(minutes=sync_minutes)
            )
        const.LOGGER.debug(
            "DEBUG: Coordinator initialized for user '%s' (sync %s)",
            self.user_id,
            "enabled" if self.sync_bridge.is_configured else "disabled",
        )

    async def async_shutdown(self) -> None:
        """Cancel the sync timer and stop the score tick."""
        if self._unsub_sync is not None:
            self._unsub_sync()
            self._unsub_sync = None
        await super().async_shutdown()

    async def _async_load_all(self) -> None:
        """Replace in-memory state with what is stored."""
        self.goals = {
            category: await self.storage_manager.async_load_goals(category)
            for category in const.GOAL_CATEGORIES
        }
        self.streaks = {
            streak_type: await self.storage_manager.async_load_streak(streak_type)
            for streak_type in const.STREAK_TYPES
        }
        self.qada = await self.storage_manager.async_load_qada()
        self.meta = await self.storage_manager.async_load_meta()
        # Loaded records are current; nothing is stale yet.
        self.storage_manager.pop_stale_categories()

    # -------------------------------------------------------------------------------------
    # Score Tick
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> dict[str, Any]:
        """Periodic update: resets, streak breaks and score recompute."""
        try:
            now = dt_utils.dt_now_local()
            await self._async_apply_resets(now)
            await self._async_check_streak_breaks(now.date())
            await self._async_publish_scores(
                ScoreEngine.compute_all_section_scores(self.goals), now, anchor=False
            )
            return self._build_data()
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise UpdateFailed(f"Error updating Iman Tracker data: {err}") from err

    async def _async_apply_resets(self, now: datetime) -> None:
        """Apply daily and weekly resets, reloading and rescoring reset goals."""
        daily = await self.storage_manager.async_apply_daily_reset(now)
        weekly = await self.storage_manager.async_apply_weekly_reset(now)
        if not (daily or weekly):
            return

        const.LOGGER.info(
            "INFO: Reset applied for user '%s' (daily=%s, weekly=%s)",
            self.user_id,
            daily,
            weekly,
        )
        for category in self.storage_manager.pop_stale_categories():
            self.goals[category] = await self.storage_manager.async_load_goals(category)
            self.section_scores[category] = ScoreEngine.compute_section_score(
                category, self.goals[category]
            )
        self.meta = await self.storage_manager.async_load_meta()

    async def _async_check_streak_breaks(self, today: date) -> None:
        """Zero streaks that missed more than a day."""
        for streak_type, record in self.streaks.items():
            if StreakEngine.check_for_break(record, today):
                const.LOGGER.info(
                    "INFO: %s streak broken for user '%s' (longest %s)",
                    streak_type,
                    self.user_id,
                    record[const.DATA_STREAK_LONGEST],
                )
                await self.storage_manager.async_save_streak(streak_type, record)

    async def _async_publish_scores(
        self,
        fresh_scores: dict[str, SectionScore | None],
        now: datetime,
        anchor: bool,
    ) -> None:
        """Publish section scores, applying decay when enabled.

        With decay, each published score is the larger of the fresh score and
        the anchored score decayed by the hours since it was anchored. User
        activity (`anchor=True`) moves the anchor to the newly published
        scores; ticks leave it in place so that decay accumulates.
        """
        published = dict(fresh_scores)
        anchored: dict[str, Any] = self.meta.get(const.DATA_META_SECTION_SCORES) or {}
        anchored_at = self.meta.get(const.DATA_META_SCORES_LAST_UPDATED)

        if self.decay_enabled and anchored_at:
            hours = dt_utils.hours_between(datetime.fromisoformat(anchored_at), now)
            for category, fresh in fresh_scores.items():
                previous = anchored.get(category)
                if fresh is None or previous is None:
                    continue
                decayed = ScoreEngine.apply_decay(previous, hours, fresh.capped)
                if decayed > fresh.capped:
                    published[category] = SectionScore(
                        value=max(fresh.value, decayed), capped=decayed
                    )

        self.section_scores = published
        self.overall_score = ScoreEngine.compute_overall_score(
            published, self.section_weights
        )

        capped = {
            category: score.capped if score is not None else None
            for category, score in published.items()
        }
        if self.decay_enabled and not anchor and anchored_at:
            return
        if (
            capped == anchored
            and self.meta.get(const.DATA_META_OVERALL_SCORE) == self.overall_score
            and anchored_at
            and not anchor
        ):
            return

        self.meta[const.DATA_META_SECTION_SCORES] = capped
        self.meta[const.DATA_META_OVERALL_SCORE] = self.overall_score
        self.meta[const.DATA_META_SCORES_LAST_UPDATED] = now.isoformat()
        await self.storage_manager.async_save_meta(self.meta)

    def _build_data(self) -> dict[str, Any]:
        return {
            const.DATA_META_OVERALL_SCORE: self.overall_score,
            const.DATA_META_SECTION_SCORES: dict(self.section_scores),
            const.DATA_SNAPSHOT_STREAKS: copy.deepcopy(self.streaks),
            const.DATA_SNAPSHOT_QADA: dict(self.qada),
        }

    # -------------------------------------------------------------------------------------
    # Sync Tick
    # -------------------------------------------------------------------------------------

    async def _async_sync_tick(self, _now: datetime) -> None:
        """Push on the sync interval unless a sync is still running."""
        if self._sync_in_progress:
            const.LOGGER.debug(
                "DEBUG: Sync still in progress for user '%s' - skipping tick",
                self.user_id,
            )
            return
        await self._async_push()

    async def _async_push(self) -> bool:
        if self._sync_in_progress:
            return False
        self._sync_in_progress = True
        try:
            pushed = await self.sync_bridge.async_push_local_to_remote(self.user_id)
        finally:
            self._sync_in_progress = False
        if pushed:
            self.meta = await self.storage_manager.async_load_meta()
        return pushed

    async def async_sync_now(self, direction: str = const.SYNC_DIRECTION_PUSH) -> bool:
        """Push to or pull from the remote row on demand.

        A successful pull replaces all local state (last pull wins).
        """
        if direction != const.SYNC_DIRECTION_PULL:
            return await self._async_push()

        if self._sync_in_progress:
            return False
        self._sync_in_progress = True
        try:
            pulled = await self.sync_bridge.async_pull_remote_to_local(self.user_id)
        finally:
            self._sync_in_progress = False
        if pulled:
            await self._async_load_all()
            await self._async_publish_scores(
                ScoreEngine.compute_all_section_scores(self.goals),
                dt_utils.dt_now_local(),
                anchor=True,
            )
            self.async_set_updated_data(self._build_data())
        return pulled

    # -------------------------------------------------------------------------------------
    # Mutation Pipeline
    # -------------------------------------------------------------------------------------

    async def _async_begin(self, now: datetime | None) -> datetime:
        """Resolve `now` and roll over any pending daily/weekly reset."""
        now = now or dt_utils.dt_now_local()
        await self._async_apply_resets(now)
        return now

    async def _async_commit(
        self,
        now: datetime,
        categories: list[str],
        streak_types: list[str],
    ) -> list[StreakUpdate]:
        """Persist changed goals, rescore, record streaks, push, notify listeners."""
        for category in categories:
            await self.storage_manager.async_save_goals(category, self.goals[category])

        fresh = dict(self.section_scores)
        for category in self.storage_manager.pop_stale_categories():
            fresh[category] = ScoreEngine.compute_section_score(
                category, self.goals[category]
            )
        await self._async_publish_scores(fresh, now, anchor=True)

        today = dt_utils.to_local_date(now)
        updates: list[StreakUpdate] = []
        for streak_type in streak_types:
            record = self.streaks[streak_type]
            update = StreakEngine.record_activity(record, today, streak_type)
            updates.append(update)
            if not update.changed:
                continue
            await self.storage_manager.async_save_streak(streak_type, record)
            if update.milestone is not None:
                self._handle_milestone(streak_type, update.milestone)

        if self.sync_bridge.is_configured:
            await self._async_push()

        self.async_set_updated_data(self._build_data())
        return updates

    def _handle_milestone(self, streak_type: str, milestone: int) -> None:
        """Announce a reached milestone on the event bus and via notify."""
        const.LOGGER.info(
            "INFO: User '%s' reached a %s day %s streak",
            self.user_id,
            milestone,
            streak_type,
        )
        self.hass.bus.async_fire(
            const.EVENT_STREAK_MILESTONE,
            {
                const.ATTR_USER_ID: self.user_id,
                const.ATTR_STREAK_TYPE: streak_type,
                const.ATTR_MILESTONE: milestone,
            },
        )
        if self.notify_service:
            self.hass.async_create_task(
                async_send_notification(
                    self.hass,
                    self.notify_service,
                    const.NOTIFICATION_TITLE_MILESTONE,
                    const.NOTIFICATION_MESSAGE_MILESTONE.format(
                        days=milestone, streak_type=streak_type
                    ),
                    extra_data={
                        const.ATTR_STREAK_TYPE: streak_type,
                        const.ATTR_MILESTONE: milestone,
                    },
                )
            )

    @staticmethod
    def _find_component(category: str, key: str) -> dict[str, Any] | None:
        for component in const.GOAL_COMPONENTS[category]:
            if key in (component[const.COMPONENT_GOAL], component[const.COMPONENT_COMPLETED]):
                return component
        return None

    def _increment(self, category: str, key: str, amount: int) -> None:
        """Add to a completion counter, clamping at the component ceiling."""
        if amount < 0:
            raise ValueError(const.ERROR_NEGATIVE_AMOUNT_FMT.format(key))
        record = self.goals[category]
        value = record.get(key, const.DEFAULT_ZERO) + amount
        component = self._find_component(category, key)
        if component and component.get(const.COMPONENT_CEILING) is not None:
            value = min(value, component[const.COMPONENT_CEILING])
        record[key] = max(const.DEFAULT_ZERO, value)

    # -------------------------------------------------------------------------------------
    # User Actions
    # -------------------------------------------------------------------------------------

    async def async_mark_prayer(
        self, prayer: str, completed: bool = True, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Mark a fard prayer as prayed (or not) for today.

        Completing the fifth prayer of the day also extends the prayer streak.
        Un-marking records no activity.
        """
        if prayer not in const.FARD_PRAYERS:
            raise ValueError(const.ERROR_UNKNOWN_PRAYER_FMT.format(prayer))
        now = await self._async_begin(now)

        fard = self.goals[const.CATEGORY_PRAYER][const.DATA_PRAYER_FARD]
        fard[prayer] = completed

        streak_types: list[str] = []
        if completed:
            streak_types.append(const.STREAK_TYPE_GENERAL)
            if all(fard.get(name) for name in const.FARD_PRAYERS):
                streak_types.append(const.STREAK_TYPE_PRAYER)
        return await self._async_commit(now, [const.CATEGORY_PRAYER], streak_types)

    async def async_log_sunnah(
        self, count: int = 1, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Add sunnah prayers to today's count."""
        now = await self._async_begin(now)
        self._increment(const.CATEGORY_PRAYER, const.DATA_PRAYER_SUNNAH_COMPLETED, count)
        return await self._async_commit(
            now, [const.CATEGORY_PRAYER], [const.STREAK_TYPE_GENERAL] if count else []
        )

    async def async_log_tahajjud(
        self, count: int = 1, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Add tahajjud nights to this week's count (at most 7)."""
        now = await self._async_begin(now)
        self._increment(
            const.CATEGORY_PRAYER, const.DATA_PRAYER_TAHAJJUD_COMPLETED, count
        )
        return await self._async_commit(
            now, [const.CATEGORY_PRAYER], [const.STREAK_TYPE_GENERAL] if count else []
        )

    async def async_add_dhikr(
        self, count: int, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Add dhikr to both the daily and the weekly counter."""
        now = await self._async_begin(now)
        self._increment(const.CATEGORY_DHIKR, const.DATA_DHIKR_DAILY_COMPLETED, count)
        self._increment(const.CATEGORY_DHIKR, const.DATA_DHIKR_WEEKLY_COMPLETED, count)
        return await self._async_commit(
            now, [const.CATEGORY_DHIKR], [const.STREAK_TYPE_GENERAL] if count else []
        )

    async def async_log_quran(
        self,
        pages: int = 0,
        verses: int = 0,
        memorized: int = 0,
        now: datetime | None = None,
    ) -> list[StreakUpdate]:
        """Add Quran pages and verses read today and verses memorized this week."""
        now = await self._async_begin(now)
        self._increment(const.CATEGORY_QURAN, const.DATA_QURAN_PAGES_COMPLETED, pages)
        self._increment(const.CATEGORY_QURAN, const.DATA_QURAN_VERSES_COMPLETED, verses)
        self._increment(
            const.CATEGORY_QURAN, const.DATA_QURAN_MEMORIZATION_COMPLETED, memorized
        )
        streak_types = (
            [const.STREAK_TYPE_GENERAL, const.STREAK_TYPE_QURAN]
            if pages or verses or memorized
            else []
        )
        return await self._async_commit(now, [const.CATEGORY_QURAN], streak_types)

    async def async_log_fasting_day(
        self, count: int = 1, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Add fasted days to this week's count (at most 7)."""
        now = await self._async_begin(now)
        self._increment(
            const.CATEGORY_FASTING, const.DATA_FASTING_WEEKLY_COMPLETED, count
        )
        return await self._async_commit(
            now, [const.CATEGORY_FASTING], [const.STREAK_TYPE_GENERAL] if count else []
        )

    async def async_record_workout(
        self, now: datetime | None = None
    ) -> list[StreakUpdate]:
        """Record a workout for today."""
        now = await self._async_begin(now)
        return await self._async_commit(
            now, [], [const.STREAK_TYPE_GENERAL, const.STREAK_TYPE_WORKOUT]
        )

    async def async_set_goal(
        self, category: str, goal: str, value: int, now: datetime | None = None
    ) -> None:
        """Change a goal target. A target of 0 disables that goal.

        Raises:
            ValueError: Unknown category or goal, or value out of range.
        """
        if category not in const.GOAL_CATEGORIES:
            raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))
        component = next(
            (
                component
                for component in const.GOAL_COMPONENTS[category]
                if component[const.COMPONENT_KIND] == const.GOAL_KIND_NUMERIC
                and component[const.COMPONENT_GOAL] == goal
            ),
            None,
        )
        if component is None:
            raise ValueError(const.ERROR_UNKNOWN_GOAL_FMT.format(goal, category))
        maximum = component.get(const.COMPONENT_CEILING, const.MAX_GOAL_VALUE)
        if not const.DEFAULT_ZERO <= value <= maximum:
            raise ValueError(
                const.ERROR_GOAL_OUT_OF_RANGE_FMT.format(value, goal, maximum)
            )

        now = await self._async_begin(now)
        self.goals[category][goal] = value
        await self._async_commit(now, [category], [])

    async def async_adjust_qada(self, prayer: str, delta: int) -> int:
        """Add to (or subtract from) a missed-prayer counter, never below zero.

        Returns:
            The new counter value.
        """
        if prayer not in const.FARD_PRAYERS:
            raise ValueError(const.ERROR_UNKNOWN_PRAYER_FMT.format(prayer))
        self.qada[prayer] = max(
            const.DEFAULT_ZERO, self.qada.get(prayer, const.DEFAULT_ZERO) + delta
        )
        await self.storage_manager.async_save_qada(self.qada)
        if self.sync_bridge.is_configured:
            await self._async_push()
        self.async_set_updated_data(self._build_data())
        return self.qada[prayer]

    async def async_reset_streak(self, streak_type: str) -> None:
        """Explicitly reset a streak back to its defaults."""
        if streak_type not in const.STREAK_TYPES:
            raise ValueError(const.ERROR_UNKNOWN_STREAK_TYPE_FMT.format(streak_type))
        StreakEngine.reset(self.streaks[streak_type])
        await self.storage_manager.async_save_streak(
            streak_type, self.streaks[streak_type]
        )
        const.LOGGER.info(
            "INFO: %s streak reset for user '%s'", streak_type, self.user_id
        )
        if self.sync_bridge.is_configured:
            await self._async_push()
        self.async_set_updated_data(self._build_data())
