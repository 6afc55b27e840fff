"""Streak Engine - Day-granularity streak state machine.

One StreakRecord is kept per streak type (general, prayer, quran, workout).
The engine advances, breaks and resets those records; persistence is the
caller's job.

Design Principles:
    - Stateless: Operates on passed record dicts, mutating them in place
    - Calendar days: Dates are compared as local calendar dates, never as
      24-hour spans
    - Pure: No Home Assistant imports, testable without fixtures
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from .. import const
from ..utils import dt_utils


@dataclass(frozen=True)
class StreakUpdate:
    """Result of recording activity on a streak.

    Attributes:
        changed: False when the call was a no-op (already counted today, or
            the last active date lies in the future)
        current_streak: Streak value after the call
        is_new_record: True when the longest streak grew
        milestone: Milestone day count reached by this call, if any
    """

    changed: bool
    current_streak: int
    is_new_record: bool = False
    milestone: int | None = None


class StreakEngine:
    """Stateless engine for streak bookkeeping.

    Example:
        record = await storage.async_load_streak("prayer")
        update = StreakEngine.record_activity(record, today, "prayer")
        if update.changed:
            await storage.async_save_streak("prayer", record)
    """

    # ────────────────────────────────────────────────────────────────
    # Date Helpers
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def calendar_day_diff(today: date, last_active_date: date | str | None) -> int | None:
        """Return whole calendar days since the last active date.

        Returns None when the record has no (parseable) last active date.
        """
        return dt_utils.calendar_day_diff(today, last_active_date)

    # ────────────────────────────────────────────────────────────────
    # State
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def get_state(record: dict[str, Any], today: date) -> str:
        """Return the streak state for `today`.

        States:
        - no_activity_yet: Never active
        - active_today: Already counted today
        - awaiting_today: Last active yesterday, streak alive but not extended
        - streak_broken: Gap of more than one day

        A last active date after today (clock moved back) reads as
        active_today.
        """
        diff = StreakEngine.calendar_day_diff(
            today, record.get(const.DATA_STREAK_LAST_ACTIVE)
        )
        if diff is None:
            return const.STREAK_STATE_NO_ACTIVITY
        if diff <= 0:
            return const.STREAK_STATE_ACTIVE_TODAY
        if diff == 1:
            return const.STREAK_STATE_AWAITING_TODAY
        return const.STREAK_STATE_BROKEN

    @staticmethod
    def milestone_for(streak_type: str, value: int) -> int | None:
        """Return `value` if it is a milestone for the streak type, else None.

        Examples:
            milestone_for("prayer", 180) → 180
            milestone_for("workout", 180) → None
        """
        milestones = const.STREAK_MILESTONES.get(
            streak_type, const.STREAK_MILESTONES_BASE
        )
        return value if value in milestones else None

    # ────────────────────────────────────────────────────────────────
    # Transitions
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def record_activity(
        record: dict[str, Any],
        today: date,
        streak_type: str = const.STREAK_TYPE_GENERAL,
    ) -> StreakUpdate:
        """Count activity for `today`, mutating `record` in place.

        Streak logic:
        - Same day as last activity: No change (already counted)
        - Day after last activity: Increment streak
        - No previous activity or a gap: Start a new streak at 1
        - Last activity after today (clock moved back): No change

        Args:
            record: StreakRecord dict
            today: Local calendar date of the activity
            streak_type: Used for milestone lookup

        Returns:
            StreakUpdate describing the transition.

        Example:
            # last_active_date yesterday, current_streak 6
            StreakEngine.record_activity(record, today, "general")
            # StreakUpdate(changed=True, current_streak=7, ..., milestone=7)
        """
        current = record.get(const.DATA_STREAK_CURRENT, const.DEFAULT_ZERO)
        diff = StreakEngine.calendar_day_diff(
            today, record.get(const.DATA_STREAK_LAST_ACTIVE)
        )

        if diff is not None and diff <= 0:
            return StreakUpdate(changed=False, current_streak=current)

        today_iso = today.isoformat()
        if diff == 1:
            current += 1
            if not record.get(const.DATA_STREAK_START):
                record[const.DATA_STREAK_START] = (
                    today - timedelta(days=current - 1)
                ).isoformat()
        else:
            current = 1
            record[const.DATA_STREAK_START] = today_iso

        previous_longest = record.get(const.DATA_STREAK_LONGEST, const.DEFAULT_ZERO)
        record[const.DATA_STREAK_CURRENT] = current
        record[const.DATA_STREAK_LONGEST] = max(previous_longest, current)
        record[const.DATA_STREAK_TOTAL_DAYS] = (
            record.get(const.DATA_STREAK_TOTAL_DAYS, const.DEFAULT_ZERO) + 1
        )
        record[const.DATA_STREAK_LAST_ACTIVE] = today_iso

        return StreakUpdate(
            changed=True,
            current_streak=current,
            is_new_record=current > previous_longest,
            milestone=StreakEngine.milestone_for(streak_type, current),
        )

    @staticmethod
    def check_for_break(record: dict[str, Any], today: date) -> bool:
        """Zero the current streak when more than one day has been missed.

        Longest streak and total active days are kept.

        Returns:
            True if the streak was broken by this call.

        Example:
            # last active 3 days ago, current_streak 5
            StreakEngine.check_for_break(record, today)  # True
            # current_streak 0, longest_streak 5
        """
        diff = StreakEngine.calendar_day_diff(
            today, record.get(const.DATA_STREAK_LAST_ACTIVE)
        )
        if diff is None or diff <= 1:
            return False
        if record.get(const.DATA_STREAK_CURRENT, const.DEFAULT_ZERO) <= 0:
            return False

        record[const.DATA_STREAK_LONGEST] = max(
            record.get(const.DATA_STREAK_LONGEST, const.DEFAULT_ZERO),
            record[const.DATA_STREAK_CURRENT],
        )
        record[const.DATA_STREAK_CURRENT] = 0
        record[const.DATA_STREAK_START] = None
        return True

    @staticmethod
    def reset(record: dict[str, Any]) -> None:
        """Restore a streak record to its defaults in place."""
        record.clear()
        record.update(copy.deepcopy(const.DEFAULT_STREAK))
