"""Tests for StreakEngine.

Tests cover:
- record_activity transitions (first day, consecutive, gap, same day, clock
  moved back)
- check_for_break
- get_state
- milestone detection
- reset
"""

from __future__ import annotations

import copy
from datetime import date, timedelta
from typing import Any

import pytest

from custom_components.iman_tracker import const
from custom_components.iman_tracker.engines.streak_engine import StreakEngine

DAY1 = date(2026, 3, 2)


@pytest.fixture
def record() -> dict[str, Any]:
    """Return a fresh streak record."""
    return copy.deepcopy(const.DEFAULT_STREAK)


class TestRecordActivity:
    """Tests for record_activity."""

    def test_first_activity_starts_streak(self, record: dict[str, Any]) -> None:
        """First activity ever → streak 1 starting today."""
        update = StreakEngine.record_activity(record, DAY1)

        assert update.changed
        assert update.current_streak == 1
        assert update.is_new_record
        assert record[const.DATA_STREAK_LONGEST] == 1
        assert record[const.DATA_STREAK_TOTAL_DAYS] == 1
        assert record[const.DATA_STREAK_LAST_ACTIVE] == "2026-03-02"
        assert record[const.DATA_STREAK_START] == "2026-03-02"

    def test_consecutive_days_increment(self, record: dict[str, Any]) -> None:
        """Day 1 then day 2 → 1 then 2."""
        StreakEngine.record_activity(record, DAY1)
        update = StreakEngine.record_activity(record, DAY1 + timedelta(days=1))

        assert update.current_streak == 2
        assert record[const.DATA_STREAK_START] == "2026-03-02"
        assert record[const.DATA_STREAK_TOTAL_DAYS] == 2

    def test_same_day_is_noop(self, record: dict[str, Any]) -> None:
        """A second activity on the same day changes nothing."""
        StreakEngine.record_activity(record, DAY1)
        before = copy.deepcopy(record)

        update = StreakEngine.record_activity(record, DAY1)

        assert not update.changed
        assert update.current_streak == 1
        assert record == before

    def test_gap_restarts_streak(self, record: dict[str, Any]) -> None:
        """Missing a day restarts at 1 but keeps longest and total."""
        StreakEngine.record_activity(record, DAY1)
        StreakEngine.record_activity(record, DAY1 + timedelta(days=1))

        update = StreakEngine.record_activity(record, DAY1 + timedelta(days=4))

        assert update.current_streak == 1
        assert not update.is_new_record
        assert record[const.DATA_STREAK_LONGEST] == 2
        assert record[const.DATA_STREAK_TOTAL_DAYS] == 3
        assert record[const.DATA_STREAK_START] == "2026-03-06"

    def test_clock_moved_back_is_noop(self, record: dict[str, Any]) -> None:
        """Last active date after today leaves the record untouched."""
        StreakEngine.record_activity(record, DAY1)
        before = copy.deepcopy(record)

        update = StreakEngine.record_activity(record, DAY1 - timedelta(days=1))

        assert not update.changed
        assert record == before

    def test_longest_never_below_current(self, record: dict[str, Any]) -> None:
        """Longest streak keeps up with the current one every day."""
        for offset in range(10):
            StreakEngine.record_activity(record, DAY1 + timedelta(days=offset))
            assert record[const.DATA_STREAK_LONGEST] >= record[const.DATA_STREAK_CURRENT]

    def test_milestone_reported(self, record: dict[str, Any]) -> None:
        """Reaching day 3 reports the milestone."""
        record.update(
            {
                const.DATA_STREAK_CURRENT: 2,
                const.DATA_STREAK_LONGEST: 2,
                const.DATA_STREAK_TOTAL_DAYS: 2,
                const.DATA_STREAK_LAST_ACTIVE: (DAY1 - timedelta(days=1)).isoformat(),
            }
        )

        update = StreakEngine.record_activity(record, DAY1, const.STREAK_TYPE_WORKOUT)

        assert update.milestone == 3

    def test_missing_start_is_derived_from_length(
        self, record: dict[str, Any]
    ) -> None:
        """A continued streak without a start date gets the day it began."""
        record.update(
            {
                const.DATA_STREAK_CURRENT: 2,
                const.DATA_STREAK_LONGEST: 2,
                const.DATA_STREAK_TOTAL_DAYS: 2,
                const.DATA_STREAK_LAST_ACTIVE: (DAY1 - timedelta(days=1)).isoformat(),
                const.DATA_STREAK_START: None,
            }
        )

        update = StreakEngine.record_activity(record, DAY1)

        assert update.current_streak == 3
        assert record[const.DATA_STREAK_START] == "2026-02-28"


class TestCheckForBreak:
    """Tests for check_for_break."""

    def test_three_days_gap_breaks(self, record: dict[str, Any]) -> None:
        """Last active 3 days ago with streak 5 → 0, longest 5."""
        record.update(
            {
                const.DATA_STREAK_CURRENT: 5,
                const.DATA_STREAK_LONGEST: 5,
                const.DATA_STREAK_TOTAL_DAYS: 5,
                const.DATA_STREAK_LAST_ACTIVE: (DAY1 - timedelta(days=3)).isoformat(),
                const.DATA_STREAK_START: (DAY1 - timedelta(days=7)).isoformat(),
            }
        )

        assert StreakEngine.check_for_break(record, DAY1)
        assert record[const.DATA_STREAK_CURRENT] == 0
        assert record[const.DATA_STREAK_LONGEST] == 5
        assert record[const.DATA_STREAK_TOTAL_DAYS] == 5
        assert record[const.DATA_STREAK_START] is None

    def test_break_after_two_day_streak(self, record: dict[str, Any]) -> None:
        """Day 1, day 2, then a check 3 days later → 0, longest 2."""
        StreakEngine.record_activity(record, DAY1)
        StreakEngine.record_activity(record, DAY1 + timedelta(days=1))

        assert StreakEngine.check_for_break(record, DAY1 + timedelta(days=4))
        assert record[const.DATA_STREAK_CURRENT] == 0
        assert record[const.DATA_STREAK_LONGEST] == 2

    def test_yesterday_does_not_break(self, record: dict[str, Any]) -> None:
        """A streak last extended yesterday is still alive."""
        StreakEngine.record_activity(record, DAY1)

        assert not StreakEngine.check_for_break(record, DAY1 + timedelta(days=1))
        assert record[const.DATA_STREAK_CURRENT] == 1

    def test_already_broken_is_not_reported_again(
        self, record: dict[str, Any]
    ) -> None:
        """Once zeroed, later checks report nothing."""
        StreakEngine.record_activity(record, DAY1)
        assert StreakEngine.check_for_break(record, DAY1 + timedelta(days=3))
        assert not StreakEngine.check_for_break(record, DAY1 + timedelta(days=4))

    def test_no_activity_never_breaks(self, record: dict[str, Any]) -> None:
        """A record without activity has nothing to break."""
        assert not StreakEngine.check_for_break(record, DAY1)


class TestGetState:
    """Tests for get_state."""

    def test_states(self, record: dict[str, Any]) -> None:
        """Each day distance maps to its state."""
        assert StreakEngine.get_state(record, DAY1) == const.STREAK_STATE_NO_ACTIVITY

        StreakEngine.record_activity(record, DAY1)

        assert StreakEngine.get_state(record, DAY1) == const.STREAK_STATE_ACTIVE_TODAY
        assert (
            StreakEngine.get_state(record, DAY1 + timedelta(days=1))
            == const.STREAK_STATE_AWAITING_TODAY
        )
        assert (
            StreakEngine.get_state(record, DAY1 + timedelta(days=2))
            == const.STREAK_STATE_BROKEN
        )


class TestMilestones:
    """Tests for milestone_for."""

    @pytest.mark.parametrize("days", [3, 7, 14, 30, 60, 90, 100])
    def test_base_milestones_for_all_types(self, days: int) -> None:
        """Base milestones apply to every streak type."""
        for streak_type in const.STREAK_TYPES:
            assert StreakEngine.milestone_for(streak_type, days) == days

    def test_extended_milestones_only_for_prayer_and_general(self) -> None:
        """180 and 365 are milestones for prayer and general only."""
        assert StreakEngine.milestone_for(const.STREAK_TYPE_PRAYER, 365) == 365
        assert StreakEngine.milestone_for(const.STREAK_TYPE_GENERAL, 180) == 180
        assert StreakEngine.milestone_for(const.STREAK_TYPE_QURAN, 180) is None
        assert StreakEngine.milestone_for(const.STREAK_TYPE_WORKOUT, 365) is None

    def test_non_milestone(self) -> None:
        """Ordinary days are not milestones."""
        assert StreakEngine.milestone_for(const.STREAK_TYPE_GENERAL, 4) is None


def test_reset_restores_defaults(record: dict[str, Any]) -> None:
    """Explicit reset returns the record to its defaults."""
    StreakEngine.record_activity(record, DAY1)

    StreakEngine.reset(record)

    assert record == const.DEFAULT_STREAK
