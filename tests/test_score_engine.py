"""Tests for ScoreEngine.

Tests cover:
- Section scores (flags, numeric, over-achievement, disabled goals)
- Overall score (weights, exclusion, renormalization)
- Goal completion flags
- Decay multiplier bands and decay application
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from custom_components.iman_tracker import const
from custom_components.iman_tracker.engines.score_engine import (
    ScoreEngine,
    SectionScore,
)


@pytest.fixture
def prayer_record() -> dict[str, Any]:
    """Return a default prayer record."""
    return copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_PRAYER])


@pytest.fixture
def dhikr_record() -> dict[str, Any]:
    """Return a default dhikr record."""
    return copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_DHIKR])


class TestComputeSectionScore:
    """Tests for compute_section_score."""

    def test_two_of_five_fard_with_other_goals_disabled(
        self, prayer_record: dict[str, Any]
    ) -> None:
        """Fajr and dhuhr prayed, sunnah and tahajjud disabled → 40."""
        prayer_record[const.DATA_PRAYER_FARD][const.PRAYER_FAJR] = True
        prayer_record[const.DATA_PRAYER_FARD][const.PRAYER_DHUHR] = True
        prayer_record[const.DATA_PRAYER_SUNNAH_GOAL] = 0
        prayer_record[const.DATA_PRAYER_TAHAJJUD_GOAL] = 0

        score = ScoreEngine.compute_section_score(const.CATEGORY_PRAYER, prayer_record)

        assert score == SectionScore(value=40.0, capped=40.0)

    def test_prayer_components_are_weighted(
        self, prayer_record: dict[str, Any]
    ) -> None:
        """All fard (70) and full sunnah (20) with no tahajjud (10) → 90."""
        for prayer in const.FARD_PRAYERS:
            prayer_record[const.DATA_PRAYER_FARD][prayer] = True
        prayer_record[const.DATA_PRAYER_SUNNAH_COMPLETED] = 5

        score = ScoreEngine.compute_section_score(const.CATEGORY_PRAYER, prayer_record)

        assert score is not None
        assert score.value == 90.0
        assert score.capped == 90.0

    def test_dhikr_over_achievement_shows_in_value_only(
        self, dhikr_record: dict[str, Any]
    ) -> None:
        """Daily target 100, completed 150 → display 150, capped 100."""
        dhikr_record[const.DATA_DHIKR_DAILY_COMPLETED] = 150
        dhikr_record[const.DATA_DHIKR_WEEKLY_GOAL] = 0

        score = ScoreEngine.compute_section_score(const.CATEGORY_DHIKR, dhikr_record)

        assert score == SectionScore(value=150.0, capped=100.0)

    def test_numeric_components_without_over_achievement_cap_at_100(self) -> None:
        """Quran pages beyond the goal do not raise the display value."""
        record = copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_QURAN])
        record[const.DATA_QURAN_PAGES_COMPLETED] = 10
        record[const.DATA_QURAN_VERSES_GOAL] = 0
        record[const.DATA_QURAN_MEMORIZATION_GOAL] = 0

        score = ScoreEngine.compute_section_score(const.CATEGORY_QURAN, record)

        assert score == SectionScore(value=100.0, capped=100.0)

    def test_all_targets_zero_returns_none(self) -> None:
        """A category whose every goal is disabled has no score."""
        record = copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_FASTING])
        record[const.DATA_FASTING_WEEKLY_GOAL] = 0

        assert ScoreEngine.compute_section_score(const.CATEGORY_FASTING, record) is None

    def test_rounds_to_two_decimals(self) -> None:
        """One of three verses read → 33.33."""
        record = copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_QURAN])
        record[const.DATA_QURAN_PAGES_GOAL] = 0
        record[const.DATA_QURAN_MEMORIZATION_GOAL] = 0
        record[const.DATA_QURAN_VERSES_GOAL] = 3
        record[const.DATA_QURAN_VERSES_COMPLETED] = 1

        score = ScoreEngine.compute_section_score(const.CATEGORY_QURAN, record)

        assert score is not None
        assert score.value == 33.33

    def test_capped_is_within_bounds_for_large_completions(
        self, dhikr_record: dict[str, Any]
    ) -> None:
        """Capped score stays within 0-100 however far dhikr overshoots."""
        dhikr_record[const.DATA_DHIKR_DAILY_COMPLETED] = 100000
        dhikr_record[const.DATA_DHIKR_WEEKLY_COMPLETED] = 100000

        score = ScoreEngine.compute_section_score(const.CATEGORY_DHIKR, dhikr_record)

        assert score is not None
        assert const.SCORE_MIN <= score.capped <= const.SCORE_MAX
        assert score.value > const.SCORE_MAX

    def test_unknown_category_raises(self) -> None:
        """Unknown categories are rejected."""
        with pytest.raises(ValueError):
            ScoreEngine.compute_section_score("charity", {})


class TestComputeOverallScore:
    """Tests for compute_overall_score."""

    def test_default_weights(self) -> None:
        """Prayer 40, Quran 30, dhikr 30; fasting weight 0 is ignored."""
        sections = {
            const.CATEGORY_PRAYER: SectionScore(100.0, 100.0),
            const.CATEGORY_QURAN: SectionScore(50.0, 50.0),
            const.CATEGORY_DHIKR: SectionScore(0.0, 0.0),
            const.CATEGORY_FASTING: SectionScore(100.0, 100.0),
        }

        assert ScoreEngine.compute_overall_score(sections) == 55.0

    def test_uses_capped_scores(self) -> None:
        """Dhikr over-achievement contributes 100, not 150."""
        sections = {
            const.CATEGORY_DHIKR: SectionScore(150.0, 100.0),
        }

        assert ScoreEngine.compute_overall_score(sections) == 100.0

    def test_missing_sections_are_renormalized(self) -> None:
        """A section without score does not drag the average down."""
        sections = {
            const.CATEGORY_PRAYER: SectionScore(80.0, 80.0),
            const.CATEGORY_QURAN: None,
            const.CATEGORY_DHIKR: SectionScore(20.0, 20.0),
        }

        # (80*40 + 20*30) / 70
        assert ScoreEngine.compute_overall_score(sections) == 54.29

    def test_custom_weights(self) -> None:
        """Options can give fasting a weight."""
        sections = {
            const.CATEGORY_PRAYER: SectionScore(100.0, 100.0),
            const.CATEGORY_FASTING: SectionScore(0.0, 0.0),
        }
        weights = {const.CATEGORY_PRAYER: 50, const.CATEGORY_FASTING: 50}

        assert ScoreEngine.compute_overall_score(sections, weights) == 50.0

    def test_nothing_left_returns_zero(self) -> None:
        """No scored section with weight → 0.0."""
        sections = {
            const.CATEGORY_PRAYER: None,
            const.CATEGORY_FASTING: SectionScore(100.0, 100.0),
        }

        assert ScoreEngine.compute_overall_score(sections) == 0.0


class TestCheckGoalsCompletion:
    """Tests for check_goals_completion."""

    def test_daily_met_when_all_daily_goals_done(
        self, dhikr_record: dict[str, Any]
    ) -> None:
        """Daily dhikr reached, weekly not yet."""
        dhikr_record[const.DATA_DHIKR_DAILY_COMPLETED] = 100
        dhikr_record[const.DATA_DHIKR_WEEKLY_COMPLETED] = 100

        result = ScoreEngine.check_goals_completion(const.CATEGORY_DHIKR, dhikr_record)

        assert result == {const.ATTR_DAILY_MET: True, const.ATTR_WEEKLY_MET: False}

    def test_scope_without_goals_is_not_met(self) -> None:
        """Fasting has no daily goal."""
        record = copy.deepcopy(const.DEFAULT_GOALS[const.CATEGORY_FASTING])
        record[const.DATA_FASTING_WEEKLY_COMPLETED] = 2

        result = ScoreEngine.check_goals_completion(const.CATEGORY_FASTING, record)

        assert result == {const.ATTR_DAILY_MET: False, const.ATTR_WEEKLY_MET: True}


class TestDecay:
    """Tests for get_decay_multiplier and apply_decay."""

    @pytest.mark.parametrize(
        ("completion", "expected"),
        [(100, 0.0), (85, 0.3), (50, 0.7), (30, 1.2), (0, 1.8)],
    )
    def test_multiplier_bands(self, completion: float, expected: float) -> None:
        """Lower completion decays faster."""
        assert ScoreEngine.get_decay_multiplier(completion) == expected

    def test_no_decay_under_one_hour(self) -> None:
        """Scores are left alone within the first hour."""
        assert ScoreEngine.apply_decay(80.0, 0.5, 0) == 80.0

    def test_decay_scaled_by_completion(self) -> None:
        """0.8 points/hour * 10 hours * 0.7 = 5.6 points."""
        assert ScoreEngine.apply_decay(80.0, 10, 60) == 74.4

    def test_decay_is_bounded(self) -> None:
        """At most 25 points are lost per day and the score never goes negative."""
        assert ScoreEngine.apply_decay(90.0, 20, 0) == 65.0
        assert ScoreEngine.apply_decay(10.0, 20, 0) == 0.0

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [(20, 75.0), (30, 56.8), (48, 50.0), (72, 25.0), (96, 0.0)],
    )
    def test_cap_grows_with_each_started_day(
        self, hours: float, expected: float
    ) -> None:
        """A long gap keeps losing up to 25 points for every day it spans."""
        assert ScoreEngine.apply_decay(100.0, hours, 0) == expected

    def test_complete_sections_do_not_decay(self) -> None:
        """Completion of 100 freezes the score."""
        assert ScoreEngine.apply_decay(100.0, 48, 100) == 100.0
