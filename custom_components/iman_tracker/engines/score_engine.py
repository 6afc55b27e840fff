"""Score Engine - Section and overall score calculation.

Turns the goal records of each category into 0-100 section scores and combines
those into the overall Iman score.

Design Principles:
    - Stateless: No coordinator reference, operates on passed data structures
    - Table driven: Every record field is described by const.GOAL_COMPONENTS
    - Pure: No Home Assistant imports, testable without fixtures
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.math_utils import calculate_ratio, clamp, round_score, weighted_average

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class SectionScore:
    """Score of one category.

    Attributes:
        value: Display score. Above 100 only when a component shows
            over-achievement (dhikr).
        capped: Same score with every component ratio capped at 1; always
            within 0-100 and used for the overall score.
    """

    value: float
    capped: float


class ScoreEngine:
    """Stateless engine for section scores, overall score and decay.

    Example:
        goals = {category: await storage.async_load_goals(category) ...}
        sections = ScoreEngine.compute_all_section_scores(goals)
        overall = ScoreEngine.compute_overall_score(sections)
    """

    # ────────────────────────────────────────────────────────────────
    # Component Ratios
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def _component_ratio(
        component: Mapping[str, Any], record: Mapping[str, Any]
    ) -> tuple[float, float] | None:
        """Return (display_ratio, capped_ratio) for one component.

        Returns None when the component is inactive (target of zero).
        """
        if component[const.COMPONENT_KIND] == const.GOAL_KIND_FLAGS:
            flags = record.get(component[const.COMPONENT_GOAL]) or {}
            ratio = calculate_ratio(
                sum(1 for done in flags.values() if done), len(flags)
            )
            if ratio is None:
                return None
            return ratio, ratio

        target = record.get(component[const.COMPONENT_GOAL], const.DEFAULT_ZERO) or 0
        completed = (
            record.get(component[const.COMPONENT_COMPLETED], const.DEFAULT_ZERO) or 0
        )
        capped = calculate_ratio(completed, target)
        if capped is None:
            return None
        if component.get(const.COMPONENT_ALLOW_OVER):
            return calculate_ratio(completed, target, cap=False), capped
        return capped, capped

    # ────────────────────────────────────────────────────────────────
    # Section & Overall Scores
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def compute_section_score(
        category: str, record: Mapping[str, Any]
    ) -> SectionScore | None:
        """Compute the score of one category.

        Each active component (target > 0) contributes its completion ratio,
        weighted by the component weight. Components with a target of zero are
        left out and the remaining weights renormalized.

        Args:
            category: One of const.GOAL_CATEGORIES
            record: Goal record of that category

        Returns:
            SectionScore, or None when every target of the category is zero.

        Raises:
            ValueError: Unknown category.

        Example:
            # fajr and dhuhr prayed, sunnah and tahajjud goals disabled
            ScoreEngine.compute_section_score("prayer", record)
            # SectionScore(value=40.0, capped=40.0)
        """
        components = const.GOAL_COMPONENTS.get(category)
        if components is None:
            raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))

        display_pairs: list[tuple[float, float]] = []
        capped_pairs: list[tuple[float, float]] = []
        for component in components:
            ratios = ScoreEngine._component_ratio(component, record)
            if ratios is None:
                continue
            weight = component[const.COMPONENT_WEIGHT]
            display_pairs.append((ratios[0], weight))
            capped_pairs.append((ratios[1], weight))

        display = weighted_average(display_pairs)
        capped = weighted_average(capped_pairs)
        if display is None or capped is None:
            return None

        return SectionScore(
            value=round_score(display * 100),
            capped=round_score(clamp(capped * 100, const.SCORE_MIN, const.SCORE_MAX)),
        )

    @staticmethod
    def compute_all_section_scores(
        goals: Mapping[str, Mapping[str, Any]],
    ) -> dict[str, SectionScore | None]:
        """Compute section scores for every category present in `goals`."""
        return {
            category: ScoreEngine.compute_section_score(category, goals[category])
            for category in const.GOAL_CATEGORIES
            if category in goals
        }

    @staticmethod
    def compute_overall_score(
        section_scores: Mapping[str, SectionScore | None],
        weights: Mapping[str, float] | None = None,
    ) -> float:
        """Combine capped section scores into the overall score.

        Sections without a score or with zero weight are excluded and the
        remaining weights renormalized. Returns 0.0 when nothing remains.

        Example:
            ScoreEngine.compute_overall_score(
                {"prayer": SectionScore(100, 100), "dhikr": None}
            )
            # 100.0 - dhikr excluded, prayer carries all weight
        """
        weights = weights if weights is not None else const.DEFAULT_SECTION_WEIGHTS
        overall = weighted_average(
            (score.capped, weights.get(category, const.DEFAULT_ZERO))
            for category, score in section_scores.items()
            if score is not None
        )
        if overall is None:
            return 0.0
        return round_score(overall)

    # ────────────────────────────────────────────────────────────────
    # Goal Completion
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def check_goals_completion(
        category: str, record: Mapping[str, Any]
    ) -> dict[str, bool]:
        """Return whether all daily and all weekly goals of a category are met.

        A scope with no active component reports False.

        Returns:
            {"daily_met": bool, "weekly_met": bool}
        """
        components = const.GOAL_COMPONENTS.get(category)
        if components is None:
            raise ValueError(const.ERROR_UNKNOWN_CATEGORY_FMT.format(category))

        met: dict[str, list[bool]] = {
            const.GOAL_SCOPE_DAILY: [],
            const.GOAL_SCOPE_WEEKLY: [],
        }
        for component in components:
            ratios = ScoreEngine._component_ratio(component, record)
            if ratios is None:
                continue
            met[component[const.COMPONENT_SCOPE]].append(ratios[1] >= 1)

        return {
            const.ATTR_DAILY_MET: bool(met[const.GOAL_SCOPE_DAILY])
            and all(met[const.GOAL_SCOPE_DAILY]),
            const.ATTR_WEEKLY_MET: bool(met[const.GOAL_SCOPE_WEEKLY])
            and all(met[const.GOAL_SCOPE_WEEKLY]),
        }

    # ────────────────────────────────────────────────────────────────
    # Decay
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def get_decay_multiplier(completion: float) -> float:
        """Return the decay multiplier for a completion percentage.

        Fully completed sections do not decay; the lower the completion, the
        faster the score falls.

        Examples:
            get_decay_multiplier(100) → 0.0
            get_decay_multiplier(60) → 0.7
            get_decay_multiplier(10) → 1.8
        """
        for threshold, multiplier in const.DECAY_MULTIPLIERS:
            if completion >= threshold:
                return multiplier
        return const.DECAY_MULTIPLIERS[-1][1]

    @staticmethod
    def apply_decay(score: float, hours_elapsed: float, completion: float) -> float:
        """Decay a previously published score by the time since it was computed.

        Args:
            score: Score published earlier
            hours_elapsed: Hours since that score was computed
            completion: Current completion percentage of the section

        Returns:
            Decayed score, never below 0. Unchanged under one hour. At most
            DECAY_MAX_PER_DAY points are lost per started day.

        Examples:
            apply_decay(80, 10, 60) → 74.4  (0.8 * 10 * 0.7 = 5.6 points)
            apply_decay(100, 48, 0) → 50.0  (69.12 points, capped at 2 * 25)
        """
        if hours_elapsed < const.DECAY_MIN_HOURS:
            return score
        decay = min(
            const.DECAY_BASE_RATE_PER_HOUR
            * hours_elapsed
            * ScoreEngine.get_decay_multiplier(completion),
            const.DECAY_MAX_PER_DAY * math.ceil(hours_elapsed / const.HOURS_PER_DAY),
        )
        return round_score(clamp(score - decay, const.SCORE_MIN, const.SCORE_MAX))
