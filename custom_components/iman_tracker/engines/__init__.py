"""Engines for Iman Tracker.

Pure calculation engines, free of Home Assistant imports:
    - ScoreEngine: Section scores, overall score, decay
    - StreakEngine: Streak state machine and milestones
"""

from .score_engine import ScoreEngine, SectionScore
from .streak_engine import StreakEngine, StreakUpdate

__all__ = ["ScoreEngine", "SectionScore", "StreakEngine", "StreakUpdate"]
