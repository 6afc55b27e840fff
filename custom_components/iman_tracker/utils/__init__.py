# File: utils/__init__.py
"""Pure Python utilities for Iman Tracker.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ DIRECTIVE 1 - UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Calendar-day arithmetic, ISO week keys, timezone handling
    - math_utils: Score rounding, ratios, weighted averages

Usage:
    from . import dt_utils
    from .math_utils import round_score
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
