"""Scoring engine constants.

Score bounds, the neutral values used when a direction has nothing to
measure, and the situational flag names rules may test.
"""

from __future__ import annotations

# =============================================================================
# Score Bounds
# =============================================================================

# Default bounds for a sub-score
SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Bounds for signed balance scores (negative = deficient, positive = excessive)
SIGNED_SCORE_MIN = -100.0
SIGNED_SCORE_MAX = 100.0

# =============================================================================
# Neutral Values
# =============================================================================

# Coverage assumed for a direction that owns no measured sector
NEUTRAL_COVERAGE = 50.0

# =============================================================================
# Situational Flags
# =============================================================================

# Flag names a FlagRule may test against DirectionFlags
FLAG_NAMES: frozenset[str] = frozenset({"heavy", "blocked", "clear", "has_usage"})

__all__ = [
    "FLAG_NAMES",
    "NEUTRAL_COVERAGE",
    "SCORE_MAX",
    "SCORE_MIN",
    "SIGNED_SCORE_MAX",
    "SIGNED_SCORE_MIN",
]
