"""Directional analyses configured as data.

Importing this package registers every bundled analysis with
``AnalysisRegistry``.
"""

from .base import AnalysisDefinition, AnalysisRegistry
from .dominance import DOMINANCE_ANALYSIS, DOMINANCE_RULES, DOMINANCE_TABLE
from .loss import LOSS_ANALYSIS, LOSS_RULES, LOSS_TABLE
from .prosperity import PROSPERITY_ANALYSIS, PROSPERITY_RULES, PROSPERITY_TABLE

__all__ = [
    "AnalysisDefinition",
    "AnalysisRegistry",
    "DOMINANCE_ANALYSIS",
    "DOMINANCE_RULES",
    "DOMINANCE_TABLE",
    "LOSS_ANALYSIS",
    "LOSS_RULES",
    "LOSS_TABLE",
    "PROSPERITY_ANALYSIS",
    "PROSPERITY_RULES",
    "PROSPERITY_TABLE",
]
