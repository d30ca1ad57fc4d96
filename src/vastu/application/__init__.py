"""Application layer - use cases and orchestration."""

from .commands import RunAnalysisCommand, build_estimator
from .dtos import AnalysisOutput, AnalysisRequest

__all__ = [
    "AnalysisOutput",
    "AnalysisRequest",
    "RunAnalysisCommand",
    "build_estimator",
]
