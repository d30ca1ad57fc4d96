"""Infrastructure layer - external concerns and formatters."""

from .formatters import (
    AnalysisReportFormatter,
    JsonExporter,
    SectorTableFormatter,
    TextReportFormatter,
)

__all__ = [
    "AnalysisReportFormatter",
    "JsonExporter",
    "SectorTableFormatter",
    "TextReportFormatter",
]
