"""Domain layer for directional zone analysis."""

from .errors import InvalidBoundaryError, MissingAttributeRecordError
from .value_objects import (
    BoundingBox,
    DirectionCoverage,
    MainDirection,
    Point2D,
    Sector,
    SectorCount,
    SectorCoverage,
    Severity,
    SeverityBand,
    SeverityScale,
)

__all__ = [
    "BoundingBox",
    "DirectionCoverage",
    "InvalidBoundaryError",
    "MainDirection",
    "MissingAttributeRecordError",
    "Point2D",
    "Sector",
    "SectorCount",
    "SectorCoverage",
    "Severity",
    "SeverityBand",
    "SeverityScale",
]
