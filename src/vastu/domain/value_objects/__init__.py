"""Value objects for the directional zone domain.

This module provides immutable data types used throughout the analysis
framework. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Planar geometry
from ._geometry import BoundingBox, Point2D

# Compass directions
from ._directions import (
    CANONICAL_SECTOR_COUNT,
    DIRECTION_NAMES,
    MAIN_DIRECTION_ORDER,
    WIND_16_LABELS,
    MainDirection,
    SectorCount,
)

# Sector partition and coverage
from ._sectors import (
    DirectionCoverage,
    FULLY_COVERED_THRESHOLD,
    MAJORITY_INSIDE_THRESHOLD,
    Sector,
    SectorCoverage,
)

# Severity classification
from ._severity import Severity, SeverityBand, SeverityScale

__all__ = [
    # Geometry
    "BoundingBox",
    "Point2D",
    # Directions
    "CANONICAL_SECTOR_COUNT",
    "DIRECTION_NAMES",
    "MAIN_DIRECTION_ORDER",
    "MainDirection",
    "SectorCount",
    "WIND_16_LABELS",
    # Sectors
    "DirectionCoverage",
    "FULLY_COVERED_THRESHOLD",
    "MAJORITY_INSIDE_THRESHOLD",
    "Sector",
    "SectorCoverage",
    # Severity
    "Severity",
    "SeverityBand",
    "SeverityScale",
]
