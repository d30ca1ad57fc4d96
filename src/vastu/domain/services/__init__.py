"""Domain services for directional zone analysis."""

from .polygon import (
    bounding_box,
    centroid,
    distance_point_to_segment,
    distance_to_boundary,
    point_in_polygon,
    polygon_area,
    signed_area,
    validate_boundary,
)
from .sectors import (
    CenterMode,
    DirectionalCircle,
    angle_from_center,
    angle_to_sector_index,
    build_directional_circle,
    build_sectors,
    find_sector_for_angle,
    group_by_main_direction,
    main_direction_for_sector,
    normalize_angle,
    point_on_circle,
)
from .coverage import (
    DEFAULT_SAMPLES_PER_SECTOR,
    MIN_SAMPLES_PER_SECTOR,
    ExactCoverageEstimator,
    MonteCarloCoverageEstimator,
    RadialBand,
    aggregate_by_main_direction,
)
from .attributes import AttributeTable, DirectionalAttributeRecord

__all__ = [
    # Polygon geometry
    "bounding_box",
    "centroid",
    "distance_point_to_segment",
    "distance_to_boundary",
    "point_in_polygon",
    "polygon_area",
    "signed_area",
    "validate_boundary",
    # Sector model
    "CenterMode",
    "DirectionalCircle",
    "angle_from_center",
    "angle_to_sector_index",
    "build_directional_circle",
    "build_sectors",
    "find_sector_for_angle",
    "group_by_main_direction",
    "main_direction_for_sector",
    "normalize_angle",
    "point_on_circle",
    # Coverage
    "DEFAULT_SAMPLES_PER_SECTOR",
    "ExactCoverageEstimator",
    "MIN_SAMPLES_PER_SECTOR",
    "MonteCarloCoverageEstimator",
    "RadialBand",
    "aggregate_by_main_direction",
    # Attribute tables
    "AttributeTable",
    "DirectionalAttributeRecord",
]
