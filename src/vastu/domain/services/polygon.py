"""Polygon geometry for boundary analysis.

This module provides the planar primitives the sector model and coverage
estimators build on: bounding box, shoelace area and centroid, ray-casting
containment and point-to-segment distance. All functions are pure.

Boundary convention for ``point_in_polygon``: the half-open ray-casting test
counts points on edges facing the minimum x / minimum y side as inside and
points on edges facing the maximum side as outside. For the square
``(0,0) (10,0) (10,10) (0,10)`` that means ``(0, 5)`` and ``(5, 0)`` are
inside while ``(10, 5)`` and ``(5, 10)`` are outside.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from vastu.domain.errors import InvalidBoundaryError
from vastu.domain.value_objects import BoundingBox, Point2D

MIN_BOUNDARY_POINTS = 3

# Relative to the bounding-box area, below which a polygon is degenerate
DEGENERATE_AREA_EPSILON = 1e-12


def validate_boundary(points: Sequence[Point2D]) -> tuple[Point2D, ...]:
    """Check that a boundary polygon can support a sector analysis.

    Args:
        points: Ordered polygon vertices; the last connects back to the first.

    Returns:
        The vertices as an immutable tuple.

    Raises:
        InvalidBoundaryError: If fewer than three points are given.
    """
    if len(points) < MIN_BOUNDARY_POINTS:
        raise InvalidBoundaryError(
            f"Boundary needs at least {MIN_BOUNDARY_POINTS} points, got {len(points)}",
            reason="too_few_points",
        )
    return tuple(points)


def bounding_box(points: Sequence[Point2D]) -> BoundingBox:
    """Compute the axis-aligned bounding box of a point set.

    Raises:
        InvalidBoundaryError: If ``points`` is empty.
    """
    if not points:
        raise InvalidBoundaryError(
            "Cannot compute a bounding box of zero points", reason="too_few_points"
        )
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return BoundingBox(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def signed_area(points: Sequence[Point2D]) -> float:
    """Shoelace signed area; positive for clockwise rings in y-down space."""
    total = 0.0
    count = len(points)
    for i in range(count):
        a = points[i]
        b = points[(i + 1) % count]
        total += a.x * b.y - b.x * a.y
    return total / 2


def polygon_area(points: Sequence[Point2D]) -> float:
    return abs(signed_area(points))


def centroid(points: Sequence[Point2D]) -> Point2D:
    """Area-weighted centroid via the shoelace formula.

    Unlike the bounding-box center this tracks where the footprint's area
    actually lies, so L- and T-shaped plots shift towards their bulk.

    Args:
        points: Polygon vertices in order.

    Returns:
        The centroid point.

    Raises:
        InvalidBoundaryError: With reason ``too_few_points`` for fewer than
            three vertices, or ``degenerate`` when the signed area is zero
            (collinear vertices or a ring whose lobes cancel out).
    """
    validate_boundary(points)
    area = signed_area(points)
    box = bounding_box(points)
    if abs(area) <= DEGENERATE_AREA_EPSILON * max(1.0, box.width * box.height):
        raise InvalidBoundaryError(
            "Polygon has zero signed area; centroid is undefined",
            reason="degenerate",
        )

    cx = 0.0
    cy = 0.0
    count = len(points)
    for i in range(count):
        a = points[i]
        b = points[(i + 1) % count]
        cross = a.x * b.y - b.x * a.y
        cx += (a.x + b.x) * cross
        cy += (a.y + b.y) * cross
    return Point2D(cx / (6 * area), cy / (6 * area))


def point_in_polygon(point: Point2D, polygon: Sequence[Point2D]) -> bool:
    """Ray-casting parity test.

    Args:
        point: Point to test.
        polygon: Polygon vertices in order.

    Returns:
        True if the point is inside the polygon.
    """
    inside = False
    count = len(polygon)
    j = count - 1
    for i in range(count):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if (yi > point.y) != (yj > point.y):
            x_cross = (xj - xi) * (point.y - yi) / (yj - yi) + xi
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def distance_point_to_segment(point: Point2D, a: Point2D, b: Point2D) -> float:
    """Distance from a point to the closest point of segment ``ab``.

    The projection parameter is clamped to [0, 1] so points beyond either
    end measure to the endpoint.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return point.distance_to(a)
    t = ((point.x - a.x) * dx + (point.y - a.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(point.x - (a.x + t * dx), point.y - (a.y + t * dy))


def distance_to_boundary(point: Point2D, polygon: Sequence[Point2D]) -> float:
    """Shortest distance from a point to any edge of the polygon."""
    validate_boundary(polygon)
    count = len(polygon)
    return min(
        distance_point_to_segment(point, polygon[i], polygon[(i + 1) % count])
        for i in range(count)
    )


__all__ = [
    "DEGENERATE_AREA_EPSILON",
    "MIN_BOUNDARY_POINTS",
    "bounding_box",
    "centroid",
    "distance_point_to_segment",
    "distance_to_boundary",
    "point_in_polygon",
    "polygon_area",
    "signed_area",
    "validate_boundary",
]
