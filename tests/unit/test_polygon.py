"""Unit tests for polygon geometry.

These tests verify:
- Bounding box, shoelace area and centroid
- The edge convention of the ray-casting containment test
- Degenerate and undersized boundaries are rejected
- Point-to-segment distances clamp to the segment ends
"""

import pytest

from vastu.domain.errors import InvalidBoundaryError
from vastu.domain.services.polygon import (
    bounding_box,
    centroid,
    distance_point_to_segment,
    distance_to_boundary,
    point_in_polygon,
    polygon_area,
    signed_area,
    validate_boundary,
)
from vastu.domain.value_objects import BoundingBox, Point2D


class TestPoint2D:
    """Tests for Point2D value object."""

    def test_distance(self) -> None:
        assert Point2D(0, 0).distance_to(Point2D(3, 4)) == 5.0

    def test_rejects_non_finite(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            Point2D(float("nan"), 0)


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_square(self, square: list[Point2D]) -> None:
        box = bounding_box(square)

        assert box == BoundingBox(min_x=0, max_x=100, min_y=0, max_y=100)
        assert box.center == Point2D(50, 50)
        assert box.inscribed_radius == 50

    def test_rectangle_uses_smaller_side(self) -> None:
        box = bounding_box([Point2D(0, 0), Point2D(80, 0), Point2D(80, 20)])

        assert box.width == 80
        assert box.height == 20
        assert box.inscribed_radius == 10

    def test_empty_raises(self) -> None:
        with pytest.raises(InvalidBoundaryError):
            bounding_box([])

    def test_inverted_box_rejected(self) -> None:
        with pytest.raises(ValueError):
            BoundingBox(min_x=10, max_x=0, min_y=0, max_y=1)


class TestArea:
    """Tests for shoelace area."""

    def test_square_area(self, square: list[Point2D]) -> None:
        assert polygon_area(square) == 10000

    def test_orientation_changes_sign(self, square: list[Point2D]) -> None:
        assert signed_area(square) == -signed_area(list(reversed(square)))

    def test_l_shape_area(self, l_shape: list[Point2D]) -> None:
        assert polygon_area(l_shape) == 7500


class TestCentroid:
    """Tests for centroid."""

    def test_square_centroid(self, square: list[Point2D]) -> None:
        result = centroid(square)

        assert result.x == pytest.approx(50)
        assert result.y == pytest.approx(50)

    def test_l_shape_pulls_towards_bulk(self) -> None:
        l_small = [
            Point2D(0, 0),
            Point2D(20, 0),
            Point2D(20, 10),
            Point2D(10, 10),
            Point2D(10, 20),
            Point2D(0, 20),
        ]
        result = centroid(l_small)

        assert result.x == pytest.approx(25 / 3)
        assert result.y == pytest.approx(25 / 3)

    def test_orientation_independent(self, l_shape: list[Point2D]) -> None:
        forward = centroid(l_shape)
        backward = centroid(list(reversed(l_shape)))

        assert forward.x == pytest.approx(backward.x)
        assert forward.y == pytest.approx(backward.y)

    def test_collinear_points_are_degenerate(self) -> None:
        with pytest.raises(InvalidBoundaryError) as exc_info:
            centroid([Point2D(0, 0), Point2D(5, 5), Point2D(10, 10)])

        assert exc_info.value.reason == "degenerate"

    def test_too_few_points(self) -> None:
        with pytest.raises(InvalidBoundaryError) as exc_info:
            centroid([Point2D(0, 0), Point2D(1, 1)])

        assert exc_info.value.reason == "too_few_points"


class TestValidateBoundary:
    """Tests for validate_boundary."""

    def test_returns_tuple(self, square: list[Point2D]) -> None:
        assert validate_boundary(square) == tuple(square)

    def test_two_points_rejected(self) -> None:
        with pytest.raises(InvalidBoundaryError, match="at least 3 points"):
            validate_boundary([Point2D(0, 0), Point2D(1, 0)])


class TestPointInPolygon:
    """Tests for point_in_polygon."""

    def test_interior_point(self, square: list[Point2D]) -> None:
        assert point_in_polygon(Point2D(50, 50), square)

    def test_exterior_point(self, square: list[Point2D]) -> None:
        assert not point_in_polygon(Point2D(150, 50), square)
        assert not point_in_polygon(Point2D(50, -1), square)

    @pytest.mark.parametrize(
        "point",
        [Point2D(0, 50), Point2D(50, 0)],
    )
    def test_min_edges_count_as_inside(self, square: list[Point2D], point: Point2D) -> None:
        assert point_in_polygon(point, square)

    @pytest.mark.parametrize(
        "point",
        [Point2D(100, 50), Point2D(50, 100)],
    )
    def test_max_edges_count_as_outside(self, square: list[Point2D], point: Point2D) -> None:
        assert not point_in_polygon(point, square)

    def test_concave_notch(self, u_shape: list[Point2D]) -> None:
        assert not point_in_polygon(Point2D(50, 50), u_shape)
        assert point_in_polygon(Point2D(20, 50), u_shape)
        assert point_in_polygon(Point2D(50, 10), u_shape)


class TestDistances:
    """Tests for point-to-segment and point-to-boundary distances."""

    def test_perpendicular_distance(self) -> None:
        assert distance_point_to_segment(Point2D(5, 5), Point2D(0, 0), Point2D(10, 0)) == 5

    def test_clamps_to_segment_end(self) -> None:
        distance = distance_point_to_segment(Point2D(13, 4), Point2D(0, 0), Point2D(10, 0))
        assert distance == pytest.approx(5)

    def test_zero_length_segment(self) -> None:
        distance = distance_point_to_segment(Point2D(3, 4), Point2D(0, 0), Point2D(0, 0))
        assert distance == 5

    def test_distance_to_boundary(self, square: list[Point2D]) -> None:
        assert distance_to_boundary(Point2D(50, 50), square) == 50
        assert distance_to_boundary(Point2D(150, 50), square) == 50
        assert distance_to_boundary(Point2D(10, 50), square) == 10
