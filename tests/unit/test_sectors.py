"""Unit tests for the circular sector model.

These tests verify:
- Partitions tile the full circle for every granularity and rotation
- 32-way direction codes and main-direction ownership
- 8- and 16-way labels
- Bearing helpers and sector lookup
- Directional circle placement over a boundary
"""

import math

import pytest

from vastu.domain.errors import InvalidBoundaryError
from vastu.domain.services.sectors import (
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
from vastu.domain.value_objects import MainDirection, Point2D, Sector, SectorCount


class TestNormalizeAngle:
    """Tests for normalize_angle."""

    @pytest.mark.parametrize(
        ("angle", "expected"),
        [(0, 0), (360, 0), (370, 10), (-10, 350), (-360, 0), (725, 5)],
    )
    def test_wraps_into_range(self, angle: float, expected: float) -> None:
        assert normalize_angle(angle) == pytest.approx(expected)

    def test_tiny_negative_does_not_reach_360(self) -> None:
        assert normalize_angle(-1e-20) < 360


class TestBuildSectors:
    """Tests for build_sectors."""

    @pytest.mark.parametrize("count", [8, 16, 32])
    @pytest.mark.parametrize("rotation", [0.0, 15.0, -37.5, 200.0])
    def test_partition_tiles_circle(self, count: int, rotation: float) -> None:
        sectors = build_sectors(count, rotation)

        assert len(sectors) == count
        assert sum(s.span for s in sectors) == pytest.approx(360)
        for current, following in zip(sectors, sectors[1:] + sectors[:1]):
            assert current.end_angle == following.start_angle

    def test_first_sector_unrotated(self) -> None:
        first = build_sectors(32)[0]

        assert first.start_angle == 0
        assert first.end_angle == 11.25
        assert first.center_angle == 5.625
        assert first.span == 11.25

    def test_rotation_shifts_start(self) -> None:
        assert build_sectors(32, 90)[0].start_angle == 90

    def test_negative_rotation_wraps_north(self) -> None:
        first = build_sectors(32, -10)[0]

        assert first.start_angle == 350
        assert first.end_angle == pytest.approx(1.25)
        assert first.wraps_north

    def test_unsupported_count(self) -> None:
        with pytest.raises(ValueError, match="Unsupported sector count 12"):
            build_sectors(12)

    def test_accepts_enum(self) -> None:
        assert len(build_sectors(SectorCount.SIXTEEN)) == 16


class TestThirtyTwoWayCodes:
    """Tests for the canonical 32-way labels and ownership."""

    def test_north_owns_sectors_around_zero(self) -> None:
        sectors = build_sectors(32)
        codes = {s.index: s.direction_code for s in sectors if s.main_direction == MainDirection.N}

        assert codes == {30: "N1", 31: "N2", 0: "N3", 1: "N4"}

    def test_northeast_starts_at_sector_two(self) -> None:
        sector = build_sectors(32)[2]

        assert sector.direction_code == "NE1"
        assert sector.direction_label == "NNE"
        assert sector.main_direction == MainDirection.NE
        assert sector.sector_group == "Northeast"

    def test_every_direction_owns_four_contiguous_sectors(self) -> None:
        groups = group_by_main_direction(build_sectors(32))

        for direction, sectors in groups.items():
            indices = {s.index for s in sectors}
            start = (direction.position * 4 - 2) % 32
            assert indices == {(start + k) % 32 for k in range(4)}

    def test_direction_bisects_its_sectors(self) -> None:
        groups = group_by_main_direction(build_sectors(32))

        for direction, sectors in groups.items():
            first = min(sectors, key=lambda s: (s.index - direction.position * 4 + 2) % 32)
            assert normalize_angle(first.start_angle + 22.5) == direction.angle

    def test_main_direction_for_sector(self) -> None:
        assert main_direction_for_sector(0) == MainDirection.N
        assert main_direction_for_sector(6) == MainDirection.E
        assert main_direction_for_sector(17) == MainDirection.S
        assert main_direction_for_sector(18) == MainDirection.SW
        assert main_direction_for_sector(29) == MainDirection.NW
        assert main_direction_for_sector(30) == MainDirection.N

    def test_main_direction_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            main_direction_for_sector(32)


class TestCoarseLabels:
    """Tests for 8- and 16-way labels."""

    def test_eight_way_labels(self) -> None:
        sectors = build_sectors(8)

        assert [s.direction_label for s in sectors] == [
            "N", "NE", "E", "SE", "S", "SW", "W", "NW",
        ]
        assert sectors[0].fine_indices == (0, 1, 2, 3)

    def test_eight_way_sector_straddles_two_directions(self) -> None:
        north = build_sectors(8)[0]

        assert north.main_direction == MainDirection.N
        assert [main_direction_for_sector(i) for i in north.fine_indices] == [
            MainDirection.N,
            MainDirection.N,
            MainDirection.NE,
            MainDirection.NE,
        ]

    def test_sixteen_way_sectors_stay_within_one_direction(self) -> None:
        for sector in build_sectors(16):
            owners = {main_direction_for_sector(i) for i in sector.fine_indices}
            assert owners == {sector.main_direction}

    def test_sixteen_way_labels(self) -> None:
        sectors = build_sectors(16)

        assert sectors[0].direction_label == "N"
        assert sectors[1].direction_label == "NNE"
        assert sectors[1].main_direction == MainDirection.NE
        assert sectors[15].direction_label == "NNW"
        assert sectors[15].main_direction == MainDirection.N


class TestSectorLookup:
    """Tests for bearings and sector lookup."""

    @pytest.mark.parametrize(
        ("point", "bearing"),
        [
            (Point2D(50, 0), 0),
            (Point2D(100, 50), 90),
            (Point2D(50, 100), 180),
            (Point2D(0, 50), 270),
        ],
    )
    def test_angle_from_center(self, point: Point2D, bearing: float) -> None:
        assert angle_from_center(point, Point2D(50, 50)) == pytest.approx(bearing)

    def test_point_on_circle_inverts_bearing(self) -> None:
        center = Point2D(10, 10)
        point = point_on_circle(center, 5, 135)

        assert point.distance_to(center) == pytest.approx(5)
        assert angle_from_center(point, center) == pytest.approx(135)

    def test_find_sector(self) -> None:
        sectors = build_sectors(32)

        assert find_sector_for_angle(5, sectors).index == 0
        assert find_sector_for_angle(11.25, sectors).index == 1
        assert find_sector_for_angle(359, sectors).index == 31

    def test_find_sector_in_partial_list(self) -> None:
        sectors = build_sectors(32)[:4]

        assert find_sector_for_angle(180, sectors) is None

    def test_wrapping_sector_contains_north(self) -> None:
        first = build_sectors(32, -10)[0]

        assert first.contains_angle(355)
        assert first.contains_angle(0.5)
        assert not first.contains_angle(2)

    def test_angle_to_sector_index(self) -> None:
        assert angle_to_sector_index(359, 32) == 31
        assert angle_to_sector_index(10, 32, rotation=15) == 31
        assert angle_to_sector_index(100, 8) == 2


class TestSectorValidation:
    """Tests for Sector invariants."""

    def test_rejects_unnormalized_angle(self) -> None:
        with pytest.raises(ValueError, match="start_angle"):
            Sector(
                index=0,
                start_angle=360,
                end_angle=11.25,
                center_angle=5.625,
                span=11.25,
                direction_label="N",
                direction_code="N3",
                main_direction=MainDirection.N,
                sector_group="North",
            )


class TestDirectionalCircle:
    """Tests for build_directional_circle."""

    def test_inscribed_in_square(self, square: list[Point2D]) -> None:
        circle = build_directional_circle(square)

        assert circle.center == Point2D(50, 50)
        assert circle.radius == 50
        assert circle.count == 32
        assert circle.sector_area(circle.sectors[0]) == pytest.approx(math.pi * 2500 / 32)

    def test_centroid_mode(self, l_shape: list[Point2D]) -> None:
        circle = build_directional_circle(l_shape, center_mode=CenterMode.CENTROID)

        assert circle.center.x == pytest.approx(125 / 3)
        assert circle.center.y == pytest.approx(125 / 3)

    def test_center_mode_string(self, l_shape: list[Point2D]) -> None:
        circle = build_directional_circle(l_shape, center_mode="centroid")

        assert circle.center.x < 50

    def test_radius_override(self, square: list[Point2D]) -> None:
        assert build_directional_circle(square, radius=20).radius == 20

    def test_flat_boundary_has_no_radius(self) -> None:
        with pytest.raises(InvalidBoundaryError) as exc_info:
            build_directional_circle([Point2D(0, 0), Point2D(10, 0), Point2D(20, 0)])

        assert exc_info.value.reason == "invalid_radius"

    def test_degenerate_centroid(self) -> None:
        with pytest.raises(InvalidBoundaryError) as exc_info:
            build_directional_circle(
                [Point2D(0, 0), Point2D(5, 5), Point2D(10, 10)],
                center_mode=CenterMode.CENTROID,
            )

        assert exc_info.value.reason == "degenerate"

    def test_sector_for_point(self, square: list[Point2D]) -> None:
        circle = build_directional_circle(square, count=8)

        assert circle.sector_for_point(Point2D(60, 10)).direction_label == "N"
        assert circle.sector_for_point(Point2D(90, 60)).direction_label == "E"

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(InvalidBoundaryError):
            DirectionalCircle(
                center=Point2D(0, 0), radius=-1, rotation=0, sectors=build_sectors(8)
            )
