"""Pytest configuration and shared fixtures for directional analysis tests."""

from __future__ import annotations

import pytest

from vastu.domain.services.scoring import DirectionFlags
from vastu.domain.value_objects import DirectionCoverage, MainDirection, Point2D


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Boundary fixtures
# =============================================================================


@pytest.fixture
def square() -> list[Point2D]:
    """100 x 100 square; its inscribed circle is centered at (50, 50)."""
    return [Point2D(0, 0), Point2D(100, 0), Point2D(100, 100), Point2D(0, 100)]


@pytest.fixture
def l_shape() -> list[Point2D]:
    """Square with the south-east quadrant removed."""
    return [
        Point2D(0, 0),
        Point2D(100, 0),
        Point2D(100, 50),
        Point2D(50, 50),
        Point2D(50, 100),
        Point2D(0, 100),
    ]


@pytest.fixture
def u_shape() -> list[Point2D]:
    """Plan with a notch through its bounding-box center."""
    return [
        Point2D(0, 0),
        Point2D(100, 0),
        Point2D(100, 100),
        Point2D(60, 100),
        Point2D(60, 20),
        Point2D(40, 20),
        Point2D(40, 100),
        Point2D(0, 100),
    ]


# =============================================================================
# Scoring fixtures
# =============================================================================


@pytest.fixture
def full_coverage() -> dict[MainDirection, DirectionCoverage]:
    """Every direction fully covered with equal area."""
    return {
        direction: DirectionCoverage(direction, 100.0, 1.0, (0, 1, 2, 3))
        for direction in MainDirection
    }


@pytest.fixture
def heavy_sw_ne() -> dict[MainDirection, DirectionFlags]:
    """Heavy southwest (good) and heavy northeast (bad)."""
    return {
        MainDirection.SW: DirectionFlags(heavy=True),
        MainDirection.NE: DirectionFlags(heavy=True),
    }
