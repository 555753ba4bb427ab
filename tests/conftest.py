"""Shared test fixtures."""

import pytest

from open_terrain.config import Settings
from open_terrain.terrain.points import GroundPoints
from open_terrain.terrain.service import TerrainService


@pytest.fixture
def settings() -> Settings:
    """Create test settings with the library defaults."""
    return Settings(
        default_k=10,
        max_workers=2,
        variogram_model="spherical",
        variogram_psill=0.59,
        variogram_range=874.0,
        variogram_nugget=0.0,
    )


@pytest.fixture
def terrain_service(settings: Settings) -> TerrainService:
    """Create a TerrainService and shut it down after the test."""
    service = TerrainService(settings)
    yield service  # type: ignore[misc]
    service.shutdown()


@pytest.fixture
def triangle() -> dict[str, list[float]]:
    """Three ground points on the plane z = 10 + x + 2y."""
    return {"X": [0.0, 10.0, 0.0], "Y": [0.0, 0.0, 10.0], "Z": [10.0, 20.0, 30.0]}


@pytest.fixture
def hillside() -> GroundPoints:
    """A small irregular patch of ground points on a gently tilted surface."""
    x = [0.0, 12.0, 25.0, 3.0, 18.0, 30.0, 7.0, 22.0, 14.0, 28.0]
    y = [0.0, 2.0, 1.0, 14.0, 11.0, 16.0, 27.0, 25.0, 19.0, 30.0]
    z = [100.0 + 0.5 * xi + 0.25 * yi + (0.3 if i % 2 else -0.2) for i, (xi, yi) in enumerate(zip(x, y))]
    return GroundPoints.from_columns(x, y, z)
