"""Interpolation strategies for ground elevation.

Every strategy takes the ground points and the query coordinates and returns
one elevation per query, in query order.
"""

import logging
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from open_terrain.exceptions import DeprecatedMethodError, UnknownMethodError
from open_terrain.terrain.points import GroundPoints, QueryCoordinates
from open_terrain.terrain.spatial_index import SpatialIndex
from open_terrain.terrain.surface import (
    LinearDelaunaySurface,
    SurfaceInterpolator,
    build_grid_surface,
)
from open_terrain.terrain.variogram import (
    KrigingPredictor,
    UniversalKrigingPredictor,
    VariogramModel,
)

logger = logging.getLogger(__name__)

# Weight given to a neighbor at distance zero instead of 1/0
IDW_ZERO_DISTANCE_WEIGHT = 1e8

# Renamed methods and the version that renamed them
_RENAMED_METHODS = {"akima": ("delaunay", "1.1.0")}


class Method(str, Enum):
    """Supported interpolation methods."""

    KNNIDW = "knnidw"
    DELAUNAY = "delaunay"
    KRIGING = "kriging"

    @classmethod
    def parse(cls, name: "str | Method") -> "Method":
        """Resolve a method name.

        Raises:
            DeprecatedMethodError: If ``name`` is an old name of a method.
            UnknownMethodError: If ``name`` is not a method at all.
        """
        if isinstance(name, cls):
            return name
        if name in _RENAMED_METHODS:
            replacement, since = _RENAMED_METHODS[name]
            raise DeprecatedMethodError(name, replacement, since=since)
        try:
            return cls(name)
        except ValueError:
            raise UnknownMethodError(str(name)) from None


def idw(ground: GroundPoints, coords: QueryCoordinates, k: int) -> NDArray[np.float64]:
    """Inverse distance weighting over the ``k`` nearest ground points."""
    logger.info("Using inverse distance weighting", extra={"k": k, "queries": len(coords)})

    neighbors = SpatialIndex(ground.x, ground.y).query(coords.x, coords.y, k)
    with np.errstate(divide="ignore"):
        weights = 1.0 / neighbors.distances
    weights[np.isinf(weights)] = IDW_ZERO_DISTANCE_WEIGHT
    z = ground.z[neighbors.indices]

    return np.sum(z * weights, axis=1) / np.sum(weights, axis=1)


def delaunay(
    ground: GroundPoints,
    coords: QueryCoordinates,
    surface: SurfaceInterpolator | None = None,
) -> NDArray[np.float64]:
    """Linear interpolation on a Delaunay triangulation of the ground points.

    The surface is evaluated on the grid of unique query X and Y values and
    each query reads its own node. Duplicate ground positions keep their
    lowest Z. Queries outside the convex hull of the ground points are NaN.
    """
    logger.info("Using Delaunay triangulation", extra={"queries": len(coords)})

    if len(coords) == 0:
        return np.empty(0, dtype=np.float64)
    if surface is None:
        surface = LinearDelaunaySurface()

    xo = np.unique(coords.x)
    yo = np.unique(coords.y)
    grid = build_grid_surface(ground, xo, yo, surface)
    return grid.lookup(coords.x, coords.y)


def kriging(
    ground: GroundPoints,
    coords: QueryCoordinates,
    model: VariogramModel,
    k: int,
    predictor: KrigingPredictor | None = None,
) -> NDArray[np.float64]:
    """Local universal kriging from the ``k`` nearest ground points of each query."""
    logger.info(
        "Using local universal kriging",
        extra={"k": k, "queries": len(coords), "variogram": model.model},
    )

    if predictor is None:
        predictor = UniversalKrigingPredictor()
    neighbors = SpatialIndex(ground.x, ground.y).query(coords.x, coords.y, k)

    result = np.empty(len(coords), dtype=np.float64)
    for i, idx in enumerate(neighbors.indices):
        result[i] = predictor.predict(
            ground.x[idx],
            ground.y[idx],
            ground.z[idx],
            float(coords.x[i]),
            float(coords.y[i]),
            model,
        )
    return result
