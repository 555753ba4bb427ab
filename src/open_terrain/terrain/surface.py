"""Triangulated surfaces evaluated on a rectilinear grid."""

import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from open_terrain.exceptions import MissingDependencyError
from open_terrain.terrain.points import GroundPoints

logger = logging.getLogger(__name__)


class SurfaceInterpolator(Protocol):
    """Builds an interpolated surface over scattered points on a grid."""

    def interpolate_surface(
        self,
        x: NDArray[np.float64],
        y: NDArray[np.float64],
        z: NDArray[np.float64],
        xo: NDArray[np.float64],
        yo: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Return a ``(len(xo), len(yo))`` array, NaN where undefined."""
        ...


class LinearDelaunaySurface:
    """Linear interpolation within the triangles of a Delaunay triangulation.

    Nodes outside the convex hull of the input points are NaN; nothing is
    extrapolated.
    """

    def __init__(self) -> None:
        try:
            from scipy.interpolate import LinearNDInterpolator
            from scipy.spatial import Delaunay, QhullError
        except ImportError as exc:
            raise MissingDependencyError("scipy") from exc
        self._interpolator_cls = LinearNDInterpolator
        self._delaunay_cls = Delaunay
        self._qhull_error = QhullError

    def interpolate_surface(
        self,
        x: NDArray[np.float64],
        y: NDArray[np.float64],
        z: NDArray[np.float64],
        xo: NDArray[np.float64],
        yo: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        grid = np.full((len(xo), len(yo)), np.nan)
        try:
            triangulation = self._delaunay_cls(np.column_stack((x, y)))
        except (self._qhull_error, ValueError) as exc:
            logger.warning(
                "Ground points cannot be triangulated",
                extra={"points": len(z), "error": str(exc)},
            )
            return grid

        interpolator = self._interpolator_cls(triangulation, z, fill_value=np.nan)
        grid_x, grid_y = np.meshgrid(xo, yo, indexing="ij")
        grid[:] = interpolator(grid_x, grid_y)
        return grid


@dataclass(frozen=True, slots=True)
class GridSurface:
    """Elevations on the grid spanned by two sorted axes."""

    xo: NDArray[np.float64]
    yo: NDArray[np.float64]
    z: NDArray[np.float64]

    def lookup(self, x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
        """Read the elevation of each (x, y), which must lie exactly on the axes."""
        xc = np.searchsorted(self.xo, x)
        yc = np.searchsorted(self.yo, y)
        return self.z[xc, yc]


def collapse_duplicates(points: GroundPoints) -> GroundPoints:
    """Merge points sharing the same (X, Y), keeping the lowest Z."""
    xy, inverse = np.unique(points.xy, axis=0, return_inverse=True)
    if len(xy) == len(points):
        return points
    z = np.full(len(xy), np.inf)
    np.minimum.at(z, inverse.ravel(), points.z)
    logger.debug(
        "Collapsed duplicate ground positions",
        extra={"points": len(points), "unique": len(xy)},
    )
    return GroundPoints.from_columns(xy[:, 0], xy[:, 1], z)


def build_grid_surface(
    points: GroundPoints,
    xo: NDArray[np.float64],
    yo: NDArray[np.float64],
    interpolator: SurfaceInterpolator,
) -> GridSurface:
    """Interpolate ``points`` onto the ``xo`` x ``yo`` grid."""
    unique = collapse_duplicates(points)
    z = interpolator.interpolate_surface(unique.x, unique.y, unique.z, xo, yo)
    return GridSurface(xo=xo, yo=yo, z=np.asarray(z, dtype=np.float64))
