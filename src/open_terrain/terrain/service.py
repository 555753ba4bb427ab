"""Ground elevation interpolation service."""

import logging
from concurrent.futures import ThreadPoolExecutor
from numbers import Integral
from typing import Any, assert_never

import numpy as np
from numpy.typing import NDArray

from open_terrain.config import Settings
from open_terrain.exceptions import InvalidInputError, NoGroundDataError
from open_terrain.terrain.points import GroundPoints, QueryCoordinates
from open_terrain.terrain.strategies import Method, delaunay, idw, kriging
from open_terrain.terrain.surface import SurfaceInterpolator
from open_terrain.terrain.variogram import (
    DEFAULT_VARIOGRAM,
    KrigingPredictor,
    VariogramModel,
)

logger = logging.getLogger(__name__)


def _check_k(k: Any) -> int:
    if isinstance(k, bool) or not isinstance(k, Integral) or k < 1:
        raise InvalidInputError(f"Invalid number of neighbors k={k!r}. Must be a positive integer.")
    return int(k)


def interpolate(
    ground_points: Any,
    query_coords: Any,
    method: str | Method,
    k: int = 10,
    model: VariogramModel | None = None,
    *,
    surface: SurfaceInterpolator | None = None,
    predictor: KrigingPredictor | None = None,
) -> NDArray[np.float64]:
    """Estimate the ground elevation at each query coordinate.

    Args:
        ground_points: Ground-classified points with X, Y and Z columns, a
            GroundPoints instance, or None when no ground was found.
        query_coords: Table with X and Y columns; other columns are ignored.
        method: One of 'knnidw', 'delaunay' or 'kriging'.
        k: Number of nearest ground points used by 'knnidw' and 'kriging'.
        model: Variogram used by 'kriging'. Defaults to a spherical model
            with partial sill 0.59, range 874 and no nugget.
        surface: Triangulation backend for 'delaunay'.
        predictor: Kriging backend for 'kriging'.

    Returns:
        One elevation per query coordinate, in query order. Entries are NaN
        where the method cannot produce a value.

    Raises:
        InvalidInputError: If X or Y is missing from the query coordinates,
            or k is not a positive integer.
        NoGroundDataError: If there are no ground points.
        DeprecatedMethodError: If the method has been renamed.
        UnknownMethodError: If the method does not exist.
        MissingDependencyError: If the method's backend is not installed.
        InterpolationError: If kriging cannot solve for a query.
    """
    coords = QueryCoordinates.coerce(query_coords)
    ground = GroundPoints.coerce(ground_points)
    if ground is None or len(ground) == 0:
        raise NoGroundDataError()

    selected = Method.parse(method)
    if selected is Method.KNNIDW:
        return idw(ground, coords, _check_k(k))
    if selected is Method.DELAUNAY:
        return delaunay(ground, coords, surface=surface)
    if selected is Method.KRIGING:
        if model is None:
            model = DEFAULT_VARIOGRAM
        return kriging(ground, coords, model, _check_k(k), predictor=predictor)
    assert_never(selected)


class TerrainService:
    """Runs interpolation requests with application defaults.

    Holds the settings that fill in omitted parameters and a thread pool for
    running the blocking computation from async contexts.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._executor = ThreadPoolExecutor(max_workers=settings.max_workers)

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Thread pool executor for running blocking work in async contexts."""
        return self._executor

    def interpolate(
        self,
        ground_points: Any,
        query_coords: Any,
        method: str,
        k: int | None = None,
        model: VariogramModel | None = None,
    ) -> NDArray[np.float64]:
        """Interpolate with the configured default k and variogram."""
        return interpolate(
            ground_points,
            query_coords,
            method,
            k=self._settings.default_k if k is None else k,
            model=model if model is not None else self._settings.default_variogram(),
        )

    def shutdown(self) -> None:
        """Shut down the thread pool executor."""
        self._executor.shutdown(wait=False)
