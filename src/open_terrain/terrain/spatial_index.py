"""k-nearest-neighbor search over ground point positions."""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from rtree import index

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NeighborSet:
    """Nearest ground points for a batch of queries.

    Row ``i`` holds the neighbors of query ``i`` sorted by ascending distance,
    equal distances ordered by ground point index.
    """

    distances: NDArray[np.float64]
    indices: NDArray[np.intp]

    @property
    def k(self) -> int:
        return self.indices.shape[1]


class SpatialIndex:
    """In-memory R-tree over the horizontal coordinates of ground points.

    Each point is stored as a degenerate box whose id is its position in the
    input arrays.
    """

    def __init__(self, x: NDArray[np.float64], y: NDArray[np.float64]) -> None:
        self._x = np.asarray(x, dtype=np.float64)
        self._y = np.asarray(y, dtype=np.float64)
        self._size = len(self._x)
        if self._size == 0:
            raise ValueError("Cannot build a spatial index without points")
        self._index = index.Index(
            (i, (px, py, px, py), None)
            for i, (px, py) in enumerate(zip(self._x.tolist(), self._y.tolist()))
        )
        logger.debug("Built spatial index", extra={"points": self._size})

    def __len__(self) -> int:
        return self._size

    def nearest(self, x: float, y: float, k: int) -> tuple[NDArray[np.float64], NDArray[np.intp]]:
        """Return distances and indices of the ``k`` points closest to (x, y).

        ``k`` is clamped to the number of indexed points.
        """
        k_eff = min(k, self._size)
        # rtree may return more than k ids when several points tie at the k-th distance
        candidates = np.fromiter(
            self._index.nearest((x, y, x, y), num_results=k_eff), dtype=np.intp
        )
        distances = np.hypot(self._x[candidates] - x, self._y[candidates] - y)
        order = np.lexsort((candidates, distances))[:k_eff]
        return distances[order], candidates[order]

    def query(self, qx: NDArray[np.float64], qy: NDArray[np.float64], k: int) -> NeighborSet:
        """Find the ``k`` nearest ground points of every query position."""
        k_eff = min(k, self._size)
        distances = np.empty((len(qx), k_eff), dtype=np.float64)
        indices = np.empty((len(qx), k_eff), dtype=np.intp)
        for i, (x, y) in enumerate(zip(np.asarray(qx).tolist(), np.asarray(qy).tolist())):
            distances[i], indices[i] = self.nearest(x, y, k_eff)
        return NeighborSet(distances=distances, indices=indices)
