"""Value types for ground points and query coordinates.

Both types accept any column-oriented table that supports ``"X" in table``
and ``table["X"]``, such as a plain dict of sequences or a pandas DataFrame.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from open_terrain.exceptions import InvalidInputError


def _column(table: Any, name: str, label: str) -> NDArray[np.float64]:
    if name not in table:
        raise InvalidInputError(f"{label} have no field named '{name}'")
    return np.asarray(table[name], dtype=np.float64).ravel()


def _freeze(*arrays: NDArray[np.float64]) -> None:
    for array in arrays:
        array.setflags(write=False)


@dataclass(frozen=True, slots=True)
class GroundPoints:
    """Ground-classified points as parallel X, Y, Z arrays.

    The position of a point in these arrays is its index, used to break ties
    between equidistant neighbors.
    """

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    z: NDArray[np.float64]

    @classmethod
    def from_columns(
        cls, x: Sequence[float], y: Sequence[float], z: Sequence[float]
    ) -> "GroundPoints":
        """Build ground points from three parallel sequences.

        Raises:
            InvalidInputError: If the sequences differ in length.
        """
        xs = np.array(x, dtype=np.float64).ravel()
        ys = np.array(y, dtype=np.float64).ravel()
        zs = np.array(z, dtype=np.float64).ravel()
        if not (len(xs) == len(ys) == len(zs)):
            raise InvalidInputError(
                f"Ground point columns differ in length: X={len(xs)}, Y={len(ys)}, Z={len(zs)}"
            )
        _freeze(xs, ys, zs)
        return cls(x=xs, y=ys, z=zs)

    @classmethod
    def coerce(cls, points: Any) -> "GroundPoints | None":
        """Return ``points`` as GroundPoints, or None when nothing was given."""
        if points is None or isinstance(points, cls):
            return points
        return cls.from_columns(
            _column(points, "X", "Ground points"),
            _column(points, "Y", "Ground points"),
            _column(points, "Z", "Ground points"),
        )

    def __len__(self) -> int:
        return len(self.z)

    @property
    def xy(self) -> NDArray[np.float64]:
        """Horizontal coordinates as an (n, 2) array."""
        return np.column_stack((self.x, self.y))


@dataclass(frozen=True, slots=True)
class QueryCoordinates:
    """Horizontal positions where an elevation is requested."""

    x: NDArray[np.float64]
    y: NDArray[np.float64]

    @classmethod
    def coerce(cls, table: Any) -> "QueryCoordinates":
        """Read the ``X`` and ``Y`` fields of ``table``; other fields are ignored.

        Raises:
            InvalidInputError: If a field is missing or X and Y differ in length.
        """
        if isinstance(table, cls):
            return table
        xs = _column(table, "X", "Query coordinates").copy()
        ys = _column(table, "Y", "Query coordinates").copy()
        if len(xs) != len(ys):
            raise InvalidInputError(
                f"Query coordinate columns differ in length: X={len(xs)}, Y={len(ys)}"
            )
        _freeze(xs, ys)
        return cls(x=xs, y=ys)

    def __len__(self) -> int:
        return len(self.x)
