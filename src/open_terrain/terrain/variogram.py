"""Variogram model parameters and the kriging backend."""

import logging
from typing import Literal, Protocol

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pydantic import BaseModel, ConfigDict, Field, field_validator

from open_terrain.exceptions import InterpolationError, MissingDependencyError

logger = logging.getLogger(__name__)

# Short model codes as written by gstat's vgm()
_GSTAT_CODES = {
    "Sph": "spherical",
    "Exp": "exponential",
    "Gau": "gaussian",
}

# pykrige scales the range of some models: exponential uses range / 3 and
# gaussian uses range * 4 / 7 as the distance parameter
_PYKRIGE_RANGE_FACTOR = {
    "spherical": 1.0,
    "exponential": 3.0,
    "gaussian": 7.0 / 4.0,
}

# Fewest distinct positions that determine a plane for the linear drift
MIN_DRIFT_POSITIONS = 3


class VariogramModel(BaseModel):
    """Fixed variogram parameters used as-is by kriging, never fitted.

    ``range`` is the distance parameter ``a`` of gstat's ``vgm()``: the
    spherical model reaches the sill at ``a``, the exponential and gaussian
    models use ``exp(-h/a)`` and ``exp(-(h/a)^2)``.
    """

    model_config = ConfigDict(frozen=True)

    model: Literal["spherical", "exponential", "gaussian"] = "spherical"
    psill: float = Field(default=0.59, gt=0)
    range: float = Field(default=874.0, gt=0)
    nugget: float = Field(default=0.0, ge=0)

    @field_validator("model", mode="before")
    @classmethod
    def _expand_gstat_code(cls, value: object) -> object:
        if isinstance(value, str):
            return _GSTAT_CODES.get(value, value)
        return value

    def semivariance(self, h: ArrayLike) -> NDArray[np.float64]:
        """Semivariance at lag ``h``, zero at the origin."""
        h = np.asarray(h, dtype=np.float64)
        r = h / self.range
        if self.model == "spherical":
            shape = np.where(r < 1.0, 1.5 * r - 0.5 * r**3, 1.0)
        elif self.model == "exponential":
            shape = 1.0 - np.exp(-r)
        else:
            shape = 1.0 - np.exp(-(r**2))
        return np.where(h > 0, self.nugget + self.psill * shape, 0.0)

    def to_pykrige(self) -> dict[str, float]:
        """Parameters in the form pykrige expects for ``variogram_parameters``."""
        return {
            "psill": self.psill,
            "range": self.range * _PYKRIGE_RANGE_FACTOR[self.model],
            "nugget": self.nugget,
        }


DEFAULT_VARIOGRAM = VariogramModel()


class KrigingPredictor(Protocol):
    """Predicts a value at one location from a set of observations."""

    def predict(
        self,
        x: NDArray[np.float64],
        y: NDArray[np.float64],
        z: NDArray[np.float64],
        qx: float,
        qy: float,
        model: VariogramModel,
    ) -> float: ...


class UniversalKrigingPredictor:
    """Universal kriging with a linear drift in X and Y, backed by pykrige."""

    def __init__(self) -> None:
        try:
            from pykrige.uk import UniversalKriging
        except ImportError as exc:
            raise MissingDependencyError("pykrige") from exc
        self._kriging_cls = UniversalKriging

    def predict(
        self,
        x: NDArray[np.float64],
        y: NDArray[np.float64],
        z: NDArray[np.float64],
        qx: float,
        qy: float,
        model: VariogramModel,
    ) -> float:
        """Best linear unbiased prediction of z at (qx, qy).

        Raises:
            InterpolationError: If the neighborhood cannot fit the linear
                drift or the kriging system is singular.
        """
        positions = len(np.unique(np.column_stack((x, y)), axis=0))
        if positions < MIN_DRIFT_POSITIONS:
            raise InterpolationError(
                f"Universal kriging at ({qx}, {qy}) needs at least "
                f"{MIN_DRIFT_POSITIONS} distinct neighbor positions, got {positions}"
            )
        try:
            uk = self._kriging_cls(
                x,
                y,
                z,
                variogram_model=model.model,
                variogram_parameters=model.to_pykrige(),
                drift_terms=["regional_linear"],
                exact_values=True,
                verbose=False,
                enable_plotting=False,
            )
            prediction, _variance = uk.execute(
                "points", np.array([qx]), np.array([qy])
            )
        except np.linalg.LinAlgError as exc:
            raise InterpolationError(
                f"Kriging system is singular at ({qx}, {qy}): {exc}"
            ) from exc
        except ValueError as exc:
            raise InterpolationError(
                f"Kriging failed at ({qx}, {qy}): {exc}"
            ) from exc
        return float(np.ma.filled(prediction, np.nan)[0])
