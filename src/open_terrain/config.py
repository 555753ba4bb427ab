"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass

from open_terrain.terrain.variogram import VariogramModel


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings populated from environment variables."""

    default_k: int
    max_workers: int
    variogram_model: str
    variogram_psill: float
    variogram_range: float
    variogram_nugget: float

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            default_k=int(os.getenv("DEFAULT_K", "10")),
            max_workers=int(os.getenv("MAX_WORKERS", "4")),
            variogram_model=os.getenv("VARIOGRAM_MODEL", "spherical"),
            variogram_psill=float(os.getenv("VARIOGRAM_PSILL", "0.59")),
            variogram_range=float(os.getenv("VARIOGRAM_RANGE", "874")),
            variogram_nugget=float(os.getenv("VARIOGRAM_NUGGET", "0")),
        )

    def default_variogram(self) -> VariogramModel:
        """Variogram used for kriging requests that do not supply one."""
        return VariogramModel(
            model=self.variogram_model,
            psill=self.variogram_psill,
            range=self.variogram_range,
            nugget=self.variogram_nugget,
        )
