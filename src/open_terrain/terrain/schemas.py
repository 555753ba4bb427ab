"""Pydantic schemas for terrain API requests and responses."""

from pydantic import BaseModel, Field

from open_terrain.terrain.variogram import VariogramModel


class InterpolateRequest(BaseModel):
    """Ground points, query coordinates and method for one interpolation."""

    ground_points: dict[str, list[float]]
    coordinates: dict[str, list[float]]
    method: str
    k: int | None = Field(default=None, ge=1)
    model: VariogramModel | None = None


class InterpolateResponse(BaseModel):
    """Elevations in query order; null where no value could be produced."""

    method: str
    elevations: list[float | None]


class MethodsResponse(BaseModel):
    """Response schema for the methods listing endpoint."""

    methods: list[str]
