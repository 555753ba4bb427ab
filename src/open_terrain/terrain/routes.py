"""API routes for ground elevation interpolation."""

import asyncio
import logging
import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from open_terrain.exceptions import (
    DeprecatedMethodError,
    InterpolationError,
    InvalidInputError,
    MissingDependencyError,
    NoGroundDataError,
    UnknownMethodError,
)
from open_terrain.terrain.schemas import (
    InterpolateRequest,
    InterpolateResponse,
    MethodsResponse,
)
from open_terrain.terrain.service import TerrainService
from open_terrain.terrain.strategies import Method

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/terrain", tags=["terrain"])


def get_terrain_service(request: Request) -> TerrainService:
    """FastAPI dependency that retrieves the TerrainService from app state."""
    service: TerrainService = request.app.state.terrain_service
    return service


@router.get("/methods", response_model=MethodsResponse, summary="List interpolation methods")
async def methods() -> MethodsResponse:
    """List the names accepted by the interpolation endpoint."""
    return MethodsResponse(methods=[method.value for method in Method])


@router.post(
    "/interpolate",
    response_model=InterpolateResponse,
    summary="Interpolate ground elevation",
)
async def interpolate(
    body: InterpolateRequest,
    service: Annotated[TerrainService, Depends(get_terrain_service)],
) -> InterpolateResponse:
    """Estimate ground elevation at each requested coordinate.

    Args:
        body: Ground points, coordinates, method and optional k and variogram.
        service: Injected TerrainService instance.

    Returns:
        An InterpolateResponse with one elevation per coordinate.
    """
    loop = asyncio.get_running_loop()
    try:
        elevations = await loop.run_in_executor(
            service.executor,
            service.interpolate,
            body.ground_points,
            body.coordinates,
            body.method,
            body.k,
            body.model,
        )
    except (InvalidInputError, UnknownMethodError, DeprecatedMethodError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (NoGroundDataError, InterpolationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(exc),
        ) from exc
    except MissingDependencyError as exc:
        logger.error(
            "Interpolation backend unavailable",
            extra={"dependency": exc.dependency, "method": body.method},
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return InterpolateResponse(
        method=body.method,
        elevations=[None if math.isnan(value) else value for value in elevations.tolist()],
    )
