"""Planets API routes."""

import asyncio
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from loguru import logger

from src.core.config import settings
from src.core.domain.validation import validate_body_name
from src.core.interfaces.http.timeouts import bounded
from src.modules.planets.application.dependencies import (
    get_ephemeris_service,
    get_planetary_data_service,
)
from src.modules.planets.application.ephemeris_service import EphemerisService
from src.modules.planets.application.planetary_data_service import (
    PlanetaryDataService,
)
from src.modules.planets.domain.exceptions import (
    InvalidBodyNameError,
    PlanetNotFoundError,
)
from src.modules.planets.interfaces.schemas import (
    PlanetCategoryResponse,
    PlanetDetailResponse,
    PlanetPositionsResponse,
)

router = APIRouter(prefix="/planets", tags=["planets"])


@router.get(
    "/positions",
    response_model=PlanetPositionsResponse,
    summary="获取所有追踪天体的当前位置",
)
async def get_planet_positions(
    ephemeris: EphemerisService = Depends(get_ephemeris_service),
) -> PlanetPositionsResponse:
    positions = await ephemeris.get_all_positions(
        deadline_sec=settings.REQUEST_TIMEOUT_SEC
    )
    return PlanetPositionsResponse(
        planets=positions,
        timestamp=datetime.now(UTC),
        source="NASA JPL Horizons API",
    )


# 必须在 /{name} 之前注册
@router.get(
    "/category/{category}",
    response_model=PlanetCategoryResponse,
    summary="按分类列出天体档案",
)
async def get_planets_by_category(
    category: str,
    planetary_data: PlanetaryDataService = Depends(get_planetary_data_service),
) -> PlanetCategoryResponse:
    planets = await planetary_data.get_planets_by_category(category)
    return PlanetCategoryResponse(
        category=category,
        planets=planets,
        count=len(planets),
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/{name}",
    response_model=PlanetDetailResponse,
    summary="获取单个天体的位置与档案",
    responses={400: {"description": "非法天体名称"}, 404: {"description": "无数据"}},
)
async def get_planet(
    name: str,
    ephemeris: EphemerisService = Depends(get_ephemeris_service),
    planetary_data: PlanetaryDataService = Depends(get_planetary_data_service),
) -> PlanetDetailResponse:
    """Get a body's current position together with its profile."""
    if not validate_body_name(name):
        raise InvalidBodyNameError(name)

    logger.info(f"Fetching planet data for {name}")
    position, profile = await bounded(
        asyncio.gather(
            ephemeris.get_position(name),
            planetary_data.get_planet_profile(name),
        ),
        f"Planet data for {name}",
    )
    if position is None and profile is None:
        raise PlanetNotFoundError(name)

    return PlanetDetailResponse(
        name=name,
        position=position,
        profile=profile,
        timestamp=datetime.now(UTC),
        source="NASA JPL Horizons + NASA Fact Sheets",
    )
