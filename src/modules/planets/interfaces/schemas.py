"""Planets API schemas."""

from datetime import datetime

from pydantic import BaseModel

from src.modules.planets.domain.entities import PlanetPosition, PlanetProfile


class PlanetPositionsResponse(BaseModel):
    planets: list[PlanetPosition]
    timestamp: datetime
    source: str


class PlanetDetailResponse(BaseModel):
    """单个天体：位置 + 档案，任一可能为空。"""

    name: str
    position: PlanetPosition | None
    profile: PlanetProfile | None
    timestamp: datetime
    source: str


class PlanetCategoryResponse(BaseModel):
    category: str
    planets: list[PlanetProfile]
    count: int
    timestamp: datetime
