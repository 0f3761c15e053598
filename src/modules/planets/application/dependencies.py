"""Planets module application dependencies."""

from typing import NoReturn

from src.modules.planets.application.ephemeris_service import EphemerisService
from src.modules.planets.application.planetary_data_service import (
    PlanetaryDataService,
)


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_ephemeris_service() -> EphemerisService:
    _missing_dependency("EphemerisService")


async def get_planetary_data_service() -> PlanetaryDataService:
    _missing_dependency("PlanetaryDataService")
