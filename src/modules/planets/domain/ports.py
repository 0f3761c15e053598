"""Planet data ports."""

from typing import Protocol

from src.modules.planets.domain.entities import PlanetPosition, PlanetProfile


class EphemerisProvider(Protocol):
    """Port for fetching the current position of one body."""

    async def fetch_position(self, body_name: str) -> PlanetPosition: ...


class SmallBodyLookup(Protocol):
    """Port for looking up asteroid / dwarf-planet profiles."""

    async def lookup(self, body_name: str) -> PlanetProfile | None: ...
