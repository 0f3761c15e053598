"""Planets module dependencies."""

from fastapi import Depends

from src.core.application.dependencies import get_call_gateway
from src.core.config import settings
from src.core.domain.ports.call_gateway import CallGateway
from src.modules.planets.application.ephemeris_service import EphemerisService
from src.modules.planets.application.planetary_data_service import (
    PlanetaryDataService,
)
from src.modules.planets.domain.ports import EphemerisProvider, SmallBodyLookup
from src.modules.planets.infrastructure.cache import PositionCache
from src.modules.planets.infrastructure.horizons import (
    HorizonsEphemerisProvider,
    StaticEphemerisProvider,
)
from src.modules.planets.infrastructure.sbdb import SBDBClient
from src.modules.settings.application.dependencies import get_settings_store
from src.modules.settings.application.services import SettingsStore

# 进程级位置缓存，所有请求共享
position_cache = PositionCache(ttl_sec=settings.EPHEMERIS_CACHE_TTL_SEC)


def get_position_cache() -> PositionCache:
    return position_cache


def get_ephemeris_provider() -> EphemerisProvider:
    if settings.EPHEMERIS_PROVIDER == "static":
        return StaticEphemerisProvider()
    return HorizonsEphemerisProvider()


def get_small_body_lookup() -> SmallBodyLookup:
    return SBDBClient()


async def get_ephemeris_service(
    provider: EphemerisProvider = Depends(get_ephemeris_provider),
    gateway: CallGateway = Depends(get_call_gateway),
    cache: PositionCache = Depends(get_position_cache),
    store: SettingsStore = Depends(get_settings_store),
) -> EphemerisService:
    return EphemerisService(provider, gateway, cache, store)


async def get_planetary_data_service(
    lookup: SmallBodyLookup = Depends(get_small_body_lookup),
    gateway: CallGateway = Depends(get_call_gateway),
    store: SettingsStore = Depends(get_settings_store),
) -> PlanetaryDataService:
    return PlanetaryDataService(lookup, gateway, store)
