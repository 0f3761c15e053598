"""星历解析服务。

缓存优先；未命中时经网关请求外部星历，失败时回退到内置位置表。
对合法名称永不抛出异常，只有非法名称返回 None。
"""

import asyncio

from loguru import logger

from src.core.domain.validation import validate_body_name
from src.core.domain.ports.call_gateway import CallGateway
from src.core.infrastructure.logging import BusinessEvents
from src.modules.planets.domain.catalog import TRACKED_BODIES, fallback_position
from src.modules.planets.domain.entities import PlanetPosition
from src.modules.planets.domain.ports import EphemerisProvider
from src.modules.planets.infrastructure.cache import PositionCache
from src.modules.settings.application.services import SettingsStore


class EphemerisService:
    """Resolve body positions through cache, gateway and fallback table."""

    def __init__(
        self,
        provider: EphemerisProvider,
        gateway: CallGateway,
        cache: PositionCache,
        settings_store: SettingsStore,
    ):
        self.provider = provider
        self.gateway = gateway
        self.cache = cache
        self.settings_store = settings_store

    async def get_position(self, body_name: str) -> PlanetPosition | None:
        if not validate_body_name(body_name):
            logger.warning(f"Invalid body name: {body_name!r}")
            return None

        cached = self.cache.get(body_name)
        if cached is not None:
            logger.debug(f"Cache hit for planet position: {body_name}")
            return cached

        preferences = self.settings_store.get().data_source_preferences
        if not preferences.use_jpl_horizons:
            BusinessEvents.feature_degraded(
                feature="ephemeris", reason="JPL Horizons disabled in settings"
            )
            return fallback_position(body_name)

        logger.info(f"Fetching ephemeris data for {body_name}")
        try:
            position = await self.gateway.enqueue(
                lambda: self.provider.fetch_position(body_name),
                label=f"Fetch ephemeris for {body_name}",
            )
        except Exception as e:
            logger.warning(f"Failed to fetch ephemeris for {body_name}, using fallback: {e}")
            BusinessEvents.ephemeris_fallback_used(body=body_name.lower(), reason=str(e))
            return fallback_position(body_name)

        self.cache.put(body_name, position)
        return position

    async def get_all_positions(
        self, deadline_sec: float | None = None
    ) -> list[PlanetPosition]:
        """并发解析所有追踪天体，保持 TRACKED_BODIES 顺序。

        给定 deadline_sec 时，到期仍未解析的天体取消请求并使用内置位置。
        """
        logger.info("Fetching all planet positions")
        tasks = [
            asyncio.create_task(self.get_position(body)) for body in TRACKED_BODIES
        ]
        try:
            _, pending = await asyncio.wait(tasks, timeout=deadline_sec)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        positions: list[PlanetPosition | None] = []
        for body, task in zip(TRACKED_BODIES, tasks, strict=True):
            if task in pending:
                BusinessEvents.ephemeris_fallback_used(
                    body=body, reason=f"Request deadline of {deadline_sec:g}s exceeded"
                )
                positions.append(fallback_position(body))
            else:
                positions.append(task.result())
        return [position for position in positions if position is not None]

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Ephemeris cache cleared")
