"""Planetary profile service."""

from loguru import logger

from src.core.domain.ports.call_gateway import CallGateway
from src.modules.planets.domain.catalog import PLANET_PROFILES
from src.modules.planets.domain.entities import BodyCategory, PlanetProfile
from src.modules.planets.domain.exceptions import InvalidCategoryError
from src.modules.planets.domain.ports import SmallBodyLookup
from src.modules.settings.application.services import SettingsStore


class PlanetaryDataService:
    """天体档案查询。

    内置 NASA Fact Sheet 数据优先；未收录的天体在启用 JPL 数据源时查询 SBDB。
    """

    def __init__(
        self,
        small_body_lookup: SmallBodyLookup,
        gateway: CallGateway,
        settings_store: SettingsStore,
    ):
        self.small_body_lookup = small_body_lookup
        self.gateway = gateway
        self.settings_store = settings_store

    async def get_planet_profile(self, body_name: str) -> PlanetProfile | None:
        profile = PLANET_PROFILES.get(body_name.strip().lower())
        if profile is not None:
            return profile.model_copy()

        if not self.settings_store.get().data_source_preferences.use_jpl_horizons:
            return None

        try:
            return await self.gateway.enqueue(
                lambda: self.small_body_lookup.lookup(body_name),
                label=f"Fetch SBDB profile for {body_name}",
            )
        except Exception as e:
            logger.warning(f"Failed to fetch small-body profile for {body_name}: {e}")
            return None

    async def get_planets_by_category(self, category: str) -> list[PlanetProfile]:
        try:
            wanted = BodyCategory(category.lower())
        except ValueError as e:
            raise InvalidCategoryError(category) from e

        return [
            profile.model_copy()
            for profile in PLANET_PROFILES.values()
            if profile.category == wanted
        ]
