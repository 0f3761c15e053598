"""JPL Small-Body Database 客户端。"""

from typing import Any

import httpx
from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import UpstreamError
from src.modules.planets.domain.entities import BodyCategory, PlanetProfile


class SBDBClient:
    """查询小行星/彗星等小天体的基本档案。

    查询不到（404 或返回多义列表）时返回 None；网络或服务错误抛出 UpstreamError。
    """

    LOOKUP_URL = "https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr={name}"

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.SBDB_API_URL
        self.timeout = timeout or settings.UPSTREAM_HTTP_TIMEOUT_SEC

    async def lookup(self, body_name: str) -> PlanetProfile | None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.base_url,
                    params={"sstr": body_name, "phys-par": "1"},
                )
                if response.status_code == httpx.codes.NOT_FOUND:
                    logger.info(f"SBDB has no object named {body_name}")
                    return None
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"SBDB HTTP {e.response.status_code} for {body_name}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"SBDB request failed for {body_name}: {e}") from e

        return self.parse_payload(body_name, payload)

    @classmethod
    def parse_payload(cls, body_name: str, payload: dict[str, Any]) -> PlanetProfile | None:
        obj = payload.get("object")
        if not isinstance(obj, dict):
            # 多义匹配（code 300）或未找到
            logger.info(f"SBDB lookup for {body_name} not unique: {payload.get('message')}")
            return None

        elements = {
            element.get("name"): element.get("value")
            for element in (payload.get("orbit") or {}).get("elements", [])
        }
        physical = {
            item.get("name"): item.get("value") for item in payload.get("phys_par") or []
        }
        kind = str(obj.get("kind", ""))

        return PlanetProfile(
            name=obj.get("shortname") or obj.get("fullname") or body_name,
            type="comet" if kind.startswith("c") else "asteroid",
            category=BodyCategory.ASTEROID,
            diameter=_to_float(physical.get("diameter")),
            orbital_period=_to_float(elements.get("per")),
            avg_distance=_to_float(elements.get("a")),
            composition=["Unknown"],
            source_url=cls.LOOKUP_URL.format(name=body_name),
        )


def _to_float(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0
